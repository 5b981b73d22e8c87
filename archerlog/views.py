"""Row filters and display helpers for the path list and the session tree views."""

from __future__ import annotations

import os
from typing import Optional

from archerlog.filemanager import ATTRIBUTE_DIR, PARENTNODE_PATH
from archerlog.treemodel import ModelIndex, TreeModel
from archerlog.treenode import TreeNode

_SESSION_NODES = ("sessions", "session")


def path_row_accepted(model: Optional[TreeModel], source_row: int, source_parent: ModelIndex) -> bool:
    """Show the directories element and the rows beneath it."""
    if model is None:
        return False
    node = model.node_from_index(model.index(source_row, 0, source_parent))
    if node.name() == PARENTNODE_PATH:
        return True
    return model.node_from_index(source_parent).name() == PARENTNODE_PATH


def path_display(node: TreeNode) -> Optional[str]:
    """Text shown for a path row: its directory."""
    return node.attribute(ATTRIBUTE_DIR)


def path_exists(node: TreeNode) -> bool:
    """Whether the row's directory exists; rows for missing ones are greyed out."""
    return os.path.isdir(node.attribute(ATTRIBUTE_DIR) or ".")


def series_row_accepted(model: Optional[TreeModel], source_row: int, source_parent: ModelIndex) -> bool:
    """Show the sessions element and rows within the sessions and each session."""
    if model is None:
        return True
    if source_parent.is_valid():
        row_index = source_parent
    else:
        row_index = model.index(source_row, 0, source_parent)
    return model.node_from_index(row_index).name() in _SESSION_NODES


def series_display_text(node: TreeNode, text: str) -> str:
    """Append the node's date to ``text`` when it has one."""
    if node.has_attribute("DateTime"):
        return f"{text} ({node.attribute('DateTime')})"
    return text