"""Tree of XML elements with parent links, child lists and typed attributes."""

from __future__ import annotations

import copy
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterator, Optional, Union

AttributeValue = Union[str, int, float, bool]
PathLike = Union[str, "os.PathLike[str]"]

_EMPTY_DOCUMENT = '<?xml version="1.0"?>\n'


def _format_value(value: AttributeValue) -> str:
    """Render an attribute value the way the XML store keeps it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format(value, ".17g")
    return str(value)


class TreeNode:
    """A node of the data tree, backed by an XML element.

    A node built without a parent is a root: it stands for the document
    element and is the only node that reads and writes files. A root built
    without an element holds an empty, unnamed document element.
    """

    def __init__(self, element: Optional[ET.Element] = None, parent: Optional["TreeNode"] = None):
        self.parent = parent
        self.is_new = False
        self._set_element(element if element is not None else ET.Element(""))

    def _set_element(self, element: ET.Element) -> None:
        self._element = element
        self._children = [TreeNode(child, self) for child in element]

    def __repr__(self) -> str:
        return f"TreeNode({self.name()!r}, children={len(self._children)})"

    def __iter__(self) -> Iterator["TreeNode"]:
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    # basic methods

    def name(self) -> str:
        """Element name; empty for an empty document."""
        return self._element.tag

    def index(self) -> int:
        """Row of this node among its parent's children; -1 for a root."""
        if self.parent is None:
            return -1
        for row, sibling in enumerate(self.parent._children):
            if sibling is self:
                return row
        return -1

    def root(self) -> "TreeNode":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def read_file(self, path: PathLike) -> bool:
        """Replace the tree with the document in ``path``.

        Returns True when a document element was loaded. A missing file leaves
        the tree untouched; an unparsable one leaves an empty document.
        """
        if self.parent is not None:
            raise ValueError("only a root node can read a file")
        path = Path(path)
        if not path.is_file():
            return False
        try:
            element = ET.parse(path).getroot()
        except ET.ParseError:
            element = ET.Element("")
        self._set_element(element)
        return element.tag != ""

    def write_file(self, path: PathLike) -> None:
        """Write the tree to ``path``, indented by two spaces."""
        if self.parent is not None:
            raise ValueError("only a root node can write a file")
        if self._element.tag == "":
            Path(path).write_text(_EMPTY_DOCUMENT, encoding="utf-8")
            return
        element = copy.deepcopy(self._element)
        ET.indent(element, space="  ")
        ET.ElementTree(element).write(path, encoding="utf-8", xml_declaration=True)

    # attributes

    def attributes(self) -> list[str]:
        return list(self._element.attrib)

    def attribute(self, name: str) -> Optional[str]:
        """Value of attribute ``name``, or None if absent."""
        return self._element.attrib.get(name)

    def has_attribute(self, name: str) -> bool:
        return name in self._element.attrib

    def set_attribute(self, name: str, value: AttributeValue) -> None:
        self._element.set(name, _format_value(value))

    def remove_attribute(self, name: str) -> None:
        try:
            del self._element.attrib[name]
        except KeyError:
            raise KeyError(f"node {self.name()!r} has no attribute {name!r}") from None

    def inherited_attribute(
        self,
        name: str,
        check_parents: int = -1,
        oldest_ancestor: Optional[str] = None,
    ) -> Optional[str]:
        """Value of ``name`` on this node or the nearest ancestor having it.

        With ``oldest_ancestor`` the search stops at the first node of that
        name; otherwise it climbs at most ``check_parents`` levels (all of
        them when -1).
        """
        node: Optional[TreeNode] = self
        if oldest_ancestor is not None:
            while node is not None:
                if node.has_attribute(name):
                    return node.attribute(name)
                if node.name() == oldest_ancestor:
                    break
                node = node.parent
            return None
        while node is not None:
            if node.has_attribute(name):
                return node.attribute(name)
            node = node.parent
            if check_parents == 0:
                break
            check_parents -= 1
        return None

    def inherited_attribute_level(self, name: str, check_parents: int = -1) -> Optional[int]:
        """Number of levels up to the node holding ``name``, or None."""
        level = 0
        node: Optional[TreeNode] = self
        while node is not None and (check_parents == -1 or level <= check_parents):
            if node.has_attribute(name):
                return level
            level += 1
            node = node.parent
        return None

    def inherited_attribute_owner(self, name: str, oldest_ancestor: Optional[str] = None) -> Optional[str]:
        """Name of the nearest node holding ``name``, not looking past ``oldest_ancestor``."""
        node: Optional[TreeNode] = self
        while node is not None:
            if node.has_attribute(name):
                return node.name()
            if oldest_ancestor is not None and node.name() == oldest_ancestor:
                break
            node = node.parent
        return None

    # children

    def children(self, name: Optional[str] = None) -> list["TreeNode"]:
        """Direct children, optionally only those called ``name``."""
        if name is None:
            return list(self._children)
        return [child for child in self._children if child.name() == name]

    def child(self, index: int) -> Optional["TreeNode"]:
        """Child at ``index``, or None when out of range."""
        if 0 <= index < len(self._children):
            return self._children[index]
        return None

    def child_named(self, name: str, index: int = 0) -> Optional["TreeNode"]:
        """The ``index``-th child called ``name``, or None."""
        matches = self.children(name)
        if 0 <= index < len(matches):
            return matches[index]
        return None

    def _insert_element(self, element: ET.Element, index: int) -> "TreeNode":
        if index < 0 or index >= len(self._children):
            index = len(self._children)
        self._element.insert(index, element)
        node = TreeNode(element, self)
        self._children.insert(index, node)
        return node

    def add_child(self, name: str, index: int = -1) -> "TreeNode":
        """Create a child called ``name`` before the ``index``-th child, or at the end."""
        return self._insert_element(ET.Element(name), index)

    def insert_child(self, child: "TreeNode", index: int = -1) -> "TreeNode":
        """Insert a copy of ``child`` and its subtree; returns the new node."""
        return self._insert_element(copy.deepcopy(child._element), index)

    def remove_child(self, index: int = -1) -> None:
        """Remove the ``index``-th child; the last one by default."""
        node = self._children.pop(index)
        self._element.remove(node._element)
        node.parent = None