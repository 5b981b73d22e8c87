"""Item model presenting a tree of nodes as rows and columns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from archerlog.treenode import PathLike, TreeNode


@dataclass(frozen=True)
class ModelIndex:
    """Position of a node in a model: row, column and the node itself."""

    row: int = -1
    column: int = -1
    node: Optional[TreeNode] = field(default=None, compare=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModelIndex):
            return NotImplemented
        return self.row == other.row and self.column == other.column and self.node is other.node

    def __hash__(self) -> int:
        return hash((self.row, self.column, id(self.node)))

    def is_valid(self) -> bool:
        return self.row >= 0 and self.column >= 0 and self.node is not None


_INVALID = ModelIndex()


class TreeModel:
    """Tree of nodes exposed as rows; columns show names or attribute values.

    With no headers there is a single column holding node names. With
    headers, each column shows the attribute named by its header. A non-empty
    ``element_header`` makes the first column show node names under that title.
    """

    def __init__(self) -> None:
        self._root = TreeNode()
        self.headers: list[str] = []
        self.element_header = ""
        self.file_opened: list[Callable[[], None]] = []

    def root(self) -> TreeNode:
        return self._root

    @property
    def show_items_in_first_column(self) -> bool:
        return bool(self.element_header)

    def set_headers(self, headers: Sequence[str]) -> None:
        self.headers = list(headers)

    # item model interface

    def header_data(self, section: int) -> Optional[str]:
        """Title of column ``section``."""
        shift = int(self.show_items_in_first_column)
        if shift and section == 0:
            return self.element_header
        if not self.headers:
            return None
        return self.headers[section - shift]

    def index(self, row: int, column: int = 0, parent: ModelIndex = _INVALID) -> ModelIndex:
        """Index of the item at ``row``/``column`` under ``parent``; invalid if out of range."""
        if not (0 <= row < self.row_count(parent) and 0 <= column < self.column_count(parent)):
            return ModelIndex()
        child = self.node_from_index(parent).child(row)
        if child is None:
            return ModelIndex()
        return ModelIndex(row, column, child)

    def parent(self, index: ModelIndex) -> ModelIndex:
        """Index of the parent of ``index``; invalid for top-level items."""
        if not index.is_valid():
            return ModelIndex()
        parent_node = index.node.parent
        if parent_node is None or parent_node is self._root:
            return ModelIndex()
        return ModelIndex(parent_node.index(), 0, parent_node)

    def row_count(self, parent: ModelIndex = _INVALID) -> int:
        return len(self.node_from_index(parent).children())

    def column_count(self, parent: ModelIndex = _INVALID) -> int:
        return len(self.headers) or 1

    def data(self, index: ModelIndex) -> Optional[str]:
        """Text shown for ``index``: a node name or an attribute value."""
        if not index.is_valid():
            return None
        node = index.node
        shift = int(self.show_items_in_first_column)
        if shift and index.column == 0:
            return node.name()
        if not self.headers:
            return node.name()
        return node.attribute(self.headers[index.column - shift])

    def remove_rows(self, row: int, count: int, parent: ModelIndex = _INVALID) -> None:
        """Remove ``count`` rows starting at ``row`` under ``parent``."""
        parent_node = self.node_from_index(parent)
        if row < 0 or count < 0 or row + count > len(parent_node):
            raise IndexError(f"rows {row}..{row + count - 1} out of range")
        for _ in range(count):
            parent_node.remove_child(row)

    def _move_allowed(
        self,
        source_node: TreeNode,
        first: int,
        last: int,
        destination_node: TreeNode,
        destination_child: int,
    ) -> bool:
        if first < 0 or last < first or last >= len(source_node) or destination_child < 0:
            return False
        if source_node is destination_node and first <= destination_child <= last + 1:
            return False
        node: Optional[TreeNode] = destination_node
        while node is not None:
            if node.parent is source_node and first <= node.index() <= last:
                return False
            node = node.parent
        return True

    def move_rows(
        self,
        source_parent: ModelIndex,
        source_row: int,
        count: int,
        destination_parent: ModelIndex,
        destination_child: int,
    ) -> bool:
        """Move ``count`` rows to ``destination_child`` under ``destination_parent``.

        Within one parent a downward move shifts the rows down by one place.
        Returns False when the move is not possible.
        """
        source_node = self.node_from_index(source_parent)
        destination_node = self.node_from_index(destination_parent)
        source_last = source_row + count - 1
        delete_from = source_row
        increment = 0
        if source_node is destination_node:
            if source_row > destination_child:
                delete_from = source_row + count
                increment = 1
            elif source_row == destination_child:
                return True
            elif source_last + 1 <= destination_child:
                destination_child = source_last + 2

        if not self._move_allowed(source_node, source_row, source_last, destination_node, destination_child):
            return False

        for i in range(count):
            moved = source_node.child(i + source_row + increment * i)
            destination_node.insert_child(moved, i + destination_child)
        for _ in range(count):
            source_node.remove_child(delete_from)
        return True

    def move_down(self, index: ModelIndex) -> bool:
        """Move an item down by one; the last item goes to the start of the next parent."""
        parent = self.parent(index)
        if index.row == self.row_count(parent) - 1:
            if not parent.is_valid() or parent.row == self.row_count(self.parent(parent)) - 1:
                return False
            new_parent = self.index(parent.row + 1, 0, self.parent(parent))
            new_row = 0
        else:
            new_parent = parent
            new_row = index.row + 1
        return self.move_rows(parent, index.row, 1, new_parent, new_row)

    def move_up(self, index: ModelIndex) -> bool:
        """Move an item up by one; the first item goes to the end of the previous parent."""
        parent = self.parent(index)
        if index.row == 0:
            if not parent.is_valid() or parent.row == 0:
                return False
            new_parent = self.index(parent.row - 1, 0, self.parent(parent))
            new_row = self.row_count(new_parent)
        else:
            new_parent = parent
            new_row = index.row - 1
        return self.move_rows(parent, index.row, 1, new_parent, new_row)

    # other functionality

    def insert_element(self, name: str, parent: ModelIndex = _INVALID, row: int = -1) -> ModelIndex:
        """Insert an element called ``name`` at ``row`` under ``parent``; append when ``row`` is negative."""
        if row < 0:
            row = self.row_count(parent)
        self.node_from_index(parent).add_child(name, row)
        return self.index(row, 0, parent)

    def clear(self, include_root: bool = False) -> None:
        """Drop the whole tree, or the children of the first top-level item."""
        if include_root:
            self._root = TreeNode()
            return
        root_index = self.index(0, 0)
        self.remove_rows(0, self.row_count(root_index), root_index)

    def read_file(self, path: PathLike) -> bool:
        """Load the tree from ``path``; listeners in ``file_opened`` run on success."""
        ok = self._root.read_file(path)
        if ok:
            for listener in self.file_opened:
                listener()
        return ok

    def write_file(self, path: PathLike) -> None:
        self._root.write_file(path)

    def node_from_index(self, index: ModelIndex) -> TreeNode:
        """Node behind ``index``; the root for an invalid index."""
        if not index.is_valid():
            return self._root
        return index.node

    def index_from_node(self, node: TreeNode) -> ModelIndex:
        return ModelIndex(node.index(), 0, node)