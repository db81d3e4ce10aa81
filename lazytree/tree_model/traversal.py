"""Forward-only, depth-limited pre-order walk over materialized nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import StaleTraversalError
from .types import TreeEntry

if TYPE_CHECKING:
    from .node import FileTree, TreeNode


class TreeTraversal:
    """Lazy sequence of visible entries for one tree generation.

    Only children that are already materialized are visited; the walk never
    loads anything. The root is yielded first at depth 0.
    """

    def __init__(self, tree: FileTree, depth_limit: int | None) -> None:
        self.tree = tree
        self.depth_limit = depth_limit
        self.generation = tree.generation
        self._stack: list[tuple[TreeNode, int]] = [(tree.root, 0)]
        self.closed = False

    def __iter__(self):
        return self

    def __next__(self) -> TreeEntry:
        entry = self.next()
        if entry is None:
            raise StopIteration
        return entry

    def next(self) -> TreeEntry | None:
        """Return the next entry, or ``None`` once exhausted or closed."""
        if self.closed:
            return None
        if self.tree.generation != self.generation:
            raise StaleTraversalError(self.tree.root.path)
        if not self._stack:
            return None

        node, depth = self._stack.pop()
        if self.depth_limit is None or depth < self.depth_limit:
            # Reverse so the first child is popped next.
            for child in reversed(node.loaded_children):
                self._stack.append((child, depth + 1))
        return TreeEntry(node=node, depth=depth, expanded=node.has_children())

    def close(self) -> None:
        self.closed = True
        self._stack.clear()
