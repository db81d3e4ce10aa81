"""Mutable filesystem tree with lazily materialized children.

A directory's children exist in memory only after ``children()`` was called
and until ``free_children()`` drops them. Every mutation bumps the owning
tree's generation so open traversals can detect that they went stale.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import TreeAccessFailure
from .fs import list_directory_children
from .traversal import TreeTraversal

logger = logging.getLogger(__name__)


class TreeNode:
    """One file or directory in a ``FileTree``."""

    def __init__(self, tree: FileTree, path: Path, is_dir: bool, parent: TreeNode | None = None) -> None:
        self.tree = tree
        self.path = path
        self.is_dir = is_dir
        self.parent = parent
        self._children: list[TreeNode] | None = None

    def __repr__(self) -> str:
        return f"TreeNode({str(self.path)!r}, is_dir={self.is_dir})"

    @property
    def name(self) -> str:
        return self.path.name or str(self.path)

    @property
    def loaded_children(self) -> list[TreeNode]:
        """Materialized children, empty when collapsed."""
        return self._children or []

    def has_children(self) -> bool:
        """Return whether children are currently materialized."""
        return self._children is not None

    def children(self) -> list[TreeNode]:
        """Materialize and return children, scanning the directory on first use.

        Raises ``TreeAccessFailure`` for files and unreadable directories.
        """
        if self._children is not None:
            return self._children
        if not self.is_dir:
            raise TreeAccessFailure(self.path, f"Not a directory: {self.path}")

        listed, scan_error = list_directory_children(self.path, self.tree.show_hidden)
        if scan_error is not None:
            raise TreeAccessFailure(self.path, f"Cannot read directory {self.path}: {scan_error}") from scan_error

        self._children = [TreeNode(self.tree, child.path, child.is_dir, parent=self) for child in listed]
        self.tree.mark_mutated()
        logger.debug("expanded %s (%d children)", self.path, len(self._children))
        return self._children

    def free_children(self, depth_limit: int | None = None) -> None:
        """Drop materialized descendants.

        With ``depth_limit=None`` (or ``<= 0``) this node's children are
        freed. A positive limit keeps that many materialized levels below
        this node and frees everything deeper.
        """
        if self._children is None:
            return
        if depth_limit is not None and depth_limit > 0:
            for child in self._children:
                child.free_children(depth_limit - 1)
            return

        for child in self._children:
            child.free_children()
        self._children = None
        self.tree.mark_mutated()
        logger.debug("collapsed %s", self.path)


class FileTree:
    """Root node plus a mutation counter shared by all nodes."""

    def __init__(self, root: Path, show_hidden: bool = False) -> None:
        self.show_hidden = show_hidden
        self.generation = 0
        self.root = TreeNode(self, root.resolve(), is_dir=True)

    def mark_mutated(self) -> None:
        self.generation += 1

    def open_traversal(self, depth_limit: int | None = None) -> TreeTraversal:
        """Open a forward-only walk over currently visible nodes."""
        if depth_limit is not None and depth_limit < 0:
            raise TreeAccessFailure(self.root.path, f"Invalid traversal depth limit: {depth_limit}")
        return TreeTraversal(self, depth_limit)
