"""Filesystem tree model, traversal, and row formatting.

Defines lazily materialized ``TreeNode`` objects owned by a ``FileTree``,
the forward-only ``TreeTraversal`` over them, and ``format_tree_entry``.
"""

from __future__ import annotations

from .fs import list_directory_children
from .node import FileTree, TreeNode
from .rendering import file_color_for, format_tree_entry, is_source_filename
from .traversal import TreeTraversal
from .types import DirectoryChild, TreeEntry

__all__ = [
    "DirectoryChild",
    "FileTree",
    "TreeEntry",
    "TreeNode",
    "TreeTraversal",
    "file_color_for",
    "format_tree_entry",
    "is_source_filename",
    "list_directory_children",
]
