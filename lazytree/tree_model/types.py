"""Datatypes shared by the tree model and the window buffer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .node import TreeNode


@dataclass(frozen=True)
class TreeEntry:
    """One visible node plus the structural metadata needed to format it.

    ``node`` is a reference into the live tree, not a copy. ``expanded`` is
    captured when the traversal visits the node.
    """

    node: "TreeNode"
    depth: int
    expanded: bool

    @property
    def path(self) -> Path:
        return self.node.path

    @property
    def is_dir(self) -> bool:
        return self.node.is_dir


@dataclass(frozen=True)
class DirectoryChild:
    """One directory child observed during a scan."""

    name: str
    path: Path
    is_dir: bool


__all__ = [
    "TreeEntry",
    "DirectoryChild",
]
