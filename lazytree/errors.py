"""Error kinds raised at the terminal and tree-model seams.

The runtime loop only recovers from ``TreeAccessFailure``; everything else
propagates so the terminal is restored and the failure stays visible.
"""

from __future__ import annotations


class LazyTreeError(Exception):
    """Base exception for lazytree errors."""

    pass


class TerminalUnavailable(LazyTreeError):
    """Raised when raw mode, size, or cursor-position queries fail."""

    pass


class IOWriteFailure(LazyTreeError):
    """Raised when drawing to the terminal fails."""

    pass


class TreeAccessFailure(LazyTreeError):
    """Raised when a node cannot be expanded or a traversal cannot proceed."""

    def __init__(self, path, message=None):
        self.path = path
        super().__init__(message or f"Cannot access tree node: {path}")


class StaleTraversalError(TreeAccessFailure):
    """Raised when a traversal is advanced after the tree was mutated."""

    def __init__(self, path):
        super().__init__(path, f"Traversal is stale after tree mutation: {path}")
