"""Sliding window over entries pulled lazily from a tree traversal.

Everything pulled is retained, so scrolling back never re-queries the tree.
The traversal is only advanced when the cursor moves past the last pulled
entry. ``first``/``last`` index the on-screen range inside ``entries``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..tree_model import TreeEntry, TreeTraversal

logger = logging.getLogger(__name__)


class WindowBuffer:
    """Append-only entry record plus the visible ``[first, last]`` range."""

    def __init__(self, open_traversal: Callable[[], TreeTraversal], rows: int) -> None:
        self.open_traversal = open_traversal
        self.rows = max(1, rows)
        self.entries: list[TreeEntry] = []
        self.first = 0
        self.last = 0
        self._traversal: TreeTraversal | None = None

    def close(self) -> None:
        """Release the open traversal, if any."""
        if self._traversal is not None:
            self._traversal.close()
            self._traversal = None

    def _pull(self) -> TreeEntry | None:
        if self._traversal is None:
            return None
        entry = self._traversal.next()
        if entry is None:
            return None
        self.entries.append(entry)
        return entry

    def refill(self, anchor: int = 0) -> None:
        """Rebuild the buffer from a fresh traversal.

        Pulls until the window starting at ``anchor`` is covered or the
        traversal runs out. When it runs out early the window is pulled back
        so it stays full. If the traversal cannot be opened the current
        entries are kept and ``TreeAccessFailure`` propagates.
        """
        self.close()
        self._traversal = self.open_traversal()
        self.entries = []

        target_last = max(0, anchor) + self.rows - 1
        while len(self.entries) <= target_last:
            if self._pull() is None:
                break

        self.last = max(0, len(self.entries) - 1)
        self.first = max(0, self.last - self.rows + 1)
        logger.debug("refill anchor=%d pulled=%d window=[%d, %d]", anchor, len(self.entries), self.first, self.last)

    def reconcile(self, cursor: int) -> int:
        """Slide the window by at most one entry so it contains ``cursor``.

        Returns the cursor, clamped to ``last`` when the traversal is
        exhausted and there is nothing further to show.
        """
        if cursor > self.last:
            if self.last + 1 < len(self.entries) or self._pull() is not None:
                self.first += 1
                self.last += 1
            else:
                cursor = self.last
        elif cursor < self.first:
            self.first -= 1
            self.last -= 1
        return cursor

    def visible(self) -> list[tuple[int, TreeEntry]]:
        """Return ``(index, entry)`` pairs for the on-screen range."""
        if not self.entries:
            return []
        last = min(self.last, len(self.entries) - 1)
        return [(idx, self.entries[idx]) for idx in range(self.first, last + 1)]

    def entry_at(self, index: int) -> TreeEntry | None:
        if 0 <= index < len(self.entries):
            return self.entries[index]
        return None
