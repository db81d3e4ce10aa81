"""Inline render region below the shell prompt.

The browser draws in place rather than on the alternate screen, so it must
claim rows below the current cursor without overwriting what is above it.
When fewer than half of the terminal rows remain below the cursor, existing
content is scrolled up with newlines first.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator

from ..terminal import CursorPosition, TerminalController, TerminalSize

logger = logging.getLogger(__name__)


def adjusted_position(size: TerminalSize, position: CursorPosition) -> tuple[CursorPosition, int]:
    """Return the cursor position after making room, plus the scroll shift.

    When no more than half the terminal height remains below the cursor,
    the returned shift is the number of newlines to emit and rendering
    starts ``shift`` rows above the bottom edge. That row is never above
    where the prompt row ends up after the newlines, so nothing already on
    screen is overwritten. Terminals shorter than three rows clamp to row 1.
    """
    min_rows = size.rows // 2
    rows_below = size.rows - position.row
    if rows_below > min_rows:
        return position, 0

    shift = min_rows - rows_below + 1
    return CursorPosition(row=max(1, size.rows - shift), col=position.col), shift


def start_row_for(size: TerminalSize, position: CursorPosition, visible_rows: int) -> int:
    """Return the first terminal row of the render region."""
    if position.row + visible_rows > size.rows:
        # Unreachable after adjustment: visible_rows is derived from position.
        logger.error(
            "render region overflows terminal: size=%s position=%s rows=%d",
            size,
            position,
            visible_rows,
        )
        assert position.row + visible_rows <= size.rows, "viewport adjustment left too few rows"
        return max(1, size.rows - visible_rows)
    return position.row


class Viewport:
    """Terminal geometry snapshot and the derived render region."""

    def __init__(self, terminal: TerminalController) -> None:
        self.terminal = terminal
        self.size = TerminalSize(cols=0, rows=0)
        self.position = CursorPosition(row=1, col=1)
        self.rows = 0
        self.start_row = 1

    def setup(self) -> None:
        """Query the terminal and claim the rows below the cursor."""
        self.size = self.terminal.get_size()
        position, shift = adjusted_position(self.size, self.terminal.get_cursor_position())
        if shift:
            self.terminal.write("\n" * shift)
        self.position = position
        self.rows = max(0, self.size.rows - position.row)
        self.start_row = start_row_for(self.size, position, self.rows)
        logger.debug(
            "viewport bounds size=%s position=%s rows=%d start_row=%d shift=%d",
            self.size,
            self.position,
            self.rows,
            self.start_row,
            shift,
        )


@contextlib.contextmanager
def viewport_session(terminal: TerminalController) -> Iterator[Viewport]:
    """Enter raw mode, set up the viewport, and always restore the terminal."""
    with terminal.raw_mode():
        viewport = Viewport(terminal)
        viewport.setup()
        yield viewport
