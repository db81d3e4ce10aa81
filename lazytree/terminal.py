"""Terminal control helpers for the inline tree session.

Owns the raw-mode lifecycle plus the size and cursor-position queries.
Drawing primitives write escape sequences straight to the stdout descriptor.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import select
import termios
import tty
from dataclasses import dataclass

from .errors import IOWriteFailure, TerminalUnavailable

logger = logging.getLogger(__name__)

RESET = "\033[0m"
CURSOR_REPORT_TIMEOUT_MS = 500
_CURSOR_REPORT_RE = re.compile(rb"\x1b\[(\d+);(\d+)R")
_CURSOR_REPORT_MAX_BYTES = 32


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions in character cells."""

    cols: int
    rows: int


@dataclass(frozen=True)
class CursorPosition:
    """1-based cursor location as reported by the terminal."""

    row: int
    col: int


class TerminalController:
    """Manage raw mode and draw rows at absolute terminal positions."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalUnavailable(f"stdin is not a terminal: {exc}") from exc
        self._raw_mode_enabled = False

    def enable_raw_mode(self) -> None:
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            raise TerminalUnavailable(f"cannot enable raw mode: {exc}") from exc
        self._raw_mode_enabled = True

    def disable_raw_mode(self) -> None:
        """Restore the tty attributes captured at construction."""
        if not self._raw_mode_enabled:
            return
        self._raw_mode_enabled = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with raw-mode enter/exit calls."""
        try:
            self.enable_raw_mode()
            yield
        finally:
            self.disable_raw_mode()

    def get_size(self) -> TerminalSize:
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError as exc:
            raise TerminalUnavailable(f"cannot query terminal size: {exc}") from exc
        return TerminalSize(cols=size.columns, rows=size.lines)

    def get_cursor_position(self, timeout_ms: int = CURSOR_REPORT_TIMEOUT_MS) -> CursorPosition:
        """Ask the terminal for a cursor position report (DSR 6).

        Requires raw mode so the reply is neither echoed nor line-buffered.
        """
        try:
            os.write(self.stdout_fd, b"\x1b[6n")
        except OSError as exc:
            raise TerminalUnavailable(f"cannot request cursor position: {exc}") from exc

        reply = b""
        while not reply.endswith(b"R"):
            ready, _, _ = select.select([self.stdin_fd], [], [], timeout_ms / 1000.0)
            if not ready:
                raise TerminalUnavailable("terminal did not report cursor position")
            chunk = os.read(self.stdin_fd, 1)
            if not chunk:
                raise TerminalUnavailable("stdin closed while reading cursor position")
            reply += chunk
            if len(reply) > _CURSOR_REPORT_MAX_BYTES:
                break

        match = _CURSOR_REPORT_RE.search(reply)
        if match is None:
            raise TerminalUnavailable(f"malformed cursor position report: {reply!r}")
        return CursorPosition(row=int(match.group(1)), col=int(match.group(2)))

    def write(self, text: str) -> None:
        data = text.encode("utf-8")
        try:
            while data:
                written = os.write(self.stdout_fd, data)
                data = data[written:]
        except OSError as exc:
            raise IOWriteFailure(f"terminal write failed: {exc}") from exc

    def move_cursor(self, row: int, col: int) -> None:
        self.write(f"\x1b[{max(1, row)};{max(1, col)}H")

    def hide_cursor(self) -> None:
        self.write("\x1b[?25l")

    def show_cursor(self) -> None:
        self.write("\x1b[?25h")

    def clear_lines_below(self, row: int) -> None:
        """Erase from the start of ``row`` to the end of the screen."""
        self.move_cursor(row, 1)
        self.write("\x1b[J")

    def println(self, line: str, style: str = "") -> None:
        """Write one styled row followed by CR/LF.

        ``style`` is re-applied after every reset embedded in ``line`` so the
        whole row keeps it.
        """
        if style:
            line = style + line.replace(RESET, RESET + style) + RESET
        elif "\033[" in line and not line.endswith(RESET):
            line += RESET
        self.write(line + "\r\n")
