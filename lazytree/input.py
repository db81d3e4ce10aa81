"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens,
then maps those tokens onto the browser's small action vocabulary.
"""

from __future__ import annotations

import enum
import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []


class Action(enum.Enum):
    """Decoded user intent consumed by the interaction loop."""

    QUIT = "quit"
    UP = "up"
    DOWN = "down"
    SELECT = "select"
    UNKNOWN = "unknown"


KEY_ACTIONS: dict[str, Action] = {
    "q": Action.QUIT,
    "ESC": Action.QUIT,
    "CTRL_C": Action.QUIT,
    "EOF": Action.QUIT,
    "UP": Action.UP,
    "k": Action.UP,
    "DOWN": Action.DOWN,
    "j": Action.DOWN,
    "ENTER": Action.SELECT,
    " ": Action.SELECT,
    "o": Action.SELECT,
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token, blocking unless ``timeout_ms`` is given.

    Returns ``""`` on timeout and ``"EOF"`` when the input stream is closed.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return "EOF"

    if ch == b"\x03":
        return "CTRL_C"
    if ch in {b"\r", b"\n"}:
        return "ENTER"
    if ch == b"\t":
        return "TAB"
    if ch in {b"\x08", b"\x7f"}:
        return "BACKSPACE"

    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"A":
        return "UP"
    if seq == b"B":
        return "DOWN"
    if seq == b"C":
        return "RIGHT"
    if seq == b"D":
        return "LEFT"
    # Drain the remainder of an unrecognized CSI sequence up to its final byte.
    while not (b"@" <= seq <= b"~"):
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            break
    return "UNKNOWN"


def action_for_key(key: str) -> Action:
    return KEY_ACTIONS.get(key, Action.UNKNOWN)


def read_action(fd: int) -> Action:
    """Block for one key and decode it into an ``Action``."""
    return action_for_key(read_key(fd))
