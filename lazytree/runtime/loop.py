"""Main interactive loop for the inline tree browser.

One frame: rebuild the window if the tree changed, reconcile the cursor,
draw the visible rows, block for one recognized action, apply it, and clear
the render region for the next frame.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..ansi import clip_ansi_line, strip_ansi
from ..errors import IOWriteFailure, TreeAccessFailure
from ..input import Action
from ..terminal import TerminalController
from ..tree_model import TreeEntry
from ..ui_theme import DEFAULT_THEME, UITheme
from .viewport import Viewport
from .window import WindowBuffer

logger = logging.getLogger(__name__)


@dataclass
class BrowserState:
    """Mutable per-session state carried between frames."""

    cursor: int = 0
    needs_refill: bool = True


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    read_action: Callable[[], Action]
    format_entry: Callable[[TreeEntry], str]
    toggle_entry: Callable[[TreeEntry], None]


def toggle_entry_children(entry: TreeEntry) -> None:
    """Collapse a materialized node, otherwise load its children."""
    node = entry.node
    if node.has_children():
        node.free_children(None)
    else:
        node.children()


def prepare_frame(state: BrowserState, window: WindowBuffer) -> None:
    """Rebuild the buffer after a tree mutation and restore cursor containment."""
    if state.needs_refill:
        state.needs_refill = False
        try:
            window.refill(anchor=window.first)
        except TreeAccessFailure as exc:
            logger.warning("cannot rebuild tree view: %s", exc)
    try:
        state.cursor = window.reconcile(state.cursor)
    except TreeAccessFailure as exc:
        logger.warning("cannot advance tree traversal: %s", exc)


def draw_frame(
    state: BrowserState,
    terminal: TerminalController,
    viewport: Viewport,
    window: WindowBuffer,
    format_entry: Callable[[TreeEntry], str],
    theme: UITheme = DEFAULT_THEME,
) -> None:
    terminal.move_cursor(viewport.start_row, 1)
    max_cols = max(1, viewport.size.cols)
    for idx, entry in window.visible():
        line = format_entry(entry)
        if idx == state.cursor:
            # The cursor color must win over per-entry colors.
            terminal.println(clip_ansi_line(strip_ansi(line), max_cols), theme.cursor)
        else:
            terminal.println(clip_ansi_line(line, max_cols))


def apply_action(
    state: BrowserState,
    action: Action,
    window: WindowBuffer,
    toggle_entry: Callable[[TreeEntry], None],
) -> bool:
    """Apply one action to the state; return ``True`` when the loop should quit."""
    if action is Action.QUIT:
        return True
    if action is Action.DOWN:
        state.cursor += 1
    elif action is Action.UP:
        state.cursor = max(0, state.cursor - 1)
    elif action is Action.SELECT:
        entry = window.entry_at(state.cursor)
        if entry is None:
            return False
        try:
            toggle_entry(entry)
        except TreeAccessFailure as exc:
            logger.warning("cannot toggle %s: %s", entry.path, exc)
            return False
        state.needs_refill = True
    return False


def await_action(read_action: Callable[[], Action]) -> Action:
    """Block until a recognized action arrives; unknown input is dropped."""
    while True:
        action = read_action()
        if action is not Action.UNKNOWN:
            return action


def run_main_loop(
    state: BrowserState,
    terminal: TerminalController,
    viewport: Viewport,
    window: WindowBuffer,
    callbacks: RuntimeLoopCallbacks,
    theme: UITheme = DEFAULT_THEME,
) -> None:
    """Run frames until a quit action; terminal errors propagate."""
    write_failed = False
    terminal.hide_cursor()
    try:
        while True:
            prepare_frame(state, window)
            draw_frame(state, terminal, viewport, window, callbacks.format_entry, theme)
            action = await_action(callbacks.read_action)
            if apply_action(state, action, window, callbacks.toggle_entry):
                logger.debug("quit requested at cursor=%d", state.cursor)
                break
            terminal.clear_lines_below(viewport.start_row)
    except IOWriteFailure:
        write_failed = True
        raise
    finally:
        try:
            terminal.show_cursor()
        except IOWriteFailure as exc:
            # The first write failure is the one reported.
            if not write_failed:
                raise
            logger.debug("cannot restore cursor visibility: %s", exc)
