"""Session bootstrap for the interactive browser.

Builds the tree, terminal controller, viewport and window buffer, then hands
control to ``run_main_loop``. Raw mode is scoped to ``viewport_session``.
"""

from __future__ import annotations

import logging
import sys
from functools import partial
from pathlib import Path

from ..input import read_action
from ..terminal import TerminalController
from ..tree_model import FileTree, format_tree_entry
from ..ui_theme import UITheme
from .loop import BrowserState, RuntimeLoopCallbacks, run_main_loop, toggle_entry_children
from .viewport import viewport_session
from .window import WindowBuffer

logger = logging.getLogger(__name__)


def run_browser(
    root: Path,
    theme: UITheme,
    show_hidden: bool = False,
    max_depth: int | None = None,
) -> None:
    """Browse ``root`` interactively until the user quits.

    Raises ``TreeAccessFailure`` when the root cannot be listed and
    ``TerminalUnavailable`` when stdin/stdout are not a usable terminal.
    """
    tree = FileTree(root, show_hidden=show_hidden)
    tree.root.children()

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    callbacks = RuntimeLoopCallbacks(
        read_action=partial(read_action, stdin_fd),
        format_entry=partial(format_tree_entry, theme=theme),
        toggle_entry=toggle_entry_children,
    )

    with viewport_session(terminal) as viewport:
        window = WindowBuffer(partial(tree.open_traversal, max_depth), viewport.rows)
        try:
            run_main_loop(BrowserState(), terminal, viewport, window, callbacks, theme)
        finally:
            window.close()
    logger.debug("session for %s finished", tree.root.path)
