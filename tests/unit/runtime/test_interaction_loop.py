"""Interaction loop frames: drawing, action handling, and refill on mutation."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from lazytree.errors import IOWriteFailure, TreeAccessFailure
from lazytree.input import Action
from lazytree.runtime.loop import (
    BrowserState,
    RuntimeLoopCallbacks,
    apply_action,
    prepare_frame,
    run_main_loop,
    toggle_entry_children,
)
from lazytree.runtime.viewport import Viewport
from lazytree.runtime.window import WindowBuffer
from lazytree.terminal import TerminalSize
from lazytree.tree_model import FileTree
from lazytree.ui_theme import DEFAULT_THEME


class _FakeTerminal:
    def __init__(self, fail_println_after: int | None = None, fail_show: bool = False) -> None:
        self.calls: list[tuple] = []
        self.fail_println_after = fail_println_after
        self.fail_show = fail_show
        self.printed = 0

    def move_cursor(self, row: int, col: int) -> None:
        self.calls.append(("move", row, col))

    def println(self, line: str, style: str = "") -> None:
        if self.fail_println_after is not None and self.printed >= self.fail_println_after:
            raise IOWriteFailure("broken pipe")
        self.printed += 1
        self.calls.append(("println", line, style))

    def clear_lines_below(self, row: int) -> None:
        self.calls.append(("clear", row))

    def hide_cursor(self) -> None:
        self.calls.append(("hide",))

    def show_cursor(self) -> None:
        self.calls.append(("show",))
        if self.fail_show:
            raise IOWriteFailure("show cursor failed")

    def frames(self) -> list[list[tuple[str, str]]]:
        """Group printed rows by frame, split on cursor moves."""
        frames: list[list[tuple[str, str]]] = []
        for call in self.calls:
            if call[0] == "move":
                frames.append([])
            elif call[0] == "println":
                frames[-1].append((call[1], call[2]))
        return frames


def _viewport(rows: int, start_row: int = 10, cols: int = 80) -> Viewport:
    viewport = Viewport(terminal=None)
    viewport.size = TerminalSize(cols=cols, rows=start_row + rows)
    viewport.rows = rows
    viewport.start_row = start_row
    return viewport


def _make_tree(root: Path) -> FileTree:
    (root / "alpha").mkdir()
    (root / "alpha" / "inner.txt").write_text("x\n", encoding="utf-8")
    (root / "beta").mkdir()
    (root / "one.txt").write_text("1\n", encoding="utf-8")
    (root / "two.txt").write_text("2\n", encoding="utf-8")
    tree = FileTree(root)
    tree.root.children()
    return tree


class _CountingOpener:
    def __init__(self, tree: FileTree) -> None:
        self.tree = tree
        self.count = 0

    def __call__(self):
        self.count += 1
        return self.tree.open_traversal(None)


def _callbacks(actions: list[Action], toggle=toggle_entry_children) -> RuntimeLoopCallbacks:
    pending = iter(actions)
    return RuntimeLoopCallbacks(
        read_action=lambda: next(pending),
        format_entry=lambda entry: entry.node.name,
        toggle_entry=toggle,
    )


class InteractionLoopTests(unittest.TestCase):
    def test_first_frame_draws_window_with_cursor_highlight(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            tree = _make_tree(root)
            terminal = _FakeTerminal()
            window = WindowBuffer(lambda: tree.open_traversal(None), 3)

            run_main_loop(BrowserState(), terminal, _viewport(3), window, _callbacks([Action.QUIT]))

        self.assertEqual(terminal.calls[0], ("hide",))
        self.assertEqual(terminal.calls[1], ("move", 10, 1))
        self.assertEqual(
            terminal.frames()[0],
            [(root.name, DEFAULT_THEME.cursor), ("alpha", ""), ("beta", "")],
        )
        self.assertEqual(terminal.calls[-1], ("show",))
        self.assertNotIn(("clear", 10), terminal.calls)

    def test_down_moves_highlight_and_scrolls_window(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            tree = _make_tree(root)
            terminal = _FakeTerminal()
            window = WindowBuffer(lambda: tree.open_traversal(None), 3)
            state = BrowserState()

            actions = [Action.DOWN] * 3 + [Action.QUIT]
            run_main_loop(state, terminal, _viewport(3), window, _callbacks(actions))

        last_frame = terminal.frames()[-1]
        self.assertEqual([line for line, _style in last_frame], ["alpha", "beta", "one.txt"])
        self.assertEqual(last_frame[2][1], DEFAULT_THEME.cursor)
        self.assertEqual(state.cursor, 3)
        self.assertEqual(terminal.calls.count(("clear", 10)), 3)

    def test_unknown_actions_are_ignored_without_redraw(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tree = _make_tree(Path(tmp).resolve())
            terminal = _FakeTerminal()
            window = WindowBuffer(lambda: tree.open_traversal(None), 3)

            actions = [Action.UNKNOWN, Action.UNKNOWN, Action.QUIT]
            run_main_loop(BrowserState(), terminal, _viewport(3), window, _callbacks(actions))

        self.assertEqual(len(terminal.frames()), 1)

    def test_up_saturates_at_zero(self) -> None:
        state = BrowserState(cursor=0, needs_refill=False)

        quit_requested = apply_action(state, Action.UP, WindowBuffer(lambda: None, 3), toggle_entry_children)

        self.assertFalse(quit_requested)
        self.assertEqual(state.cursor, 0)

    def test_select_expands_node_and_rebuilds_buffer_from_fresh_traversal(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            tree = _make_tree(root)
            opener = _CountingOpener(tree)
            terminal = _FakeTerminal()
            window = WindowBuffer(opener, 4)
            state = BrowserState()

            actions = [Action.DOWN, Action.SELECT, Action.QUIT]
            run_main_loop(state, terminal, _viewport(4), window, _callbacks(actions))

            alpha = tree.root.loaded_children[0]
            self.assertTrue(alpha.has_children())

        self.assertEqual(opener.count, 2)
        self.assertEqual(state.cursor, 1)
        self.assertFalse(state.needs_refill)
        last_frame = terminal.frames()[-1]
        self.assertEqual([line for line, _style in last_frame], [root.name, "alpha", "inner.txt", "beta"])
        self.assertEqual(last_frame[1][1], DEFAULT_THEME.cursor)

    def test_select_on_expanded_node_collapses_it(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            tree = _make_tree(root)
            terminal = _FakeTerminal()
            window = WindowBuffer(lambda: tree.open_traversal(None), 5)

            actions = [Action.SELECT, Action.QUIT]
            run_main_loop(BrowserState(), terminal, _viewport(5), window, _callbacks(actions))

            self.assertFalse(tree.root.has_children())

        self.assertEqual([line for line, _style in terminal.frames()[-1]], [root.name])

    def test_toggle_failure_leaves_state_unchanged(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tree = _make_tree(Path(tmp).resolve())
            opener = _CountingOpener(tree)
            window = WindowBuffer(opener, 5)
            state = BrowserState()
            prepare_frame(state, window)
            state.cursor = 3
            prepare_frame(state, window)

            quit_requested = apply_action(state, Action.SELECT, window, toggle_entry_children)

        self.assertFalse(quit_requested)
        self.assertFalse(state.needs_refill)
        self.assertEqual(state.cursor, 3)
        self.assertEqual(opener.count, 1)

    def test_refill_failure_is_not_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tree = _make_tree(Path(tmp).resolve())
            window = WindowBuffer(lambda: tree.open_traversal(None), 3)
            state = BrowserState()
            prepare_frame(state, window)
            entries_before = list(window.entries)

            def failing_open():
                raise TreeAccessFailure(tree.root.path, "gone")

            window.open_traversal = failing_open
            state.needs_refill = True
            prepare_frame(state, window)

        self.assertFalse(state.needs_refill)
        self.assertEqual(window.entries, entries_before)

    def test_write_failure_propagates_and_shows_cursor(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tree = _make_tree(Path(tmp).resolve())
            terminal = _FakeTerminal(fail_println_after=1)
            window = WindowBuffer(lambda: tree.open_traversal(None), 3)

            with self.assertRaises(IOWriteFailure):
                run_main_loop(BrowserState(), terminal, _viewport(3), window, _callbacks([Action.QUIT]))

        self.assertEqual(terminal.calls[-1], ("show",))

    def test_first_write_failure_is_reported_when_cursor_restore_also_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tree = _make_tree(Path(tmp).resolve())
            terminal = _FakeTerminal(fail_println_after=1, fail_show=True)
            window = WindowBuffer(lambda: tree.open_traversal(None), 3)

            with self.assertRaises(IOWriteFailure) as ctx:
                run_main_loop(BrowserState(), terminal, _viewport(3), window, _callbacks([Action.QUIT]))

        self.assertEqual(str(ctx.exception), "broken pipe")
        self.assertEqual(terminal.calls[-1], ("show",))

    def test_cursor_restore_failure_after_clean_quit_propagates(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tree = _make_tree(Path(tmp).resolve())
            terminal = _FakeTerminal(fail_show=True)
            window = WindowBuffer(lambda: tree.open_traversal(None), 3)

            with self.assertRaises(IOWriteFailure) as ctx:
                run_main_loop(BrowserState(), terminal, _viewport(3), window, _callbacks([Action.QUIT]))

        self.assertEqual(str(ctx.exception), "show cursor failed")

    def test_empty_render_range_draws_nothing(self) -> None:
        terminal = _FakeTerminal()
        window = WindowBuffer(lambda: _EmptyTraversal(), 3)
        state = BrowserState()

        run_main_loop(state, terminal, _viewport(3), window, _callbacks([Action.DOWN, Action.QUIT]))

        self.assertEqual(terminal.frames(), [[], []])
        self.assertEqual(state.cursor, 0)

    def test_long_rows_are_clipped_to_terminal_width(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tree = _make_tree(Path(tmp).resolve())
            terminal = _FakeTerminal()
            window = WindowBuffer(lambda: tree.open_traversal(None), 2)
            callbacks = RuntimeLoopCallbacks(
                read_action=lambda: Action.QUIT,
                format_entry=lambda entry: "x" * 50,
                toggle_entry=toggle_entry_children,
            )

            run_main_loop(BrowserState(), terminal, _viewport(2, cols=8), window, callbacks)

        self.assertEqual([line for line, _style in terminal.frames()[0]], ["x" * 8, "x" * 8])


class _EmptyTraversal:
    def next(self):
        return None

    def close(self) -> None:
        pass


if __name__ == "__main__":
    unittest.main()
