"""Command-line front door for lazytree.

Parses CLI options, merges them with persisted config, configures logging,
and dispatches into the interactive browser (or a one-shot listing).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .errors import IOWriteFailure, TerminalUnavailable, TreeAccessFailure
from .logs import configure_logging
from .runtime import config, run_browser
from .tree_model import FileTree, format_tree_entry
from .ui_theme import UITheme, available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def _nonnegative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def render_tree_listing(root: Path, theme: UITheme, show_hidden: bool, max_depth: int | None) -> str:
    """Render ``root`` with its first level expanded, one row per line."""
    tree = FileTree(root, show_hidden=show_hidden)
    tree.root.children()
    traversal = tree.open_traversal(max_depth)
    try:
        return "".join(format_tree_entry(entry, theme) + "\n" for entry in traversal)
    finally:
        traversal.close()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse a directory tree inline in the terminal."
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to browse. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--show-hidden",
        action="store_true",
        default=None,
        help="Include dotfiles and dot-directories.",
    )
    parser.add_argument(
        "--max-depth",
        type=_nonnegative_int,
        default=None,
        help="Deepest level shown below the root (default: unlimited).",
    )
    parser.add_argument("--print", dest="print_only", action="store_true", help="Print the top-level listing and exit.")
    parser.add_argument("--log-file", default=None, help="Write debug/diagnostic logs to this file.")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=config.LOG_LEVELS,
        type=str.upper,
        help="Log level for --log-file (default: WARNING).",
    )
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and browse a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. A file path browses its parent directory.
    """
    args = _build_parser().parse_args()

    log_file = Path(args.log_file).expanduser() if args.log_file else config.load_log_file()
    configure_logging(log_file, args.log_level or config.load_log_level())

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        path = path.resolve().parent

    theme = resolve_theme(args.theme or config.load_theme_name(), no_color=args.no_color)
    show_hidden = args.show_hidden if args.show_hidden is not None else config.load_show_hidden()
    max_depth = args.max_depth if args.max_depth is not None else config.load_max_depth()

    try:
        if args.print_only:
            sys.stdout.write(render_tree_listing(path, theme, show_hidden, max_depth))
            return
        logger.info("browsing %s", path)
        run_browser(path, theme, show_hidden=show_hidden, max_depth=max_depth)
    except (TerminalUnavailable, TreeAccessFailure, IOWriteFailure) as exc:
        logger.error("%s", exc)
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
