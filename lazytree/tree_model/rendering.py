"""Row formatting for tree entries.

Directories get an expand marker; files are aligned under the parent's
marker column and colored as source code when Pygments knows the filename.
"""

from __future__ import annotations

from functools import lru_cache

from pygments.lexers import find_lexer_class_for_filename

from ..ui_theme import DEFAULT_THEME, UITheme
from .types import TreeEntry

EXPANDED_MARKER = "▾ "
COLLAPSED_MARKER = "▸ "


@lru_cache(maxsize=1024)
def is_source_filename(name: str) -> bool:
    """Return whether Pygments has a lexer registered for ``name``."""
    lexer_class = find_lexer_class_for_filename(name)
    return lexer_class is not None and lexer_class.name != "Text only"


def file_color_for(name: str, theme: UITheme = DEFAULT_THEME) -> str:
    if is_source_filename(name):
        return theme.tree_file_source
    return theme.tree_file_default


def format_tree_entry(entry: TreeEntry, theme: UITheme = DEFAULT_THEME) -> str:
    reset = theme.reset
    if entry.depth == 0:
        name = entry.node.name.rstrip("/") + "/"
    else:
        name = entry.node.name + ("/" if entry.is_dir else "")

    if entry.is_dir:
        indent = "  " * entry.depth
        marker = EXPANDED_MARKER if entry.expanded else COLLAPSED_MARKER
        return f"{indent}{theme.tree_marker}{marker}{reset}{theme.tree_dir}{name}{reset}"

    # Align file names under the parent directory arrow column.
    indent = "  " * max(0, entry.depth - 1)
    return f"{indent}  {file_color_for(entry.node.name, theme)}{name}{reset}"
