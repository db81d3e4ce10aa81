"""UI theme definitions and selection helpers.

Themes are ANSI palettes for tree rows plus the cursor highlight. The
``plain`` theme is used for ``--no-color`` and emits no escape sequences.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the tree formatter and the loop."""

    name: str
    reset: str
    cursor: str
    tree_marker: str
    tree_dir: str
    tree_file_source: str
    tree_file_default: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    cursor="\033[36m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[1;34m",
    tree_file_source="\033[38;5;110m",
    tree_file_default="\033[38;5;252m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    cursor="\033[1;38;5;45m",
    tree_marker="\033[38;5;39m",
    tree_dir="\033[1;38;5;45m",
    tree_file_source="\033[38;5;117m",
    tree_file_default="\033[38;5;252m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    cursor="\033[7m",
    tree_marker="",
    tree_dir="",
    tree_file_source="",
    tree_file_default="",
)

_THEMES: dict[str, UITheme] = {
    theme.name: theme for theme in (DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME)
}


def available_theme_names() -> list[str]:
    return sorted(_THEMES)


def resolve_theme(name: str | None, no_color: bool = False) -> UITheme:
    """Return the named theme, ``plain`` when color is disabled.

    Unknown names fall back to the default palette.
    """
    if no_color:
        return PLAIN_THEME
    if not name:
        return DEFAULT_THEME
    return _THEMES.get(name.strip().lower(), DEFAULT_THEME)
