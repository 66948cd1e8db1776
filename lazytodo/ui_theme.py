"""UI theme definitions and selection helpers.

Themes are ANSI palettes for tree rows and headers. Syntax highlighting style
for previews remains a separate (pygments) setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    header: str
    header_dim: str
    tree_marker: str
    tree_label: str
    tree_file: str
    tree_todo_text: str
    tree_todo_empty: str
    tree_location: str
    tree_count: str
    filter_hit: str
    filter_hit_reset: str
    preview_gutter: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    header="\033[1;38;5;81m",
    header_dim="\033[2;38;5;250m",
    tree_marker="\033[38;5;44m",
    tree_label="\033[1;38;5;214m",
    tree_file="\033[38;5;110m",
    tree_todo_text="\033[38;5;252m",
    tree_todo_empty="\033[2;38;5;250m",
    tree_location="\033[38;5;109m",
    tree_count="\033[2m",
    filter_hit="\033[7;1m",
    filter_hit_reset="\033[27;22m",
    preview_gutter="\033[38;5;42m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    header="\033[1;38;5;45m",
    header_dim="\033[2;38;5;110m",
    tree_marker="\033[38;5;39m",
    tree_label="\033[1;38;5;45m",
    tree_file="\033[38;5;117m",
    tree_todo_text="\033[38;5;153m",
    tree_todo_empty="\033[2;38;5;110m",
    tree_location="\033[38;5;73m",
    tree_count="\033[2;38;5;31m",
    filter_hit="\033[7;1m",
    filter_hit_reset="\033[27;22m",
    preview_gutter="\033[38;5;84m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    header="",
    header_dim="",
    tree_marker="",
    tree_label="",
    tree_file="",
    tree_todo_text="",
    tree_todo_empty="",
    tree_location="",
    tree_count="",
    filter_hit="",
    filter_hit_reset="",
    preview_gutter="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def resolve_theme(name: str | None, no_color: bool = False) -> UITheme:
    """Return the named theme, ``PLAIN_THEME`` for ``no_color``, else default."""
    if no_color:
        return PLAIN_THEME
    candidate = (name or "").strip().lower()
    return _THEMES.get(candidate, DEFAULT_THEME)
