"""Formatting helpers for TODO tree rows and the tree header."""

from __future__ import annotations

from .search import is_label_filter, searchable_string
from .types import EMPTY_TEXT_PLACEHOLDER, FileNode, LabelNode, TodoNode, TodoRecord, TreeNode
from .ui_theme import DEFAULT_THEME, UITheme
from .view_model import TodoViewModel


def _matched_positions(haystack: str, needle: str) -> set[int] | None:
    """Indexes of ``haystack`` taken by the same greedy walk the filter uses."""
    folded_chars: list[str] = []
    owners: list[int] = []
    for idx, ch in enumerate(haystack):
        for folded in ch.casefold():
            folded_chars.append(folded)
            owners.append(idx)
    folded_haystack = "".join(folded_chars)
    positions: set[int] = set()
    prev_idx = -1
    for ch in needle.casefold():
        prev_idx = folded_haystack.find(ch, prev_idx + 1)
        if prev_idx < 0:
            return None
        positions.add(owners[prev_idx])
    return positions


def highlight_subsequence(record: TodoRecord, query: str, theme: UITheme) -> str:
    """Return ``record.text`` with the filter's matched characters marked.

    The query is walked over the whole searchable string (path, label and
    text); only hits that land inside the text portion are marked.
    """
    text = record.text
    if not query or is_label_filter(query) or not theme.filter_hit:
        return text
    haystack = searchable_string(record.relative_path, record.label, text)
    positions = _matched_positions(haystack, query)
    if positions is None:
        return text
    offset = len(haystack) - len(text)
    out: list[str] = []
    for idx, ch in enumerate(text):
        if idx + offset in positions:
            out.append(f"{theme.filter_hit}{ch}{theme.filter_hit_reset}")
        else:
            out.append(ch)
    return "".join(out)


def format_node(node: TreeNode, depth: int, theme: UITheme | None = None, query: str = "") -> str:
    """Render one tree row as ANSI-styled display text."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    indent = "  " * depth
    marker = f"{active_theme.tree_marker}▾ {reset}"

    if isinstance(node, LabelNode):
        return (
            f"{indent}{marker}{active_theme.tree_label}{node.name}{reset}"
            f" {active_theme.tree_count}({node.count}){reset}"
        )
    if isinstance(node, FileNode):
        return (
            f"{indent}{marker}{active_theme.tree_file}{node.name}{reset}"
            f" {active_theme.tree_count}({node.count}){reset}"
        )

    record = node.record
    if record.text:
        text = f"{active_theme.tree_todo_text}{highlight_subsequence(record, query, active_theme)}{reset}"
    else:
        text = f"{active_theme.tree_todo_empty}{EMPTY_TEXT_PLACEHOLDER}{reset}"
    if depth == 0:
        # Flat rows have no enclosing label group.
        text = f"{active_theme.tree_label}TODO({record.label}):{reset} {text}"
    return f"{indent}{active_theme.tree_marker}· {reset}{text}  {active_theme.tree_location}{record.location}{reset}"


def format_header(view_model: TodoViewModel, theme: UITheme | None = None) -> str:
    active_theme = theme or DEFAULT_THEME
    return (
        f"{active_theme.header}{view_model.description()}{active_theme.reset}"
        f"  {active_theme.header_dim}[{view_model.view_mode_label}]{active_theme.reset}"
    )


def render_rows(view_model: TodoViewModel, theme: UITheme | None = None) -> list[tuple[TreeNode, str]]:
    """Return ``(node, row_text)`` for every node of the fully expanded tree."""
    query = view_model.current_filter()
    return [(node, format_node(node, depth, theme, query)) for depth, node in view_model.walk()]


def render_tree(view_model: TodoViewModel, theme: UITheme | None = None) -> str:
    lines = [format_header(view_model, theme)]
    lines.extend(row for _node, row in render_rows(view_model, theme))
    return "\n".join(lines) + "\n"


def leaf_nodes(view_model: TodoViewModel) -> list[TodoNode]:
    """Leaves in render order; ``--open N`` indexes into this list."""
    return [node for _depth, node in view_model.walk() if isinstance(node, TodoNode)]
