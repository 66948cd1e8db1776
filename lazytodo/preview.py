"""Highlighted source context around one TODO record.

Uses Pygments' terminal formatter; files Pygments has no lexer for fall back
to ``TextLexer`` so the context still renders as plain text.
"""

from __future__ import annotations

import logging

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.util import ClassNotFound

from .scanner import read_text
from .types import TodoRecord
from .ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"
_FORMATTERS: dict[str, TerminalFormatter] = {}


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    try:
        formatter = TerminalFormatter(style=style)
    except ClassNotFound:
        logger.debug("Unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        formatter = TerminalFormatter(style=DEFAULT_STYLE)
    _FORMATTERS[style] = formatter
    return formatter


def colorize_source(source: str, filename: str, style: str = DEFAULT_STYLE) -> str:
    try:
        lexer = get_lexer_for_filename(filename, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    return highlight(source, lexer, _formatter_for_style(style))


def render_context(
    record: TodoRecord,
    context: int = 2,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
    theme: UITheme | None = None,
) -> str:
    """Return ``context`` lines either side of the TODO with a gutter.

    The TODO line is marked with ``>``. Returns ``""`` when the file can no
    longer be read; the record may be stale relative to disk.
    """
    active_theme = theme or DEFAULT_THEME
    try:
        lines = read_text(record.absolute_path).split("\n")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not preview %s: %s", record.absolute_path, exc)
        return ""
    if record.line >= len(lines):
        return ""

    start = max(0, record.line - context)
    end = min(len(lines), record.line + context + 1)
    raw_lines = [line.rstrip("\r") for line in lines[start:end]]
    if no_color:
        body = raw_lines
    else:
        highlighted = colorize_source("\n".join(raw_lines) + "\n", record.absolute_path.name, style).split("\n")
        body = highlighted[: len(raw_lines)]

    width = len(str(end))
    out: list[str] = []
    for offset, text in enumerate(body):
        line_no = start + offset
        marker = ">" if line_no == record.line else " "
        gutter = f"{marker}{line_no + 1:>{width}} │ "
        if not no_color and line_no == record.line:
            gutter = f"{active_theme.preview_gutter}{gutter}{active_theme.reset}"
        out.append(f"{gutter}{text}")
    return "\n".join(out)
