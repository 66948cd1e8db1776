"""Command-line front door for lazytodo.

Parses CLI options, scans the workspace, and prints the TODO tree.
Optionally opens one TODO in ``$EDITOR`` or keeps re-rendering on file changes.
"""

from __future__ import annotations

import argparse
import locale
import logging
import sys
import time
from collections.abc import Callable
from pathlib import Path

from . import config
from .editor import open_record
from .index import DEFAULT_EXCLUDED_DIRS
from .preview import DEFAULT_STYLE, render_context
from .render import format_header, leaf_nodes, render_rows, render_tree
from .session import TodoSession
from .types import TodoNode
from .ui_theme import UITheme, available_theme_names, resolve_theme
from .view_model import VIEW_MODES
from .watch import FilePoller

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List TODO(label): text comments of a project as a grouped tree."
    )
    parser.add_argument("path", nargs="?", default=None, help="Project root. Defaults to current directory.")
    parser.add_argument("--mode", choices=VIEW_MODES, default=None, help="View mode (remembered for next runs).")
    filter_group = parser.add_mutually_exclusive_group()
    filter_group.add_argument("--filter", default="", help="Fuzzy filter over path, label, and text.")
    filter_group.add_argument("--label", default=None, help="Show only TODOs with exactly this label.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for --preview.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--preview", action="store_true", help="Show highlighted source context under each TODO.")
    parser.add_argument("--open", type=_positive_int, default=None, metavar="N", help="Open the N-th listed TODO in $EDITOR.")
    parser.add_argument("--watch", action="store_true", help="Re-render whenever scanned files change.")
    parser.add_argument("--interval", type=_positive_float, default=1.0, help="Watch poll interval in seconds.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log more (repeat for debug output).")
    return parser


def render_session(session: TodoSession, theme: UITheme, preview: bool, style: str, no_color: bool) -> str:
    view_model = session.view_model
    if not preview:
        return render_tree(view_model, theme)
    lines = [format_header(view_model, theme)]
    for node, row in render_rows(view_model, theme):
        lines.append(row)
        if isinstance(node, TodoNode):
            context = render_context(node.record, style=style, no_color=no_color, theme=theme)
            if context:
                lines.extend("      " + line for line in context.split("\n"))
    return "\n".join(lines) + "\n"


def _watch_loop(
    session: TodoSession,
    poller: FilePoller,
    interval: float,
    draw: Callable[[], None],
) -> None:
    poller.prime()
    try:
        while True:
            time.sleep(interval)
            events = poller.poll()
            if not events:
                continue
            logger.info("Applying %d file events", session.handle_events(events))
            draw()
    except KeyboardInterrupt:
        pass


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and print the TODO tree for a project root.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    configure_logging(args.verbose)
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.debug("Unsupported locale, keeping C collation")

    if default_path is None:
        default_path = Path.cwd()
    root = Path(args.path or default_path)
    if not root.is_dir():
        raise SystemExit(f"Not a directory: {root}")

    if args.mode is not None:
        config.save_view_mode(args.mode)
    view_mode = args.mode or config.load_view_mode()
    excluded_dirs = DEFAULT_EXCLUDED_DIRS | set(config.load_extra_excludes())
    style = args.style or config.load_style() or DEFAULT_STYLE
    no_color = args.no_color or not sys.stdout.isatty()
    theme = resolve_theme(args.theme, no_color=no_color)

    def notify(message: str) -> None:
        sys.stderr.write(message + "\n")

    session = TodoSession(root, excluded_dirs=excluded_dirs, view_mode=view_mode, notify=notify)
    if not session.refresh():
        raise SystemExit(1)
    if args.label is not None:
        session.scope_to_label(args.label)
    else:
        session.set_filter(args.filter)

    if args.open is not None:
        leaves = leaf_nodes(session.view_model)
        if args.open > len(leaves):
            raise SystemExit(f"No TODO #{args.open}; {len(leaves)} listed.")
        error = open_record(leaves[args.open - 1].record)
        if error:
            raise SystemExit(error)
        return

    def draw() -> None:
        sys.stdout.write(render_session(session, theme, args.preview, style, no_color))
        sys.stdout.flush()

    draw()
    if args.watch:
        _watch_loop(session, FilePoller(session.root, excluded_dirs), args.interval, draw)


if __name__ == "__main__":
    main()
