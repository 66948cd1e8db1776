"""Editor launch helper for jumping to a TODO location.

Runs ``$EDITOR`` with a ``+line`` argument for editors that understand it.
Returns an error message string instead of raising for UI-friendly handling.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .types import TodoRecord

# Editors that accept ``+LINE`` before the file argument.
PLUS_LINE_EDITORS = frozenset({"vi", "vim", "nvim", "nano", "emacs", "emacsclient", "micro", "kak", "hx", "helix"})


@dataclass(frozen=True)
class JumpLocation:
    """Cursor target for navigation; ``line``/``column`` are 0-based."""

    path: Path
    line: int
    column: int

    @classmethod
    def for_record(cls, record: TodoRecord) -> JumpLocation:
        return cls(path=record.absolute_path, line=record.line, column=record.column)


def editor_command(editor: list[str], location: JumpLocation) -> list[str]:
    program = Path(editor[0]).name
    if program in {"code", "code-insiders", "codium"}:
        return [*editor, "--goto", f"{location.path}:{location.line + 1}:{location.column + 1}"]
    if program in PLUS_LINE_EDITORS:
        return [*editor, f"+{location.line + 1}", str(location.path)]
    return [*editor, str(location.path)]


def open_record(record: TodoRecord) -> str | None:
    editor_env = os.environ.get("EDITOR", "").strip()
    if not editor_env:
        return "Cannot open: $EDITOR is not set."
    cmd = shlex.split(editor_env)
    if not cmd:
        return "Cannot open: $EDITOR is empty."

    try:
        subprocess.run(editor_command(cmd, JumpLocation.for_record(record)), check=False)
    except Exception as exc:
        return f"Failed to launch editor: {exc}"
    return None
