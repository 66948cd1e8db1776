"""TODO token matching and per-file scanning."""

from __future__ import annotations

from .files import (
    EXTENSIONLESS_TEXT_FILES,
    TEXT_EXTENSIONS,
    is_scannable,
    normalize_path,
    read_text,
    scan_file,
    scan_text,
    to_workspace_relative,
)
from .matching import TODO_PATTERN, TodoMatch, match_line

__all__ = [
    "EXTENSIONLESS_TEXT_FILES",
    "TEXT_EXTENSIONS",
    "TODO_PATTERN",
    "TodoMatch",
    "is_scannable",
    "normalize_path",
    "match_line",
    "read_text",
    "scan_file",
    "scan_text",
    "to_workspace_relative",
]
