"""Per-file TODO extraction and scannable-file classification.

Read failures never propagate: a file that cannot be read or decoded simply
contributes no records, and the reason is logged for diagnostics.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..types import TodoRecord
from .matching import match_line

logger = logging.getLogger(__name__)

BINARY_SNIFF_BYTES = 8192

TEXT_EXTENSIONS = (
    # Programming languages
    ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs",
    ".py", ".pyw",
    ".java", ".kt", ".kts", ".scala",
    ".c", ".cpp", ".cc", ".cxx", ".h", ".hpp", ".hxx",
    ".cs", ".fs", ".fsx",
    ".go",
    ".rs",
    ".rb", ".erb",
    ".php",
    ".swift",
    ".m", ".mm",
    ".lua",
    ".pl", ".pm",
    ".r",
    ".dart",
    ".ex", ".exs",
    ".clj", ".cljs", ".cljc",
    ".hs", ".lhs",
    ".elm",
    ".vue", ".svelte",
    # Web
    ".html", ".htm", ".xhtml",
    ".css", ".scss", ".sass", ".less", ".styl",
    # Data/config
    ".json", ".jsonc", ".json5",
    ".xml", ".xsl", ".xslt",
    ".yaml", ".yml",
    ".toml",
    ".ini", ".cfg", ".conf",
    ".env",
    ".properties",
    # Documentation
    ".md", ".markdown", ".mdx",
    ".txt", ".text",
    ".rst",
    ".adoc",
    # Shell/scripts
    ".sh", ".bash", ".zsh", ".fish",
    ".ps1", ".psm1", ".psd1",
    ".bat", ".cmd",
    # Other
    ".sql",
    ".graphql", ".gql",
    ".proto",
    ".tf", ".tfvars",
    ".dockerfile",
    ".makefile",
    ".gradle",
    ".cmake",
)

EXTENSIONLESS_TEXT_FILES = (
    "dockerfile",
    "makefile",
    "gemfile",
    "rakefile",
    "procfile",
    "vagrantfile",
    "jenkinsfile",
    "brewfile",
    ".gitignore",
    ".gitattributes",
    ".editorconfig",
    ".prettierrc",
    ".eslintrc",
    ".babelrc",
    "license",
    "readme",
    "changelog",
    "contributing",
    "authors",
)


def is_scannable(path: Path | str) -> bool:
    """Return whether ``path`` looks like a text file worth scanning.

    Matches the lowered file name against the extension allow-list, then
    against well-known extensionless names (``name`` or ``name.*``).
    """
    name = Path(path).name.lower()
    if name.endswith(TEXT_EXTENSIONS):
        return True
    return any(name == known or name.startswith(known + ".") for known in EXTENSIONLESS_TEXT_FILES)


def to_workspace_relative(path: Path, root: Path | None) -> str:
    """Return POSIX path relative to ``root``, or the absolute path outside it."""
    if root is None:
        return path.as_posix()
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def read_text(path: Path) -> str:
    """Read ``path`` as text, rejecting binary-looking content.

    Tries UTF-8 (dropping a BOM) before latin-1. Raises ``OSError`` for
    access failures and ``UnicodeDecodeError`` for binary content so callers
    can treat both as unreadable.
    """
    raw = path.read_bytes()
    if b"\0" in raw[:BINARY_SNIFF_BYTES]:
        raise UnicodeDecodeError("utf-8", raw[:1], 0, 1, "binary content")
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def scan_text(text: str, absolute_path: Path, relative_path: str) -> list[TodoRecord]:
    """Extract records from already-loaded file content, in (line, column) order."""
    records: list[TodoRecord] = []
    for line_idx, line in enumerate(text.split("\n")):
        for match in match_line(line):
            records.append(
                TodoRecord(
                    label=match.label,
                    text=match.text,
                    absolute_path=absolute_path,
                    relative_path=relative_path,
                    line=line_idx,
                    column=match.column,
                )
            )
    return records


def normalize_path(path: Path) -> Path:
    """Absolute, ``..``-free path that keeps symlinked files under their own name."""
    return Path(os.path.abspath(path))


def scan_file(path: Path, root: Path | None = None) -> list[TodoRecord]:
    """Scan one file; unreadable, missing, or binary files yield ``[]``."""
    absolute_path = normalize_path(path)
    try:
        text = read_text(absolute_path)
    except FileNotFoundError:
        logger.debug("Skipping vanished file %s", absolute_path)
        return []
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not scan file %s: %s", absolute_path, exc)
        return []
    return scan_text(text, absolute_path, to_workspace_relative(absolute_path, root))
