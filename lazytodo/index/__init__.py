"""Workspace enumeration and the authoritative TODO index."""

from __future__ import annotations

from .workspace import (
    DEFAULT_EXCLUDED_DIRS,
    WorkspaceIndexer,
    WorkspaceScanError,
    collect_candidate_files,
    is_minified,
)

__all__ = [
    "DEFAULT_EXCLUDED_DIRS",
    "WorkspaceIndexer",
    "WorkspaceScanError",
    "collect_candidate_files",
    "is_minified",
]
