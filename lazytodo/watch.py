"""Poll-based file events for the TODO index.

Compares stat snapshots of candidate files between polls and reports each
difference as a ``saved``, ``created``, or ``deleted`` event.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .index import DEFAULT_EXCLUDED_DIRS, WorkspaceScanError, collect_candidate_files

logger = logging.getLogger(__name__)

FileEventKind = Literal["saved", "created", "deleted"]
StatSignature = tuple[int, int]


@dataclass(frozen=True)
class FileEvent:
    kind: FileEventKind
    path: Path


def _stat_signature(path: Path) -> StatSignature | None:
    try:
        st = path.stat()
    except OSError:
        return None
    return (st.st_mtime_ns, st.st_size)


def snapshot_files(root: Path, excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS) -> dict[Path, StatSignature]:
    """Map every candidate file under ``root`` to ``(mtime_ns, size)``."""
    snapshot: dict[Path, StatSignature] = {}
    for path in collect_candidate_files(root, excluded_dirs):
        signature = _stat_signature(path)
        if signature is not None:
            snapshot[path] = signature
    return snapshot


def diff_snapshots(old: dict[Path, StatSignature], new: dict[Path, StatSignature]) -> list[FileEvent]:
    """Return events turning ``old`` into ``new``, sorted by path."""
    events: list[FileEvent] = []
    for path in sorted(old.keys() | new.keys(), key=str):
        before = old.get(path)
        after = new.get(path)
        if before is None and after is not None:
            events.append(FileEvent("created", path))
        elif before is not None and after is None:
            events.append(FileEvent("deleted", path))
        elif before != after:
            events.append(FileEvent("saved", path))
    return events


class FilePoller:
    """Remember the last snapshot and report changes since it on each poll."""

    def __init__(self, root: Path, excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS) -> None:
        self.root = root.resolve()
        self.excluded_dirs = frozenset(excluded_dirs)
        self._snapshot: dict[Path, StatSignature] = {}

    def prime(self) -> None:
        self._snapshot = snapshot_files(self.root, self.excluded_dirs)

    def poll(self) -> list[FileEvent]:
        """Return events since the previous poll; an unlistable root yields none."""
        try:
            current = snapshot_files(self.root, self.excluded_dirs)
        except WorkspaceScanError as exc:
            logger.warning("Watch poll skipped: %s", exc)
            return []
        events = diff_snapshots(self._snapshot, current)
        self._snapshot = current
        return events
