"""Workspace-wide TODO index with whole-tree and single-file updates.

The index is an immutable tuple that is only ever replaced, never mutated,
so readers always see either the previous or the next complete record set.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ..scanner import is_scannable, normalize_path, scan_file
from ..types import TodoRecord

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDED_DIRS = frozenset({"node_modules", ".git", "out", "dist", ".next", "build"})
MINIFIED_SUFFIXES = (".min.js", ".min.css")
DEFAULT_SCAN_WORKERS = 8


class WorkspaceScanError(RuntimeError):
    """Raised when the workspace itself cannot be enumerated."""


def is_minified(name: str) -> bool:
    return name.lower().endswith(MINIFIED_SUFFIXES)


def collect_candidate_files(root: Path, excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS) -> list[Path]:
    """List scannable files under ``root`` in a stable walk order.

    Directories named in ``excluded_dirs`` are pruned wherever they appear.
    Unreadable subdirectories are skipped; failing to list ``root`` itself
    raises ``WorkspaceScanError``.
    """
    root = root.resolve()
    if not root.is_dir():
        raise WorkspaceScanError(f"workspace root is not a directory: {root}")

    excluded = frozenset(excluded_dirs)
    root_errors: list[OSError] = []

    def on_walk_error(exc: OSError) -> None:
        if exc.filename is not None and Path(exc.filename) == root:
            root_errors.append(exc)
            return
        logger.warning("Skipping unreadable directory %s: %s", exc.filename, exc.strerror)

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_walk_error):
        base = Path(dirpath)
        dirnames[:] = sorted((name for name in dirnames if name not in excluded), key=str.lower)
        for filename in sorted(filenames, key=str.lower):
            if is_minified(filename) or not is_scannable(filename):
                continue
            files.append(base / filename)

    if root_errors:
        raise WorkspaceScanError(f"cannot list workspace root {root}: {root_errors[0].strerror}")
    return files


class WorkspaceIndexer:
    """Own the authoritative record set for one workspace root.

    ``scan_all`` fans per-file scans out to a thread pool and publishes the
    joined result in one assignment. Full rescans are single-flight: a caller
    arriving mid-scan waits for it and then runs its own.
    """

    def __init__(
        self,
        root: Path,
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
        max_workers: int = DEFAULT_SCAN_WORKERS,
        scan: Callable[[Path, Path | None], list[TodoRecord]] = scan_file,
    ) -> None:
        self.root = root.resolve()
        self.excluded_dirs = frozenset(excluded_dirs)
        self.max_workers = max(1, max_workers)
        self._scan = scan
        self._scan_lock = threading.Lock()
        self._records: tuple[TodoRecord, ...] = ()

    def records(self) -> tuple[TodoRecord, ...]:
        return self._records

    def accepts(self, path: Path) -> bool:
        """Return whether ``path`` would be picked up by a full scan."""
        resolved = normalize_path(path)
        try:
            parts = resolved.relative_to(self.root).parts
        except ValueError:
            parts = resolved.parts
        if any(part in self.excluded_dirs for part in parts[:-1]):
            return False
        return not is_minified(resolved.name) and is_scannable(resolved.name)

    def scan_all(self) -> tuple[TodoRecord, ...]:
        """Rebuild the whole index; raises ``WorkspaceScanError`` if enumeration fails."""
        with self._scan_lock:
            files = collect_candidate_files(self.root, self.excluded_dirs)
            per_file: list[list[TodoRecord]] = []
            if files:
                workers = min(self.max_workers, len(files))
                with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="lazytodo-scan") as executor:
                    futures = [executor.submit(self._scan, path, self.root) for path in files]
                    for path, future in zip(files, futures):
                        try:
                            per_file.append(future.result())
                        except Exception as exc:
                            logger.warning("Scan of %s failed: %s", path, exc)
                            per_file.append([])

            self._records = tuple(record for records in per_file for record in records)
            logger.info("Indexed %d TODOs in %d files under %s", len(self._records), len(files), self.root)
            return self._records

    def scan_one(self, path: Path) -> tuple[TodoRecord, ...]:
        """Replace exactly the records of ``path``; a vanished file just drops them."""
        resolved = normalize_path(path)
        fresh = self._scan(resolved, self.root) if resolved.is_file() else []
        self._records = self._without(resolved) + tuple(fresh)
        logger.debug("Rescanned %s: %d TODOs", resolved, len(fresh))
        return self._records

    def remove_file(self, path: Path) -> tuple[TodoRecord, ...]:
        self._records = self._without(normalize_path(path))
        return self._records

    def _without(self, resolved: Path) -> tuple[TodoRecord, ...]:
        return tuple(record for record in self._records if record.absolute_path != resolved)
