"""One workspace session: the indexer, the view model, and event wiring.

The session is the context object the host passes around instead of
module-level state; tests build as many independent sessions as they need.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from .index import DEFAULT_EXCLUDED_DIRS, WorkspaceIndexer, WorkspaceScanError
from .search import label_filter
from .types import TodoRecord
from .view_model import DEFAULT_VIEW_MODE, TodoViewModel
from .watch import FileEvent

logger = logging.getLogger(__name__)

SCAN_FAILED_MESSAGE = "Failed to scan workspace for TODOs"


def _log_notification(message: str) -> None:
    logger.error(message)


class TodoSession:
    """Keep the view model in sync with the index as events arrive."""

    def __init__(
        self,
        root: Path,
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
        view_mode: str = DEFAULT_VIEW_MODE,
        notify: Callable[[str], None] = _log_notification,
        indexer: WorkspaceIndexer | None = None,
    ) -> None:
        self.indexer = indexer if indexer is not None else WorkspaceIndexer(root, excluded_dirs)
        self.view_model = TodoViewModel(view_mode=view_mode)
        self._notify = notify

    @property
    def root(self) -> Path:
        return self.indexer.root

    def refresh(self) -> bool:
        """Rescan everything; on enumeration failure keep showing the old index."""
        try:
            records = self.indexer.scan_all()
        except WorkspaceScanError as exc:
            logger.error("Error scanning workspace: %s", exc)
            self._notify(SCAN_FAILED_MESSAGE)
            return False
        self.view_model.set_records(records)
        return True

    def handle_event(self, event: FileEvent) -> None:
        if event.kind == "deleted":
            records = self.indexer.remove_file(event.path)
        elif self.indexer.accepts(event.path):
            records = self.indexer.scan_one(event.path)
        else:
            return
        self.view_model.set_records(records)

    def handle_events(self, events: Iterable[FileEvent]) -> int:
        handled = 0
        for event in events:
            self.handle_event(event)
            handled += 1
        return handled

    def set_filter(self, pattern: str) -> None:
        self.view_model.set_filter(pattern)

    def clear_filter(self) -> None:
        self.view_model.set_filter("")

    def scope_to_label(self, label: str) -> str:
        pattern = label_filter(label)
        self.view_model.set_filter(pattern)
        return pattern

    def records(self) -> tuple[TodoRecord, ...]:
        return self.view_model.all_records()
