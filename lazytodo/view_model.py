"""Derive the display tree from the flat record set.

Nothing here is cached: every ``children_of`` call filters, groups, and sorts
from scratch, so the result always reflects the latest records, filter, and
view mode.

Node paths address the tree: ``()`` is the root, ``(label,)`` a label group,
and ``(label, relative_path)`` a file group inside a label (grouped mode).
"""

from __future__ import annotations

import locale
import unicodedata
from collections import Counter
from collections.abc import Iterable, Iterator, Sequence

from .search import filter_records
from .types import FileNode, LabelNode, TodoNode, TodoRecord, TreeNode

VIEW_MODES = ("grouped", "byTag", "flat")
VIEW_MODE_LABELS = {
    "grouped": "Grouped by Tag & File",
    "byTag": "Grouped by Tag",
    "flat": "Flat",
}
DEFAULT_VIEW_MODE = "grouped"

NodePath = Sequence[str]


def _base_letters(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(text: str) -> tuple[str, str]:
    """Case- and accent-insensitive sort key, tie-broken by the active locale.

    Accented letters sort with their base letter even under the C locale;
    ``cli.main`` switches ``LC_COLLATE`` to the user's locale when it can.
    """
    # strxfrm rejects embedded NUL.
    cleaned = text.replace("\0", "")
    return _base_letters(cleaned), locale.strxfrm(cleaned.casefold())


def _sorted_leaves(records: Iterable[TodoRecord]) -> list[TreeNode]:
    ordered = sorted(records, key=lambda record: collation_key(record.text))
    return [TodoNode(record) for record in ordered]


class TodoViewModel:
    """View state (records, filter, mode) plus tree derivation."""

    def __init__(self, records: Iterable[TodoRecord] = (), view_mode: str = DEFAULT_VIEW_MODE) -> None:
        self._records: tuple[TodoRecord, ...] = tuple(records)
        self._filter = ""
        self._view_mode = DEFAULT_VIEW_MODE
        self.set_view_mode(view_mode)

    def set_records(self, records: Iterable[TodoRecord]) -> None:
        self._records = tuple(records)

    def all_records(self) -> tuple[TodoRecord, ...]:
        return self._records

    def set_filter(self, pattern: str) -> None:
        self._filter = pattern

    def current_filter(self) -> str:
        return self._filter

    @property
    def view_mode(self) -> str:
        return self._view_mode

    @property
    def view_mode_label(self) -> str:
        return VIEW_MODE_LABELS[self._view_mode]

    def set_view_mode(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"unknown view mode: {mode!r}")
        self._view_mode = mode

    def cycle_view_mode(self) -> str:
        """Advance grouped → byTag → flat → grouped and return the new label."""
        idx = VIEW_MODES.index(self._view_mode)
        self._view_mode = VIEW_MODES[(idx + 1) % len(VIEW_MODES)]
        return self.view_mode_label

    def filtered_records(self) -> list[TodoRecord]:
        return filter_records(self._records, self._filter)

    def description(self) -> str:
        """One-line summary for the tree header."""
        if self._filter:
            return f'Filtering: "{self._filter}"'
        count = len(self._records)
        return f"{count} TODO{'' if count == 1 else 's'}"

    def children_of(self, node_path: NodePath = ()) -> list[TreeNode]:
        records = self.filtered_records()
        path = tuple(node_path)

        if not path:
            if self._view_mode == "flat":
                ordered = sorted(records, key=lambda record: collation_key(record.full_text))
                return [TodoNode(record) for record in ordered]
            return self._label_groups(records)

        if len(path) == 1:
            label = path[0]
            in_label = [record for record in records if record.label == label]
            if self._view_mode == "byTag":
                return _sorted_leaves(in_label)
            if self._view_mode == "grouped":
                return self._file_groups(in_label, label)
            return []

        if len(path) == 2 and self._view_mode == "grouped":
            label, relative_path = path
            return _sorted_leaves(
                record for record in records if record.label == label and record.relative_path == relative_path
            )

        return []

    def walk(self) -> Iterator[tuple[int, TreeNode]]:
        """Yield ``(depth, node)`` for the fully expanded tree, depth-first."""

        def visit(node_path: tuple[str, ...], depth: int) -> Iterator[tuple[int, TreeNode]]:
            for node in self.children_of(node_path):
                yield depth, node
                if not isinstance(node, TodoNode):
                    yield from visit(node.path, depth + 1)

        yield from visit((), 0)

    @staticmethod
    def _label_groups(records: list[TodoRecord]) -> list[TreeNode]:
        counts = Counter(record.label for record in records)
        labels = sorted(counts, key=collation_key)
        return [LabelNode(name=label, count=counts[label]) for label in labels]

    @staticmethod
    def _file_groups(records: list[TodoRecord], label: str) -> list[TreeNode]:
        counts = Counter(record.relative_path for record in records)
        paths = sorted(counts, key=collation_key)
        return [FileNode(label=label, name=path, count=counts[path]) for path in paths]
