from __future__ import annotations

from collections.abc import Iterable

from ..types import TodoRecord

LABEL_FILTER_PREFIX = "@"


def searchable_string(relative_path: str, label: str, text: str) -> str:
    return f"{relative_path} TODO({label}): {text}"


def is_subsequence_match(haystack: str, needle: str) -> bool:
    """Return whether ``needle`` appears in ``haystack`` in order, case-insensitively.

    Greedy left-to-right scan; gaps between matched characters are allowed.
    """
    if not needle:
        return True
    haystack_folded = haystack.casefold()
    prev_idx = -1
    for ch in needle.casefold():
        prev_idx = haystack_folded.find(ch, prev_idx + 1)
        if prev_idx < 0:
            return False
    return True


def is_label_filter(pattern: str) -> bool:
    return pattern.startswith(LABEL_FILTER_PREFIX)


def label_filter(label: str) -> str:
    """Build the exact-label pattern used by scope-to-label shortcuts."""
    return f"{LABEL_FILTER_PREFIX}{label}"


def record_matches(record: TodoRecord, pattern: str) -> bool:
    if not pattern:
        return True
    if is_label_filter(pattern):
        return record.label == pattern[len(LABEL_FILTER_PREFIX):]
    return is_subsequence_match(
        searchable_string(record.relative_path, record.label, record.text),
        pattern,
    )


def filter_records(records: Iterable[TodoRecord], pattern: str) -> list[TodoRecord]:
    """Apply ``pattern`` to ``records`` keeping their order.

    Empty patterns keep everything, ``@label`` keeps exact label matches, and
    anything else is a fuzzy subsequence test against the searchable string.
    """
    return [record for record in records if record_matches(record, pattern)]
