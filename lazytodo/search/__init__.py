"""Search package exports for record filtering."""

from __future__ import annotations

from .fuzzy import (
    LABEL_FILTER_PREFIX,
    filter_records,
    is_label_filter,
    is_subsequence_match,
    label_filter,
    record_matches,
    searchable_string,
)

__all__ = [
    "LABEL_FILTER_PREFIX",
    "filter_records",
    "is_label_filter",
    "is_subsequence_match",
    "label_filter",
    "record_matches",
    "searchable_string",
]
