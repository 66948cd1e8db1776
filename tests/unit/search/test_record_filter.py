"""Tests for fuzzy subsequence matching and exact-label filtering."""

from __future__ import annotations

import unittest
from pathlib import Path

from lazytodo.search import (
    filter_records,
    is_subsequence_match,
    label_filter,
    searchable_string,
)
from lazytodo.types import TodoRecord


def _record(label: str, text: str, relative_path: str = "src/a.ts", line: int = 0) -> TodoRecord:
    return TodoRecord(
        label=label,
        text=text,
        absolute_path=Path("/ws") / relative_path,
        relative_path=relative_path,
        line=line,
        column=0,
    )


class SubsequenceMatchTests(unittest.TestCase):
    def test_subsequence_matches_in_order(self) -> None:
        self.assertTrue(is_subsequence_match("authentication.ts", "auth"))
        self.assertTrue(is_subsequence_match("authentication.ts", "atn"))
        self.assertFalse(is_subsequence_match("foo.ts", "xyz"))
        self.assertFalse(is_subsequence_match("abc", "cba"))

    def test_empty_needle_always_matches(self) -> None:
        for haystack in ("", "anything", "TODO(x): y"):
            self.assertTrue(is_subsequence_match(haystack, ""))

    def test_matching_is_case_insensitive(self) -> None:
        self.assertTrue(is_subsequence_match("README.md", "rdm"))
        self.assertTrue(is_subsequence_match("readme.md", "RDM"))

    def test_needle_longer_than_haystack_fails(self) -> None:
        self.assertFalse(is_subsequence_match("ab", "abc"))

    def test_repeated_characters_need_distinct_positions(self) -> None:
        self.assertTrue(is_subsequence_match("aXa", "aa"))
        self.assertFalse(is_subsequence_match("aX", "aa"))


class SearchableStringTests(unittest.TestCase):
    def test_composes_path_label_and_text(self) -> None:
        self.assertEqual(searchable_string("src/a.ts", "bug", "fix it"), "src/a.ts TODO(bug): fix it")


class FilterRecordsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.records = [
            _record("bug", "null deref", "src/auth.ts"),
            _record("bug-123", "race", "src/db.ts"),
            _record("perf", "slow query", "src/db.ts"),
        ]

    def test_empty_pattern_returns_everything_in_order(self) -> None:
        self.assertEqual(filter_records(self.records, ""), self.records)

    def test_label_pattern_is_exact_and_case_sensitive(self) -> None:
        self.assertEqual(filter_records(self.records, "@bug"), [self.records[0]])
        self.assertEqual(filter_records(self.records, "@Bug"), [])
        self.assertEqual(filter_records(self.records, "@ bug"), [])
        self.assertEqual(label_filter("bug-123"), "@bug-123")
        self.assertEqual(filter_records(self.records, label_filter("bug-123")), [self.records[1]])

    def test_bare_at_sign_matches_only_empty_labels(self) -> None:
        empty = _record("", "orphan")
        self.assertEqual(filter_records([*self.records, empty], "@"), [empty])

    def test_fuzzy_pattern_spans_path_label_and_text(self) -> None:
        self.assertEqual(filter_records(self.records, "dbperf"), [self.records[2]])
        self.assertEqual(filter_records(self.records, "auth null"), [self.records[0]])
        self.assertEqual(filter_records(self.records, "zzz"), [])

    def test_arbitrary_characters_are_valid_patterns(self) -> None:
        for pattern in ("(", "[*", "\\", "TODO(", ")):"):
            with self.subTest(pattern=pattern):
                self.assertIsInstance(filter_records(self.records, pattern), list)


if __name__ == "__main__":
    unittest.main()
