"""Tests for highlighted source context around a TODO."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from lazytodo.preview import colorize_source, render_context
from lazytodo.scanner import scan_file


class RenderContextTests(unittest.TestCase):
    def test_plain_context_marks_todo_line(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            target = root / "a.py"
            target.write_text("one = 1\ntwo = 2\n# TODO(x): here\nfour = 4\nfive = 5\nsix = 6\n", encoding="utf-8")
            record = scan_file(target, root)[0]

            context = render_context(record, context=1, no_color=True)

        self.assertEqual(context.split("\n"), [" 2 │ two = 2", ">3 │ # TODO(x): here", " 4 │ four = 4"])

    def test_context_clamps_at_file_start(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            target = root / "a.md"
            target.write_text("TODO(doc): top\nnext\n", encoding="utf-8")
            record = scan_file(target, root)[0]

            context = render_context(record, context=2, no_color=True)

        self.assertEqual(context.split("\n")[0], ">1 │ TODO(doc): top")

    def test_colored_context_keeps_line_count(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            target = root / "a.py"
            target.write_text("\n\n# TODO(x): here\nvalue = 1\n", encoding="utf-8")
            record = scan_file(target, root)[0]

            context = render_context(record, context=2)

        self.assertEqual(len(context.split("\n")), 5)
        self.assertIn("\033[", context)

    def test_unreadable_file_yields_empty_context(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            target = root / "a.py"
            target.write_text("# TODO(x): here\n", encoding="utf-8")
            record = scan_file(target, root)[0]
            target.unlink()

            with self.assertLogs("lazytodo.preview", level="WARNING"):
                self.assertEqual(render_context(record), "")

    def test_colorize_source_falls_back_for_unknown_files(self) -> None:
        self.assertIn("plain", colorize_source("plain words\n", "notes.unknownext"))


if __name__ == "__main__":
    unittest.main()
