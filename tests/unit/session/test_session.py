"""Tests for session wiring between file events, the index, and the view model."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from lazytodo.session import SCAN_FAILED_MESSAGE, TodoSession
from lazytodo.watch import FileEvent


class TodoSessionTests(unittest.TestCase):
    def test_refresh_publishes_records_to_view_model(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.py").write_text("# TODO(x): one\n", encoding="utf-8")
            session = TodoSession(root)

            self.assertTrue(session.refresh())

        self.assertEqual([r.text for r in session.records()], ["one"])
        self.assertEqual(session.root, root)

    def test_enumeration_failure_notifies_and_keeps_previous_records(self) -> None:
        messages: list[str] = []
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve() / "ws"
            root.mkdir()
            (root / "a.py").write_text("# TODO(x): one\n", encoding="utf-8")
            session = TodoSession(root, notify=messages.append)
            session.refresh()

            (root / "a.py").unlink()
            root.rmdir()
            with self.assertLogs("lazytodo.session", level="ERROR"):
                self.assertFalse(session.refresh())

        self.assertEqual(messages, [SCAN_FAILED_MESSAGE])
        self.assertEqual(len(session.records()), 1)

    def test_saved_created_and_deleted_events_update_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            a = root / "a.py"
            a.write_text("# TODO(x): one\n", encoding="utf-8")
            session = TodoSession(root)
            session.refresh()

            a.write_text("# TODO(x): changed\n", encoding="utf-8")
            session.handle_event(FileEvent("saved", a))
            self.assertEqual([r.text for r in session.records()], ["changed"])

            b = root / "b.md"
            b.write_text("TODO(docs): write\n", encoding="utf-8")
            session.handle_event(FileEvent("created", b))
            self.assertEqual(sorted(r.label for r in session.records()), ["docs", "x"])

            a.unlink()
            session.handle_event(FileEvent("deleted", a))
            self.assertEqual([r.label for r in session.records()], ["docs"])

    def test_events_for_files_a_full_scan_would_skip_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            session = TodoSession(root)
            session.refresh()
            (root / "node_modules").mkdir()
            vendored = root / "node_modules" / "dep.js"
            vendored.write_text("// TODO(x): vendored\n", encoding="utf-8")
            image = root / "logo.png"
            image.write_bytes(b"TODO(x): not text")

            handled = session.handle_events([FileEvent("created", vendored), FileEvent("saved", image)])

        self.assertEqual(handled, 2)
        self.assertEqual(session.records(), ())

    def test_scope_to_label_and_clear_filter(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.py").write_text("# TODO(bug): a\n# TODO(bug-123): b\n", encoding="utf-8")
            session = TodoSession(root)
            session.refresh()

        self.assertEqual(session.scope_to_label("bug"), "@bug")
        self.assertEqual([r.label for r in session.view_model.filtered_records()], ["bug"])
        session.clear_filter()
        self.assertEqual(session.view_model.current_filter(), "")
        self.assertEqual(len(session.view_model.filtered_records()), 2)


if __name__ == "__main__":
    unittest.main()
