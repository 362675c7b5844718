from __future__ import annotations

from datetime import date
from pathlib import Path
from tempfile import TemporaryDirectory
import unittest
from unittest.mock import patch

from termnotes.document import AddTask, Document, NoteItem, TaskItem, reduce_document
from termnotes.store import FileStore, StorageError, day_path


FIXED_DAY = date(2024, 3, 7)


class TestFileStore(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = TemporaryDirectory()
        self.notes_dir = Path(self._tmp.name) / "nested" / "notes"
        self.store = FileStore(self.notes_dir, today=lambda: FIXED_DAY)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_today_path_is_zero_padded(self) -> None:
        self.assertEqual(self.notes_dir / "2024-03-07.md", self.store.today_path())
        self.assertEqual(self.notes_dir / "2024-11-23.md", day_path(self.notes_dir, date(2024, 11, 23)))

    def test_ensure_creates_directory_and_canonical_file(self) -> None:
        path = self.store.ensure_today_file()
        self.assertTrue(self.notes_dir.is_dir())
        self.assertEqual("## Tasks\n\n## Notes\n", path.read_text(encoding="utf-8"))

    def test_ensure_never_truncates(self) -> None:
        path = self.store.ensure_today_file()
        path.write_text("## Tasks\n- [ ] keep me\n\n## Notes\n", encoding="utf-8")
        self.assertEqual(path, self.store.ensure_today_file())
        self.assertIn("keep me", path.read_text(encoding="utf-8"))

    def test_load_parses_existing_file(self) -> None:
        self.notes_dir.mkdir(parents=True)
        (self.notes_dir / "2024-03-07.md").write_text(
            "## Tasks\n- [x] done\n\n## Notes\n- noted\n", encoding="utf-8"
        )
        path, doc = self.store.load_today_document()
        self.assertEqual(self.notes_dir / "2024-03-07.md", path)
        self.assertEqual(Document(tasks=(TaskItem("done", True),), notes=(NoteItem("noted"),)), doc)

    def test_save_overwrites_with_canonical_render(self) -> None:
        path, doc = self.store.load_today_document()
        path.write_text("junk\n## Tasks\n\n\n## Notes\n\n", encoding="utf-8")
        self.store.save_document(path, reduce_document(doc, AddTask("one")))
        self.assertEqual("## Tasks\n- [ ] one\n\n## Notes\n", path.read_text(encoding="utf-8"))
        self.assertEqual([path.name], sorted(p.name for p in self.notes_dir.iterdir() if p.suffix == ".md"))
        self.assertFalse(any(p.name.endswith(".tmp") for p in self.notes_dir.iterdir()))

    def test_save_without_atomic_writes(self) -> None:
        store = FileStore(self.notes_dir, today=lambda: FIXED_DAY, atomic_writes=False)
        path = store.ensure_today_file()
        store.save_document(path, Document(notes=(NoteItem("plain"),)))
        self.assertEqual("## Tasks\n\n## Notes\n- plain\n", path.read_text(encoding="utf-8"))

    def test_locked_creates_lock_file(self) -> None:
        with self.store.locked():
            path, _doc = self.store.load_today_document()
        self.assertTrue((self.notes_dir / ".termnotes.lock").exists())
        self.assertTrue(path.exists())

    def test_read_failure_is_storage_error(self) -> None:
        self.store.ensure_today_file()
        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            with self.assertRaises(StorageError) as ctx:
                self.store.load_today_document()
        self.assertIsInstance(ctx.exception.__cause__, PermissionError)

    def test_undecodable_file_is_storage_error(self) -> None:
        path = self.store.ensure_today_file()
        path.write_bytes(b"## Tasks\n- [ ] caf\xe9\n\n## Notes\n")
        with self.assertRaises(StorageError) as ctx:
            self.store.load_today_document()
        self.assertIsInstance(ctx.exception.__cause__, UnicodeDecodeError)
        self.assertIn("cannot read", str(ctx.exception))

    def test_unwritable_notes_dir_is_storage_error(self) -> None:
        blocker = Path(self._tmp.name) / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        store = FileStore(blocker / "notes", today=lambda: FIXED_DAY)
        with self.assertRaises(StorageError):
            store.ensure_today_file()


if __name__ == "__main__":
    unittest.main()
