from __future__ import annotations

from contextlib import ExitStack, contextmanager
from datetime import date
import os
from pathlib import Path
from typing import Callable, Iterator

from .document import CANONICAL_EMPTY, Document, parse_document, render_document
from .locks import notes_lock


LOCK_FILENAME = ".termnotes.lock"


class StorageError(RuntimeError):
    pass


def day_path(notes_dir: Path, day: date) -> Path:
    return notes_dir / f"{day.isoformat()}.md"


def _write_atomic(path: Path, content: str) -> None:
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        tmp_path.write_text(content, encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


class FileStore:
    """Owns the day -> file mapping and every read/write of day files."""

    def __init__(
        self,
        notes_dir: Path,
        *,
        today: Callable[[], date] = date.today,
        atomic_writes: bool = True,
        use_lock: bool = True,
    ) -> None:
        self.notes_dir = notes_dir
        self._today = today
        self._atomic_writes = atomic_writes
        self._use_lock = use_lock

    def today_path(self) -> Path:
        return day_path(self.notes_dir, self._today())

    def ensure_today_file(self) -> Path:
        path = self.today_path()
        try:
            self.notes_dir.mkdir(parents=True, exist_ok=True)
            if not path.exists():
                path.write_text(CANONICAL_EMPTY, encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"cannot prepare {path}: {exc}") from exc
        return path

    def load_today_document(self) -> tuple[Path, Document]:
        path = self.ensure_today_file()
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"cannot read {path}: {exc}") from exc
        return path, parse_document(text)

    def save_document(self, path: Path, doc: Document) -> None:
        content = render_document(doc)
        try:
            if self._atomic_writes:
                _write_atomic(path, content)
            else:
                path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"cannot write {path}: {exc}") from exc

    @contextmanager
    def locked(self) -> Iterator[None]:
        with ExitStack() as stack:
            if self._use_lock:
                try:
                    stack.enter_context(notes_lock(self.notes_dir / LOCK_FILENAME))
                except OSError as exc:
                    raise StorageError(f"cannot lock {self.notes_dir}: {exc}") from exc
            yield
