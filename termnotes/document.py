from __future__ import annotations

from dataclasses import dataclass, replace
import re
from typing import assert_never


TASKS_HEADING = "## Tasks"
NOTES_HEADING = "## Notes"

_TASK_LINE_RE = re.compile(r"^-\s\[(?P<state>[ x])\]\s(?P<text>.*)$")
_NOTE_LINE_RE = re.compile(r"^-\s(?P<text>.*)$")


@dataclass(frozen=True)
class TaskItem:
    text: str
    done: bool = False


@dataclass(frozen=True)
class NoteItem:
    text: str


@dataclass(frozen=True)
class Document:
    tasks: tuple[TaskItem, ...] = ()
    notes: tuple[NoteItem, ...] = ()


@dataclass(frozen=True)
class AddTask:
    text: str


@dataclass(frozen=True)
class AddNote:
    text: str


@dataclass(frozen=True)
class ToggleTask:
    index: int


DocumentAction = AddTask | AddNote | ToggleTask


class InvalidTaskIndex(RuntimeError):
    def __init__(self, index: int) -> None:
        super().__init__(f"invalid task index: {index}")
        self.index = index


def _split_lines(text: str) -> list[str]:
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def _find_heading(lines: list[str], heading: str) -> int | None:
    for idx, line in enumerate(lines):
        if line.strip() == heading:
            return idx
    return None


def _clean_text(text: str) -> str:
    return " ".join(part.strip() for part in (text or "").splitlines()).strip()


def parse_document(text: str) -> Document:
    """Parse a day file into a Document.

    Only the first `## Tasks` and first `## Notes` headings count. When either
    is missing the file is treated as empty. Lines that do not look like items
    are skipped.
    """

    lines = _split_lines(text)
    tasks_at = _find_heading(lines, TASKS_HEADING)
    notes_at = _find_heading(lines, NOTES_HEADING)
    if tasks_at is None or notes_at is None:
        return Document()

    tasks: list[TaskItem] = []
    for line in lines[tasks_at + 1 : notes_at]:
        match = _TASK_LINE_RE.match(line)
        if not match:
            continue
        item_text = match.group("text").strip()
        if not item_text:
            continue
        tasks.append(TaskItem(text=item_text, done=match.group("state") == "x"))

    notes: list[NoteItem] = []
    for line in lines[notes_at + 1 :]:
        match = _NOTE_LINE_RE.match(line)
        if not match:
            continue
        item_text = match.group("text").strip()
        if not item_text:
            continue
        notes.append(NoteItem(text=item_text))

    return Document(tasks=tuple(tasks), notes=tuple(notes))


def format_task_line(task: TaskItem) -> str:
    box = "x" if task.done else " "
    return f"- [{box}] {task.text}"


def format_note_line(note: NoteItem) -> str:
    return f"- {note.text}"


def render_document(doc: Document) -> str:
    task_block = "".join(f"{format_task_line(task)}\n" for task in doc.tasks)
    note_block = "".join(f"{format_note_line(note)}\n" for note in doc.notes)
    return f"{TASKS_HEADING}\n{task_block}\n{NOTES_HEADING}\n{note_block}"


CANONICAL_EMPTY = render_document(Document())


def reduce_document(doc: Document, action: DocumentAction) -> Document:
    """Apply one action and return the next Document.

    Raises InvalidTaskIndex when a toggle points outside the task list; the
    input document is never modified.
    """

    if isinstance(action, AddTask):
        cleaned = _clean_text(action.text)
        if not cleaned:
            return doc
        return replace(doc, tasks=doc.tasks + (TaskItem(text=cleaned, done=False),))
    if isinstance(action, AddNote):
        cleaned = _clean_text(action.text)
        if not cleaned:
            return doc
        return replace(doc, notes=doc.notes + (NoteItem(text=cleaned),))
    if isinstance(action, ToggleTask):
        idx = action.index
        if idx < 0 or idx >= len(doc.tasks):
            raise InvalidTaskIndex(idx)
        current = doc.tasks[idx]
        toggled = TaskItem(text=current.text, done=not current.done)
        return replace(doc, tasks=doc.tasks[:idx] + (toggled,) + doc.tasks[idx + 1 :])
    assert_never(action)
