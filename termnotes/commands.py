from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import sys
from typing import Literal, TextIO

from .document import (
    AddNote,
    AddTask,
    Document,
    DocumentAction,
    InvalidTaskIndex,
    ToggleTask,
    format_note_line,
    format_task_line,
    reduce_document,
)
from .runtime_log import RuntimeLog
from .store import FileStore
from .viewer import Viewer


CommandKind = Literal["show", "add_task", "add_note", "toggle", "list_tasks", "list_notes"]


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    text: str = ""
    index: int = 0  # 1-based, toggle only


def action_for(command: Command) -> DocumentAction | None:
    if command.kind == "add_task":
        return AddTask(command.text)
    if command.kind == "add_note":
        return AddNote(command.text)
    if command.kind == "toggle":
        return ToggleTask(command.index - 1)
    return None


def section_lines(doc: Document, section: Literal["tasks", "notes"]) -> list[str]:
    if section == "tasks":
        return [format_task_line(task) for task in doc.tasks] or ["(no tasks)"]
    return [format_note_line(note) for note in doc.notes] or ["(no notes)"]


def _apply(command: Command, *, store: FileStore, log: RuntimeLog) -> Path:
    action = action_for(command)
    with store.locked():
        path, doc = store.load_today_document()
        if action is None:
            return path
        try:
            updated = reduce_document(doc, action)
        except InvalidTaskIndex as exc:
            log.warn(f"Warning: no task #{exc.index + 1} in {path.name} ({len(doc.tasks)} tasks); nothing changed.")
            return path
        store.save_document(path, updated)
    log.info(f"{command.kind} saved {path}")
    return path


def run_command(
    command: Command,
    *,
    store: FileStore,
    viewer: Viewer,
    log: RuntimeLog | None = None,
    out: TextIO | None = None,
) -> int:
    """Run one resolved command: load, apply at most one action, save, show.

    StorageError propagates to the caller. An out-of-range toggle is only a
    warning and the file is still shown.
    """

    log = log or RuntimeLog()
    out = out or sys.stdout

    if command.kind in {"list_tasks", "list_notes"}:
        _path, doc = store.load_today_document()
        section = "tasks" if command.kind == "list_tasks" else "notes"
        print("\n".join(section_lines(doc, section)), file=out)
        return 0

    path = _apply(command, store=store, log=log)
    try:
        viewer.show_file(path)
    except OSError as exc:
        log.warn(f"Warning: could not start viewer: {exc}")
    return 0
