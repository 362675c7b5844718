from __future__ import annotations

import argparse
import sys

from . import __version__
from .commands import Command, run_command
from .config import load_termnotes_toml
from .paths import resolve_paths, viewer_disabled_by_env
from .runtime_log import RuntimeLog
from .store import FileStore, StorageError
from .viewer import Viewer


HELP_HINT = "Try 'tn --help' for usage and examples."
TASK_VERBS = {"task", "t"}
NOTE_VERBS = {"note", "n"}
TOGGLE_VERB = "x"

EPILOG = """\
examples:
  tn                      show today's file
  tn task Write tests     add a task (alias: t)
  tn note Refactor parser add a note (alias: n)
  tn Call the bank        add a note
  tn x 2                  toggle task 2
  tn -t                   print today's tasks
  tn -n                   print today's notes
"""


class UsageError(RuntimeError):
    pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tn",
        description="termnotes: one Markdown file of tasks and notes per day.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-t", "--tasks", action="store_true", help="Print today's tasks (with text: add a task).")
    parser.add_argument("-n", "--notes", action="store_true", help="Print today's notes.")
    parser.add_argument("words", nargs="*", help="A verb (task/t, note/n, x) and its arguments, or note text.")
    return parser


def _parse_index(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise UsageError(f"x expects a task number, got {raw!r}.") from None


def resolve_command(args: argparse.Namespace) -> Command:
    """Turn parsed arguments into a Command, rejecting bad shapes."""

    words = [str(item) for item in (args.words or [])]
    if args.tasks and args.notes:
        raise UsageError("Cannot combine -t and -n. Use one or the other.")
    if (args.tasks or args.notes) and words and words[0] in TASK_VERBS | NOTE_VERBS | {TOGGLE_VERB}:
        raise UsageError(f"'{words[0]}' cannot be combined with -t or -n.")

    if args.notes:
        if words:
            raise UsageError("-n with text is invalid. To add a note, pass text without -n.")
        return Command("list_notes")

    if args.tasks:
        if not words:
            return Command("list_tasks")
        return Command("add_task", text=" ".join(words))

    if not words:
        return Command("show")

    verb, rest = words[0], words[1:]
    if verb in TASK_VERBS:
        if not rest:
            raise UsageError(f"'{verb}' needs the task text.")
        return Command("add_task", text=" ".join(rest))
    if verb in NOTE_VERBS:
        if not rest:
            raise UsageError(f"'{verb}' needs the note text.")
        return Command("add_note", text=" ".join(rest))
    if verb == TOGGLE_VERB:
        if len(rest) != 1:
            raise UsageError("x expects exactly one task number.")
        return Command("toggle", index=_parse_index(rest[0]))
    return Command("add_note", text=" ".join(words))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        command = resolve_command(args)
    except UsageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(HELP_HINT, file=sys.stderr)
        return 2

    root_paths = resolve_paths()
    cfg, warn = load_termnotes_toml(root_paths.config_toml)
    paths = resolve_paths(configured_notes_dir=cfg.notes.dir)
    log = RuntimeLog(log_file=paths.log_file if cfg.logging.enabled else None)
    if warn:
        log.warn(f"Warning: {warn}")

    store = FileStore(paths.notes_dir, atomic_writes=cfg.store.atomic_writes, use_lock=cfg.store.lock)
    viewer = Viewer(candidates=cfg.viewer.order, enabled=cfg.viewer.enabled and not viewer_disabled_by_env())

    try:
        return run_command(command, store=store, viewer=viewer, log=log)
    except StorageError as exc:
        log.error(f"Error: {exc}")
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
