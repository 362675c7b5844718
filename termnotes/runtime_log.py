from __future__ import annotations

import contextlib
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
import sys
from typing import Callable, TextIO


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def format_log_line(stamp: datetime, *, level: str, message: str) -> str:
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    iso = stamp.astimezone(timezone.utc).replace(microsecond=0).isoformat()
    return f"{iso} [{level.lower()}] {' '.join(message.split())}\n"


def append_log_line(log_file: Path, line: str) -> None:
    with contextlib.suppress(OSError):
        log_file.parent.mkdir(parents=True, exist_ok=True)
        with log_file.open("a", encoding="utf-8") as handle:
            handle.write(line)


@dataclass(frozen=True)
class RuntimeLog:
    """Append-only run log; warnings and errors are echoed to stderr."""

    log_file: Path | None = None
    stream: TextIO | None = None
    clock: Callable[[], datetime] = utc_now

    def _emit(self, message: str, *, level: str, console: bool) -> None:
        if self.log_file is not None:
            append_log_line(self.log_file, format_log_line(self.clock(), level=level, message=message))
        if console:
            print(message, file=self.stream or sys.stderr)

    def info(self, message: str) -> None:
        self._emit(message, level="info", console=False)

    def warn(self, message: str) -> None:
        self._emit(message, level="warn", console=True)

    def error(self, message: str) -> None:
        self._emit(message, level="error", console=True)
