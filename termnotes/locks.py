from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator


@contextmanager
def notes_lock(lock_path: Path) -> Iterator[IO[str] | None]:
    """Hold an exclusive advisory lock for one load/save cycle.

    Blocks until any other `tn` process working on the same notes directory
    releases it. Without fcntl (non-POSIX platforms) the cycle runs unlocked
    and None is yielded.
    """

    try:
        import fcntl  # type: ignore
    except ModuleNotFoundError:
        yield None
        return

    lock_path.parent.mkdir(parents=True, exist_ok=True)
    handle = lock_path.open("a+", encoding="utf-8")
    try:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        try:
            yield handle
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
    finally:
        handle.close()
