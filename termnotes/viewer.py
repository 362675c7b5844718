from __future__ import annotations

from pathlib import Path
import shutil
import subprocess
from typing import Callable, Sequence

from .config import DEFAULT_VIEWER_ORDER


FALLBACK_VIEWER = "cat"
PROBE_TIMEOUT_S = 5.0


def command_exists(name: str, *, timeout_s: float = PROBE_TIMEOUT_S) -> bool:
    """True when `<name> --version` runs and exits 0."""

    if shutil.which(name) is None:
        return False
    try:
        proc = subprocess.run(
            [name, "--version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=timeout_s,
            check=False,
        )
    except (OSError, subprocess.SubprocessError):
        return False
    return proc.returncode == 0


def detect_viewer(
    candidates: Sequence[str] = DEFAULT_VIEWER_ORDER,
    *,
    exists: Callable[[str], bool] = command_exists,
) -> str:
    for name in candidates:
        if name == FALLBACK_VIEWER:
            return name
        if exists(name):
            return name
    return FALLBACK_VIEWER


def viewer_command(viewer: str, path: Path) -> list[str]:
    if viewer == "bat":
        return [viewer, "--style=plain", str(path)]
    return [viewer, str(path)]


class Viewer:
    """Shows a day file through the first available pager/formatter."""

    def __init__(
        self,
        *,
        candidates: Sequence[str] = DEFAULT_VIEWER_ORDER,
        enabled: bool = True,
        exists: Callable[[str], bool] = command_exists,
        run: Callable[..., object] = subprocess.run,
    ) -> None:
        self.candidates = tuple(candidates)
        self.enabled = enabled
        self._exists = exists
        self._run = run

    def show_file(self, path: Path) -> None:
        if not self.enabled:
            return
        viewer = detect_viewer(self.candidates, exists=self._exists)
        self._run(viewer_command(viewer, path), check=False)
