from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping


HOME_DIRNAME = ".termnotes"
TEST_DIRNAME = ".termnotes-test"
CONFIG_FILENAME = "config.toml"
LOG_FILENAME = "termnotes.log"


def _truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def is_test_mode(env: Mapping[str, str] | None = None) -> bool:
    env = os.environ if env is None else env
    return (env.get("TERMNOTES_ENV") or "").strip().lower() == "test"


def viewer_disabled_by_env(env: Mapping[str, str] | None = None) -> bool:
    env = os.environ if env is None else env
    return _truthy(env.get("TERMNOTES_NO_VIEWER"))


def base_root(env: Mapping[str, str] | None = None, cwd: Path | None = None) -> Path:
    """Directory holding notes, logs and config.

    Test mode keeps everything under the working directory so test runs never
    touch the real home directory.
    """

    env = os.environ if env is None else env
    if is_test_mode(env):
        return (cwd or Path.cwd()) / TEST_DIRNAME
    override = (env.get("TERMNOTES_HOME") or "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / HOME_DIRNAME


@dataclass(frozen=True)
class TermnotesPaths:
    root: Path
    config_toml: Path
    notes_dir: Path
    logs_dir: Path

    @property
    def log_file(self) -> Path:
        return self.logs_dir / LOG_FILENAME


def resolve_paths(
    env: Mapping[str, str] | None = None,
    cwd: Path | None = None,
    *,
    configured_notes_dir: str = "",
) -> TermnotesPaths:
    env = os.environ if env is None else env
    root = base_root(env, cwd)

    notes_dir = root / "notes"
    override = (env.get("TERMNOTES_NOTES_DIR") or "").strip()
    if override:
        notes_dir = Path(override).expanduser()
    elif configured_notes_dir.strip():
        configured = Path(configured_notes_dir.strip()).expanduser()
        notes_dir = configured if configured.is_absolute() else root / configured

    return TermnotesPaths(
        root=root,
        config_toml=root / CONFIG_FILENAME,
        notes_dir=notes_dir,
        logs_dir=root / "logs",
    )
