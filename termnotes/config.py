from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import tomllib


DEFAULT_VIEWER_ORDER = ("glow", "bat", "cat")


def _as_bool(value, *, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "y", "on"}:
            return True
        if lowered in {"0", "false", "no", "n", "off"}:
            return False
    return bool(default)


def _as_names(value) -> tuple[str, ...]:
    """Executable names from a string or list, first occurrence kept."""

    raw = [value] if isinstance(value, str) else value if isinstance(value, list) else []
    names: list[str] = []
    for item in raw:
        name = item.strip() if isinstance(item, str) else ""
        if name and name not in names:
            names.append(name)
    return tuple(names)


def _table(data: dict, key: str) -> dict:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class NotesConfig:
    dir: str = ""


@dataclass(frozen=True)
class ViewerConfig:
    enabled: bool = True
    order: tuple[str, ...] = DEFAULT_VIEWER_ORDER


@dataclass(frozen=True)
class StoreConfig:
    atomic_writes: bool = True
    lock: bool = True


@dataclass(frozen=True)
class LoggingConfig:
    enabled: bool = True


@dataclass(frozen=True)
class TermnotesConfig:
    notes: NotesConfig = field(default_factory=NotesConfig)
    viewer: ViewerConfig = field(default_factory=ViewerConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_termnotes_toml(path: Path) -> tuple[TermnotesConfig, str]:
    """Load user config from config.toml.

    Returns (config, warning). Warning is empty on success; a missing file is
    not a problem.
    """

    if not path.exists():
        return TermnotesConfig(), ""

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        return TermnotesConfig(), f"{path.name} parse failed: {exc}"

    notes = _table(data, "notes")
    viewer = _table(data, "viewer")
    store = _table(data, "store")
    logging = _table(data, "logging")

    order = _as_names(viewer.get("order")) or DEFAULT_VIEWER_ORDER

    cfg = TermnotesConfig(
        notes=NotesConfig(
            dir=str(notes.get("dir") or "").strip(),
        ),
        viewer=ViewerConfig(
            enabled=_as_bool(viewer.get("enabled"), default=ViewerConfig.enabled),
            order=order,
        ),
        store=StoreConfig(
            atomic_writes=_as_bool(store.get("atomic_writes"), default=StoreConfig.atomic_writes),
            lock=_as_bool(store.get("lock"), default=StoreConfig.lock),
        ),
        logging=LoggingConfig(
            enabled=_as_bool(logging.get("enabled"), default=LoggingConfig.enabled),
        ),
    )
    return cfg, ""
