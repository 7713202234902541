"""
Process-wide config cache.

Entries are keyed by the resolved file path and dropped as soon as the file's
mtime or size changes, so edits made by another process are picked up without
``force_reload``. Callers layer per-invocation overrides (``--base-url``,
``--token``) on top without touching the cached object.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from palytt_client.config.loader import get_config_path, load_config
from palytt_client.config.schema import ClientConfig

_FileStamp = tuple[int, int] | None

_lock = threading.RLock()
_cache: dict[Path, tuple[_FileStamp, ClientConfig]] = {}


def _resolve(config_path: Path | None) -> Path:
    return Path(config_path or get_config_path()).expanduser().resolve()


def _stamp(path: Path) -> _FileStamp:
    try:
        stat = path.stat()
    except FileNotFoundError:
        return None
    return stat.st_mtime_ns, stat.st_size


def get_config(
    *, config_path: Path | None = None, force_reload: bool = False, **overrides: Any
) -> ClientConfig:
    """
    Return the config stored at ``config_path`` with ``overrides`` applied.

    Overrides whose value is ``None`` or ``""`` are ignored so unset CLI
    options can be passed straight through. Overrides are validated like any
    other field and raise ``ValueError`` when invalid.
    """
    path = _resolve(config_path)
    with _lock:
        stamp = _stamp(path)
        cached = _cache.get(path)
        if force_reload or cached is None or cached[0] != stamp:
            cached = (stamp, load_config(path))
            _cache[path] = cached
        config = cached[1]

    updates = {key: value for key, value in overrides.items() if value not in (None, "")}
    if not updates:
        return config
    return ClientConfig(**{**config.model_dump(), **updates})


def clear_config_cache(*, config_path: Path | None = None) -> None:
    """Clear one cached entry, or all of them."""
    with _lock:
        if config_path is None:
            _cache.clear()
            return
        _cache.pop(_resolve(config_path), None)
