from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

DEFAULT_STORAGE_KEY = "sd_tasks_v4"
BACKENDS = ("local", "redis")


@dataclass(slots=True)
class AppConfig:
    storage_key: str
    backend: str
    data_dir: str
    origin: str
    redis_url: str


def _read_backend(raw: str | None) -> str:
    value = (raw or "").strip().lower()
    return value if value in BACKENDS else "local"


def load_config(env: dict[str, str] | None = None) -> AppConfig:
    e: dict[str, Any] = dict(os.environ)
    if env:
        e.update(env)
    data_dir = (e.get("SMARTDEADLINE_DATA_DIR") or "").strip() or os.path.join(
        os.path.expanduser("~"), ".smartdeadline"
    )
    return AppConfig(
        storage_key=(e.get("SMARTDEADLINE_STORAGE_KEY") or "").strip() or DEFAULT_STORAGE_KEY,
        backend=_read_backend(e.get("SMARTDEADLINE_BACKEND")),
        data_dir=data_dir,
        origin=(e.get("SMARTDEADLINE_ORIGIN") or "").strip() or "local",
        redis_url=e.get("REDIS_URL") or "redis://localhost:6379/0",
    )


__all__ = ["AppConfig", "DEFAULT_STORAGE_KEY", "load_config"]
