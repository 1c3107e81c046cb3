from __future__ import annotations

import json
import os
import re
import tempfile
from collections.abc import Sequence
from pathlib import Path

from smartdeadline.observability import get_json_logger

from .codec import decode_records, encode_records
from .interface import StoragePort, StoredRecord, StorageWriteError

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class LocalStorage:
    """Origin-scoped persistent key/value text store.

    Stands in for a browser's local storage:
    - One JSON object file per origin under `data_dir`
    - Values are plain strings; callers do their own encoding
    - Every `set_item` rewrites the file via a temp file + os.replace
    """

    def __init__(self, data_dir: str | os.PathLike[str], *, origin: str = "local") -> None:
        self._dir = Path(data_dir)
        self._origin = origin
        safe = _UNSAFE_CHARS.sub("_", origin).strip("_") or "local"
        self._path = self._dir / f"{safe}.json"
        self._logger = get_json_logger("smartdeadline.storage")

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            self._logger.warning(
                "local storage file is unreadable; treating as empty",
                extra={
                    "event": "local_storage_corrupt",
                    "metadata": {"path": str(self._path), "error": str(exc)[:200]},
                },
            )
            return {}
        try:
            data = json.loads(text)
        except ValueError:
            self._logger.warning(
                "local storage file is corrupt; treating as empty",
                extra={"event": "local_storage_corrupt", "metadata": {"path": str(self._path)}},
            )
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: dict[str, str]) -> None:
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._dir, prefix=".tmp-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(items, f, ensure_ascii=False)
                os.replace(tmp, self._path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as exc:
            raise StorageWriteError(f"could not write {self._path}: {exc}") from exc

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if items.pop(key, None) is not None:
            self._write_all(items)

    def keys(self) -> list[str]:
        return sorted(self._read_all())


class LocalStorageAdapter(StoragePort):
    """Keeps the whole collection as one JSON array under a single key."""

    def __init__(self, key: str, storage: LocalStorage) -> None:
        self.key = key
        self._storage = storage

    def save(self, records: Sequence[StoredRecord]) -> None:
        self._storage.set_item(self.key, encode_records(records))

    def load(self) -> list[StoredRecord]:
        return decode_records(self._storage.get_item(self.key), key=self.key)


__all__ = ["LocalStorage", "LocalStorageAdapter"]
