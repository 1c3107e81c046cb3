from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Any

from smartdeadline.observability import get_json_logger

from .codec import decode_records, encode_records
from .interface import StoragePort, StoredRecord, StorageWriteError


class RedisStorageAdapter(StoragePort):
    """Redis-backed storage adapter.

    - save: SET of the full JSON array under `key` (last writer wins)
    - load: GET of the same key, failing open on absent/corrupt values
    """

    def __init__(
        self,
        key: str,
        redis_url: str | None = None,
        *,
        client: Any | None = None,
    ) -> None:
        try:
            import redis
        except ImportError as exc:  # pragma: no cover - import-time error path
            raise RuntimeError("redis package is required for RedisStorageAdapter") from exc

        self._errors = redis.exceptions.RedisError
        url = redis_url or os.getenv("REDIS_URL", "redis://localhost:6379/0")
        if client is not None:
            self._redis = client
        else:
            # decode_responses=True returns str everywhere for easier JSON handling
            self._redis = redis.from_url(url, decode_responses=True)
        self.key = key
        self._logger = get_json_logger("smartdeadline.storage")

    def get_client(self) -> Any:
        return self._redis

    def save(self, records: Sequence[StoredRecord]) -> None:
        try:
            self._redis.set(self.key, encode_records(records))
        except self._errors as exc:
            raise StorageWriteError(f"redis SET {self.key} failed: {exc}") from exc

    def load(self) -> list[StoredRecord]:
        try:
            raw = self._redis.get(self.key)
        except self._errors as exc:
            self._logger.error(
                "redis read failed; starting empty",
                extra={
                    "event": "storage_read_failed",
                    "key": self.key,
                    "metadata": {"error": str(exc)[:200]},
                },
            )
            return []
        return decode_records(raw, key=self.key)


__all__ = ["RedisStorageAdapter"]
