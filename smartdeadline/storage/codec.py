from __future__ import annotations

import json
from collections.abc import Sequence

from smartdeadline.observability import get_json_logger

from .interface import StoredRecord


def encode_records(records: Sequence[StoredRecord]) -> str:
    return json.dumps(list(records), ensure_ascii=False, separators=(",", ":"))


def decode_records(raw: str | bytes | None, *, key: str) -> list[StoredRecord]:
    """Decode a stored JSON array, failing open to an empty list.

    Absent values, invalid JSON and non-list payloads all read as "no data".
    Non-object entries inside the array are dropped.
    """
    if raw is None or raw == "" or raw == b"":
        return []
    logger = get_json_logger("smartdeadline.storage")
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        logger.warning(
            "stored tasks are not valid JSON; starting empty",
            extra={
                "event": "storage_decode_failed",
                "key": key,
                "metadata": {"error": str(exc)[:200]},
            },
        )
        return []
    if not isinstance(data, list):
        logger.warning(
            "stored tasks are not a JSON array; starting empty",
            extra={"event": "storage_decode_failed", "key": key},
        )
        return []
    return [item for item in data if isinstance(item, dict)]


__all__ = ["encode_records", "decode_records"]
