from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

StoredRecord = dict[str, Any]


class StorageError(Exception):
    """Base error for storage backends."""


class StorageWriteError(StorageError):
    """Raised when a backend could not persist the collection."""


class StoragePort(Protocol):
    """Save/load capability for the whole task collection.

    Keep this tiny and stable so a second backend can be added without
    changing the Task Store.
    """

    def save(self, records: Sequence[StoredRecord]) -> None:
        """Replace the stored collection with `records`."""

    def load(self) -> list[StoredRecord]:
        """Return the stored collection, or an empty list when nothing usable is stored."""


__all__ = ["StoragePort", "StorageError", "StorageWriteError", "StoredRecord"]
