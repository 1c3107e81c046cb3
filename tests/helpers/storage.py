from __future__ import annotations

import copy
from collections.abc import Sequence

from smartdeadline.storage.interface import StoragePort, StoredRecord, StorageWriteError


class InMemoryStorage(StoragePort):
    def __init__(self, records: list[StoredRecord] | None = None) -> None:
        self._records: list[StoredRecord] = copy.deepcopy(records or [])
        self.saves: list[list[StoredRecord]] = []
        self.fail_saves = False

    def save(self, records: Sequence[StoredRecord]) -> None:
        if self.fail_saves:
            raise StorageWriteError("quota exceeded")
        snapshot = copy.deepcopy(list(records))
        self.saves.append(snapshot)
        self._records = snapshot

    def load(self) -> list[StoredRecord]:
        return copy.deepcopy(self._records)


__all__ = ["InMemoryStorage"]
