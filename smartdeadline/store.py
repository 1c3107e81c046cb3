from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from smartdeadline.models.task import Task
from smartdeadline.observability import get_json_logger, get_metrics
from smartdeadline.storage.interface import StoragePort, StorageWriteError

ChangeListener = Callable[["TaskStore"], None]


class PositionError(IndexError):
    """Raised for a position outside the current collection."""


class TaskStore:
    """In-memory owner of the ordered task collection.

    - Positions are dense 0..n-1; removing shifts later tasks down by one
    - Every mutation persists the full collection once, then notifies listeners
    - A failed save keeps the in-memory change and marks the store dirty
    - Unreadable stored records are kept out of positions but never dropped
    """

    def __init__(self, storage: StoragePort, *, on_change: ChangeListener | None = None) -> None:
        self._storage = storage
        self._tasks: list[Task] = []
        self._listeners: list[ChangeListener] = [on_change] if on_change else []
        # Stored records that could not become tasks; written back on every save
        self._unreadable: list[dict[str, Any]] = []
        self._logger = get_json_logger("smartdeadline.store")
        self.dirty = False
        self.last_save_error: str | None = None

    # ----------------------------
    # Queries
    # ----------------------------
    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def list_tasks(self) -> list[Task]:
        return list(self._tasks)

    def get(self, index: int) -> Task:
        self._check_position(index)
        return self._tasks[index]

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def unreadable_records(self) -> list[dict[str, Any]]:
        return [dict(r) for r in self._unreadable]

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    # ----------------------------
    # Lifecycle
    # ----------------------------
    def load_all(self) -> None:
        loaded: list[Task] = []
        unreadable: list[dict[str, Any]] = []
        for i, record in enumerate(self._storage.load()):
            try:
                loaded.append(Task.from_record(record))
            except ValidationError as exc:
                unreadable.append(record)
                self._logger.warning(
                    "keeping unreadable stored task aside",
                    extra={
                        "event": "task_record_unreadable",
                        "position": i,
                        "metadata": {"error": str(exc)[:200]},
                    },
                )
        self._tasks = loaded
        self._unreadable = unreadable
        self.dirty = False
        self.last_save_error = None
        self._logger.debug("tasks loaded", extra={"event": "tasks_loaded", "count": len(loaded)})

    # ----------------------------
    # Mutations
    # ----------------------------
    def append(self, task: Task) -> None:
        self._tasks.append(task)
        self._committed("append", len(self._tasks) - 1)

    def replace_at(self, index: int, task: Task) -> None:
        self._check_position(index)
        self._tasks[index] = task
        self._committed("replace", index)

    def remove_at(self, index: int) -> Task:
        self._check_position(index)
        removed = self._tasks.pop(index)
        self._committed("remove", index)
        return removed

    def retry_save(self) -> bool:
        """Persist again after a failed save. Returns True when storage is in sync."""
        if not self.dirty:
            return True
        return self._persist()

    # ----------------------------
    # Internal helpers
    # ----------------------------
    def _check_position(self, index: int) -> None:
        # bool is an int subclass; a stray True must not address position 1
        if isinstance(index, bool) or not isinstance(index, int):
            raise PositionError(f"position must be an integer, got {index!r}")
        if index < 0 or index >= len(self._tasks):
            raise PositionError(f"position {index} out of range for {len(self._tasks)} tasks")

    def _records(self) -> list[dict[str, Any]]:
        return [t.to_record() for t in self._tasks] + [dict(r) for r in self._unreadable]

    def _persist(self) -> bool:
        metrics = get_metrics()
        try:
            self._storage.save(self._records())
        except StorageWriteError as exc:
            self.dirty = True
            self.last_save_error = str(exc)
            metrics.increment("storage_save_errors")
            self._logger.error(
                "saving tasks failed; changes kept in memory",
                extra={"event": "storage_save_failed", "metadata": {"error": str(exc)[:200]}},
            )
            return False
        self.dirty = False
        self.last_save_error = None
        metrics.increment("storage_saves")
        return True

    def _committed(self, op: str, position: int) -> None:
        get_metrics().increment("task_mutations", {"op": op})
        self._logger.debug(
            "task collection changed",
            extra={
                "event": "task_mutation",
                "op": op,
                "position": position,
                "count": len(self._tasks),
            },
        )
        self._persist()
        for listener in list(self._listeners):
            listener(self)


__all__ = ["PositionError", "TaskStore"]
