from __future__ import annotations

import datetime as _dt
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, field_validator

from smartdeadline.models.task import Priority, Task
from smartdeadline.observability import get_json_logger
from smartdeadline.store import PositionError, TaskStore

NEW_POSITION = -1


class FormValidationError(ValueError):
    """Raised when submitted fields cannot become a task."""


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class FormSubmission(BaseModel):
    """Field set handed over by the form on submit."""

    position: int = NEW_POSITION
    title: str = ""
    deadline: str = ""
    priority: str = Priority.HIGH.value
    progress: int = 0
    notes: str = ""

    @field_validator("title", "notes", "deadline")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()

    @classmethod
    def from_task(cls, position: int, task: Task) -> FormSubmission:
        return cls(position=position, **task.to_record())

    def to_task(self) -> Task:
        return Task(
            title=self.title,
            deadline=self.deadline,
            priority=self.priority,
            progress=self.progress,
            notes=self.notes,
        )


def validate_submission(sub: FormSubmission) -> None:
    if not sub.title:
        raise FormValidationError("Title must not be empty!")
    if not 0 <= sub.progress <= 100:
        raise FormValidationError("Progress must be between 0 and 100.")
    if sub.deadline:
        try:
            _dt.date.fromisoformat(sub.deadline)
        except ValueError as exc:
            raise FormValidationError("Deadline must be a date (YYYY-MM-DD).") from exc


@dataclass(slots=True)
class FormResult:
    ok: bool
    error: str | None = None


class TaskForm:
    """Create/edit form state machine over a TaskStore.

    CREATE (position -1) appends on submit; EDIT replaces the task at the
    selected position. Any successful submit or delete returns to CREATE.
    """

    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self.position = NEW_POSITION
        self._logger = get_json_logger("smartdeadline.forms")

    @property
    def mode(self) -> FormMode:
        return FormMode.CREATE if self.position == NEW_POSITION else FormMode.EDIT

    def reset(self) -> None:
        self.position = NEW_POSITION

    def begin_edit(self, position: int) -> FormSubmission:
        task = self._store.get(position)
        self.position = position
        return FormSubmission.from_task(position, task)

    def submit(self, sub: FormSubmission) -> FormResult:
        try:
            validate_submission(sub)
        except FormValidationError as exc:
            return FormResult(ok=False, error=str(exc))
        # The form's own position decides append vs replace; a submission may
        # omit it (-1) but must not name a different task.
        if sub.position not in (NEW_POSITION, self.position):
            self._logger.warning(
                "submit rejected for mismatched position",
                extra={"event": "position_mismatch", "position": sub.position},
            )
            return FormResult(
                ok=False,
                error=f"Form is not editing task {sub.position}; select it with edit first.",
            )
        task = sub.to_task()
        try:
            if self.mode is FormMode.CREATE:
                self._store.append(task)
            else:
                self._store.replace_at(self.position, task)
        except PositionError as exc:
            self._logger.warning(
                "submit rejected for stale position",
                extra={"event": "stale_position", "position": self.position},
            )
            self.reset()
            return FormResult(ok=False, error=f"Task no longer exists: {exc}")
        self.reset()
        return FormResult(ok=True)

    def delete(self, position: int, confirm: Callable[[], bool]) -> FormResult:
        if not confirm():
            return FormResult(ok=False, error="Delete cancelled.")
        try:
            self._store.remove_at(position)
        except PositionError as exc:
            self._logger.warning(
                "delete rejected for stale position",
                extra={"event": "stale_position", "position": position},
            )
            return FormResult(ok=False, error=f"Task no longer exists: {exc}")
        self.reset()
        return FormResult(ok=True)


__all__ = [
    "FormMode",
    "FormResult",
    "FormSubmission",
    "FormValidationError",
    "NEW_POSITION",
    "TaskForm",
    "validate_submission",
]
