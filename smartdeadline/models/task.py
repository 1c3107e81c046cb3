from __future__ import annotations

import datetime as _dt
import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

_TEXT_FIELDS = ("title", "deadline", "priority", "notes")


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


def _coerce_text(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


def _coerce_progress(value: Any) -> Any:
    if value is None:
        return 0
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return value
        # Math.round semantics: halves go up
        return math.floor(value + 0.5)
    return value


class Task(BaseModel):
    """One deadline-bound work item.

    - Frozen: an edit replaces the whole task at its position
    - Strict: fields keep exactly the values handed to the constructor
    - `deadline` stays as the submitted text (canonical form is YYYY-MM-DD)
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    title: str
    deadline: str
    priority: str
    progress: int
    notes: str = ""

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Task:
        """Build a task from a stored record.

        Missing or null text fields read as "", missing progress as 0, and
        numeric progress (including numeric text) is rounded to an integer.
        Values that still do not fit raise pydantic.ValidationError.
        """
        data = {k: _coerce_text(record.get(k)) for k in _TEXT_FIELDS}
        data["progress"] = _coerce_progress(record.get("progress"))
        return cls.model_validate(data)

    def deadline_date(self) -> _dt.date | None:
        try:
            return _dt.date.fromisoformat(self.deadline)
        except ValueError:
            return None


__all__ = ["Priority", "Task"]
