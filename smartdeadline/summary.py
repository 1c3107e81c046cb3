from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from smartdeadline.models.task import Task


@dataclass(frozen=True, slots=True)
class Summary:
    count: int
    average_percent: int

    @property
    def average_label(self) -> str:
        return f"{self.average_percent}%"


def summarize(tasks: Sequence[Task]) -> Summary:
    """Count tasks and average their progress, rounding halves up."""
    count = len(tasks)
    if count == 0:
        return Summary(count=0, average_percent=0)
    mean = sum(t.progress for t in tasks) / count
    return Summary(count=count, average_percent=math.floor(mean + 0.5))


__all__ = ["Summary", "summarize"]
