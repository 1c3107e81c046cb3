from __future__ import annotations

import datetime as _dt
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from smartdeadline.models.task import Task
from smartdeadline.summary import Summary, summarize

EMPTY_PLACEHOLDER = "No tasks"

_BADGES = {
    "High": "🔴 High",
    "Medium": "🟡 Medium",
    "Low": "🟢 Low",
}


def priority_badge(priority: str) -> str:
    return _BADGES.get(priority, priority)


class TaskRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: int
    title: str
    badge: str
    notes: str
    progress_label: str
    deadline: str
    days_left: int | None = None
    edit_action: str
    delete_action: str


class ViewSurface(BaseModel):
    """Full description of what the list and summary regions show.

    Rebuilt from scratch on every render; nothing here is diffed.
    """

    model_config = ConfigDict(frozen=True)

    rows: list[TaskRow]
    placeholder: str | None = None
    total_count: str
    sum_count: str
    avg_percent: str
    sum_avg: str
    progress_width: str
    notice: str | None = None


def _row(position: int, task: Task, today: _dt.date | None) -> TaskRow:
    days_left: int | None = None
    due = task.deadline_date()
    if today is not None and due is not None:
        days_left = (due - today).days
    return TaskRow(
        position=position,
        title=task.title,
        badge=priority_badge(task.priority),
        notes=task.notes,
        progress_label=f"{task.progress}%",
        deadline=task.deadline,
        days_left=days_left,
        edit_action=f"edit:{position}",
        delete_action=f"delete:{position}",
    )


def render_view(
    tasks: Sequence[Task],
    summary: Summary | None = None,
    *,
    notice: str | None = None,
    today: _dt.date | None = None,
) -> ViewSurface:
    summary = summary if summary is not None else summarize(tasks)
    rows = [_row(i, t, today) for i, t in enumerate(tasks)]
    count = str(summary.count)
    avg = summary.average_label
    return ViewSurface(
        rows=rows,
        placeholder=None if rows else EMPTY_PLACEHOLDER,
        total_count=count,
        sum_count=count,
        avg_percent=avg,
        sum_avg=avg,
        progress_width=avg,
        notice=notice,
    )


__all__ = ["EMPTY_PLACEHOLDER", "TaskRow", "ViewSurface", "priority_badge", "render_view"]
