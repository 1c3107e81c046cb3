from __future__ import annotations

from .renderer import TaskRow, ViewSurface

BAR_WIDTH = 20


def progress_bar(width_label: str, *, width: int = BAR_WIDTH) -> str:
    try:
        pct = int(width_label.rstrip("%"))
    except ValueError:
        pct = 0
    filled = max(0, min(width, round(width * pct / 100)))
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def _due_label(row: TaskRow) -> str:
    if not row.deadline:
        return "no deadline"
    if row.days_left is None:
        return f"due {row.deadline}"
    if row.days_left < 0:
        return f"due {row.deadline} (overdue by {-row.days_left}d)"
    if row.days_left == 0:
        return f"due {row.deadline} (today)"
    return f"due {row.deadline} ({row.days_left}d left)"


def format_row(row: TaskRow) -> list[str]:
    lines = [
        f"{row.position}. {row.title}  {row.progress_label}",
        f"   {row.badge} | {_due_label(row)}",
    ]
    if row.notes:
        lines.append(f"   {row.notes}")
    lines.append(f"   [{row.edit_action}] [{row.delete_action}]")
    return lines


def format_view(surface: ViewSurface) -> str:
    lines: list[str] = []
    if surface.notice:
        lines.append(f"! {surface.notice}")
    lines.append(f"Tasks: {surface.total_count}   Average progress: {surface.avg_percent}")
    lines.append(progress_bar(surface.progress_width))
    lines.append("")
    if surface.placeholder is not None:
        lines.append(surface.placeholder)
    for row in surface.rows:
        lines.extend(format_row(row))
    lines.append("")
    lines.append(f"Summary: {surface.sum_count} tasks, {surface.sum_avg} done on average")
    return "\n".join(lines)


__all__ = ["format_row", "format_view", "progress_bar"]
