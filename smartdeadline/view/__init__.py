from .renderer import EMPTY_PLACEHOLDER, TaskRow, ViewSurface, priority_badge, render_view
from .text import format_view

__all__ = [
    "EMPTY_PLACEHOLDER",
    "TaskRow",
    "ViewSurface",
    "format_view",
    "priority_badge",
    "render_view",
]
