from __future__ import annotations

import argparse
import datetime as _dt
import sys
from typing import Any

from smartdeadline.app import TaskApp
from smartdeadline.forms import FormSubmission
from smartdeadline.models.task import Priority
from smartdeadline.store import PositionError
from smartdeadline.view.calendar import format_month, render_month
from smartdeadline.view.quotes import pick_quote
from smartdeadline.view.text import format_view

APP_TITLE = "Smart Deadline Reminder"
_EDITABLE = ("title", "deadline", "priority", "progress", "notes")


def _add_task_fields(p: argparse.ArgumentParser, *, required: bool) -> None:
    p.add_argument("--title", required=required)
    p.add_argument("--deadline", help="YYYY-MM-DD")
    p.add_argument("--priority", choices=[x.value for x in Priority])
    p.add_argument("--progress", type=int, help="0-100")
    p.add_argument("--notes")


def _overrides(args: Any) -> dict[str, Any]:
    return {k: getattr(args, k) for k in _EDITABLE if getattr(args, k) is not None}


def _confirm_prompt() -> bool:
    try:
        answer = input("Delete this task? [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


def _fail(message: str) -> None:
    sys.stderr.write(message + "\n")
    raise SystemExit(1)


def _calendar_text(app: TaskApp) -> str:
    today = _dt.date.today()
    view = render_month(today, (t.deadline_date() for t in app.store.tasks))
    return format_month(view)


def _dashboard(app: TaskApp) -> str:
    parts = [
        APP_TITLE,
        "",
        format_view(app.render()),
        "",
        _calendar_text(app),
        "",
        f'"{pick_quote()}"',
        f"Active: {_dt.datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
    ]
    return "\n".join(parts)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("smartdeadline", description=APP_TITLE)
    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("dashboard", help="Show tasks, summary, calendar and a quote (default)")
    sub.add_parser("list", help="Show tasks and summary")

    p_add = sub.add_parser("add", help="Create a task")
    _add_task_fields(p_add, required=True)

    p_edit = sub.add_parser("edit", help="Replace fields of the task at a position")
    p_edit.add_argument("position", type=int)
    _add_task_fields(p_edit, required=False)

    p_delete = sub.add_parser("delete", help="Delete the task at a position")
    p_delete.add_argument("position", type=int)
    p_delete.add_argument("--yes", action="store_true", help="Skip confirmation")

    sub.add_parser("calendar", help="Show this month")
    sub.add_parser("quote", help="Print a motivational quote")
    return parser


def main(argv: list[str] | None = None, *, app: TaskApp | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    cmd = str(getattr(args, "cmd", None) or "dashboard")

    if cmd == "quote":
        print(pick_quote())
        return

    app = app or TaskApp.from_config()

    if cmd == "dashboard":
        print(_dashboard(app))
        return

    if cmd == "list":
        print(format_view(app.render()))
        return

    if cmd == "calendar":
        print(_calendar_text(app))
        return

    if cmd == "add":
        result, surface = app.submit(FormSubmission(**_overrides(args)))
        if not result.ok:
            _fail(result.error or "Invalid task.")
        print(format_view(surface))
        return

    if cmd == "edit":
        try:
            current = app.edit(args.position)
        except PositionError as exc:
            _fail(f"No task at position {args.position}: {exc}")
            return
        result, surface = app.submit(FormSubmission(**{**current.model_dump(), **_overrides(args)}))
        if not result.ok:
            _fail(result.error or "Invalid task.")
        print(format_view(surface))
        return

    if cmd == "delete":
        confirm = (lambda: True) if args.yes else _confirm_prompt
        result, surface = app.delete(args.position, confirm)
        if not result.ok:
            _fail(result.error or "Task not deleted.")
        print(format_view(surface))
        return

    parser.print_help()


if __name__ == "__main__":
    main()
