from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any

import pytest

from smartdeadline.app import TaskApp
from smartdeadline.cli import main
from smartdeadline.config import load_config
from smartdeadline.forms import FormSubmission
from smartdeadline.view.renderer import EMPTY_PLACEHOLDER
from tests.helpers.storage import InMemoryStorage


def _app(storage: InMemoryStorage) -> TaskApp:
    return TaskApp(storage, today=lambda: dt.date(2026, 10, 19))


def test_startup_loads_once_and_renders(storage: InMemoryStorage) -> None:
    storage.save(
        [{"title": "a", "deadline": "2026-10-20", "priority": "Low", "progress": 50, "notes": ""}]
    )
    storage.saves.clear()

    surface = _app(storage).render()

    assert [r.title for r in surface.rows] == ["a"]
    assert surface.rows[0].days_left == 1
    assert storage.saves == []


def test_submit_edit_delete_cycle(storage: InMemoryStorage) -> None:
    app = _app(storage)

    result, surface = app.submit(FormSubmission(title="A", progress=20))
    assert result.ok and surface.total_count == "1"

    result, surface = app.submit(FormSubmission(title="B", progress=100))
    assert surface.avg_percent == "60%"

    fields = app.edit(0)
    result, surface = app.submit(fields.model_copy(update={"title": "A2"}))
    assert [r.title for r in surface.rows] == ["A2", "B"]

    result, surface = app.delete(0, lambda: True)
    assert [r.title for r in surface.rows] == ["B"]
    assert surface.rows[0].edit_action == "edit:0"
    assert len(storage.saves) == 4


def test_invalid_submit_rerenders_unchanged(storage: InMemoryStorage) -> None:
    app = _app(storage)
    result, surface = app.submit(FormSubmission(title=""))
    assert not result.ok
    assert surface.placeholder == EMPTY_PLACEHOLDER
    assert storage.saves == []


def test_save_failure_shows_notice(storage: InMemoryStorage) -> None:
    app = _app(storage)
    storage.fail_saves = True
    result, surface = app.submit(FormSubmission(title="A"))
    assert result.ok
    assert surface.notice is not None and "quota exceeded" in surface.notice
    assert surface.total_count == "1"

    storage.fail_saves = False
    assert app.store.retry_save()
    assert app.render().notice is None


# ----------------------------
# CLI
# ----------------------------


@pytest.fixture()
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("SMARTDEADLINE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SMARTDEADLINE_BACKEND", "local")
    monkeypatch.delenv("SMARTDEADLINE_STORAGE_KEY", raising=False)
    monkeypatch.delenv("SMARTDEADLINE_ORIGIN", raising=False)
    return tmp_path


def _stored(data_dir: Path) -> list[dict[str, Any]]:
    blob = json.loads((data_dir / "local.json").read_text(encoding="utf-8"))
    return json.loads(blob["sd_tasks_v4"])


def test_cli_add_list_edit_delete(data_dir: Path, capsys: Any) -> None:
    main(
        [
            "add",
            "--title",
            "Essay",
            "--deadline",
            "2026-11-01",
            "--priority",
            "Medium",
            "--progress",
            "40",
        ]
    )
    out = capsys.readouterr().out
    assert "0. Essay  40%" in out
    assert "🟡 Medium" in out

    main(["edit", "0", "--progress", "70", "--notes", "outline done"])
    capsys.readouterr()
    assert _stored(data_dir) == [
        {
            "title": "Essay",
            "deadline": "2026-11-01",
            "priority": "Medium",
            "progress": 70,
            "notes": "outline done",
        }
    ]

    main(["list"])
    assert "Tasks: 1   Average progress: 70%" in capsys.readouterr().out

    main(["delete", "0", "--yes"])
    assert EMPTY_PLACEHOLDER in capsys.readouterr().out
    assert _stored(data_dir) == []


def test_cli_rejects_empty_title(data_dir: Path, capsys: Any) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["add", "--title", "  "])
    assert exc.value.code == 1
    assert "Title must not be empty!" in capsys.readouterr().err
    assert not (data_dir / "local.json").exists()


def test_cli_edit_unknown_position(data_dir: Path, capsys: Any) -> None:
    with pytest.raises(SystemExit):
        main(["edit", "3", "--title", "x"])
    assert "No task at position 3" in capsys.readouterr().err


def test_cli_delete_declined(data_dir: Path, capsys: Any, monkeypatch: pytest.MonkeyPatch) -> None:
    main(["add", "--title", "Keep me"])
    capsys.readouterr()
    monkeypatch.setattr("builtins.input", lambda prompt="": "n")
    with pytest.raises(SystemExit):
        main(["delete", "0"])
    assert "Delete cancelled." in capsys.readouterr().err
    assert len(_stored(data_dir)) == 1


def test_cli_dashboard_default(data_dir: Path, capsys: Any) -> None:
    main([])
    out = capsys.readouterr().out
    assert out.startswith("Smart Deadline Reminder")
    assert EMPTY_PLACEHOLDER in out
    assert "Su  Mo  Tu" in out
    assert "Active: " in out


def test_from_config_uses_local_storage(data_dir: Path) -> None:
    app = TaskApp.from_config(load_config())
    app.submit(FormSubmission(title="persisted"))
    again = TaskApp.from_config(load_config())
    assert [t.title for t in again.store.tasks] == ["persisted"]
