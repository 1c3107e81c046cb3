from __future__ import annotations

import datetime as _dt
from collections.abc import Callable

from smartdeadline.config import AppConfig, load_config
from smartdeadline.forms import FormResult, FormSubmission, TaskForm
from smartdeadline.storage.factory import build_storage
from smartdeadline.storage.interface import StoragePort
from smartdeadline.store import TaskStore
from smartdeadline.summary import summarize
from smartdeadline.view.renderer import ViewSurface, render_view


class TaskApp:
    """Wires storage, store, form and renderer for one session.

    Each handler runs mutate -> persist -> render in order and hands back the
    freshly rendered surface.
    """

    def __init__(
        self,
        storage: StoragePort,
        *,
        today: Callable[[], _dt.date] = _dt.date.today,
    ) -> None:
        self.store = TaskStore(storage)
        self.form = TaskForm(self.store)
        self._today = today
        self.store.load_all()

    @classmethod
    def from_config(cls, config: AppConfig | None = None) -> TaskApp:
        return cls(build_storage(config or load_config()))

    def render(self) -> ViewSurface:
        tasks = self.store.tasks
        notice = None
        if self.store.last_save_error:
            notice = f"Changes are not saved yet: {self.store.last_save_error}"
        return render_view(tasks, summarize(tasks), notice=notice, today=self._today())

    def submit(self, sub: FormSubmission) -> tuple[FormResult, ViewSurface]:
        result = self.form.submit(sub)
        return result, self.render()

    def edit(self, position: int) -> FormSubmission:
        return self.form.begin_edit(position)

    def delete(self, position: int, confirm: Callable[[], bool]) -> tuple[FormResult, ViewSurface]:
        result = self.form.delete(position, confirm)
        return result, self.render()


__all__ = ["TaskApp"]
