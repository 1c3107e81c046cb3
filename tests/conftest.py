from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from smartdeadline.models.task import Task
from smartdeadline.observability import reset_metrics
from tests.helpers.storage import InMemoryStorage


@pytest.fixture(autouse=True)
def _fresh_observability() -> Generator[None, None, None]:
    """Reset counters and drop handlers bound to a previous test's captured stdout."""
    reset_metrics()
    yield
    for name in list(logging.root.manager.loggerDict):
        if name == "smartdeadline" or name.startswith("smartdeadline.") or name.startswith("obs-"):
            logger = logging.getLogger(name)
            for h in list(logger.handlers):
                logger.removeHandler(h)


@pytest.fixture()
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture()
def task_a() -> Task:
    return Task(
        title="Write report", deadline="2026-11-02", priority="High", progress=20, notes="draft"
    )


@pytest.fixture()
def task_b() -> Task:
    return Task(title="Review PR", deadline="2026-11-05", priority="Low", progress=60)
