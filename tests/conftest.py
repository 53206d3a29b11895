# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from lovespiritual.config import Settings
from lovespiritual.core.state import AppState
from lovespiritual.tasks.task_list import TaskList
from lovespiritual.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing every path into the per-test tmp dir."""
    return Settings(
        app_name="lovespiritual",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        data_file=tmp_path / "data" / "lovespiritual.txt",
    )


@pytest.fixture()
def store(settings: Settings) -> TaskStore:
    return TaskStore(settings.data_file)


@pytest.fixture()
def tasks() -> TaskList:
    return TaskList()


@pytest.fixture()
def state(settings: Settings, store: TaskStore, tasks: TaskList) -> AppState:
    """
    AppState wired with a real file-backed store under tmp_path.

    The store is kept real because the persistence round-trip is part of what
    the session tests check.
    """
    return AppState(settings=settings, store=store, tasks=tasks)
