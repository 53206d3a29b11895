# src/lovespiritual/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires the task store and the session-owned task list into AppState,
- fills the task list from storage.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.state import AppState
from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings and load saved tasks.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    A missing task file gives an empty list; an unreadable one raises OSError
    so the caller never overwrites data it could not read.
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore(settings.data_file)
    state = AppState(settings=settings, store=store, tasks=TaskList(store.load()))
    logger.info("State ready: %d tasks from %s", len(state.tasks), store.path)
    return state
