# src/lovespiritual/tasks/task_list.py

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .task_models import Task


class TaskList:
    """
    Ordered, session-owned list of tasks.

    Positions shown to the user are 1-based; methods here take 0-based indices
    and leave range checking to the command handlers.
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    def add(self, task: Task) -> Task:
        self._tasks.append(task)
        return task

    def remove(self, index: int) -> Task:
        return self._tasks.pop(index)

    def numbered(self) -> Iterator[tuple[int, Task]]:
        """Yield (1-based position, task) pairs."""
        return enumerate(self._tasks, start=1)

    def find(self, keyword: str) -> list[tuple[int, Task]]:
        """Case-insensitive substring search over each task's rendering."""
        needle = keyword.lower()
        return [(pos, t) for pos, t in self.numbered() if needle in str(t).lower()]

    def snapshot(self) -> list[Task]:
        return list(self._tasks)
