# src/lovespiritual/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskType(StrEnum):
    """One-letter tag shown in the rendering and stored on disk."""

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


@dataclass(slots=True)
class Task:
    """
    Base task: a description plus a completion flag.

    Subclasses add their own fields and a rendering suffix.
    The canonical rendering (str(task)) is used both for display and for /find.
    """

    description: str
    done: bool = False

    task_type = TaskType.TODO

    def mark(self) -> None:
        self.done = True

    def unmark(self) -> None:
        self.done = False

    def status_icon(self) -> str:
        return "X" if self.done else " "

    def suffix(self) -> str:
        return ""

    def __str__(self) -> str:
        return f"[{self.task_type}][{self.status_icon()}] {self.description}{self.suffix()}"


@dataclass(slots=True)
class Todo(Task):
    task_type = TaskType.TODO


@dataclass(slots=True)
class Deadline(Task):
    by: str = ""

    task_type = TaskType.DEADLINE

    def suffix(self) -> str:
        return f" (by: {self.by})"


@dataclass(slots=True)
class Event(Task):
    start: str = ""
    end: str = ""

    task_type = TaskType.EVENT

    def suffix(self) -> str:
        return f" (from: {self.start} to: {self.end})"
