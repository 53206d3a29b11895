# src/lovespiritual/tasks/task_store.py

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .task_models import Deadline, Event, Task, TaskType, Todo

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = " | "

_ESCAPES = {"\\": "\\\\", "|": "\\|", "\n": "\\n", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", "|": "|", "n": "\n", "r": "\r"}


class TaskFormatError(ValueError):
    """Raised when a stored line cannot be turned back into a task."""


def _escape(value: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def _split_fields(line: str) -> list[str]:
    """
    Split on unescaped " | " and unescape each field.

    Escaped pipes ("\\|") never act as separators, so descriptions may contain
    any text, separator included.
    """
    fields: list[str] = []
    buf: list[str] = []
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == "\\":
            if i + 1 >= n:
                raise TaskFormatError("dangling escape at end of line")
            nxt = line[i + 1]
            if nxt not in _UNESCAPES:
                raise TaskFormatError(f"unknown escape sequence \\{nxt}")
            buf.append(_UNESCAPES[nxt])
            i += 2
            continue
        if line.startswith(FIELD_SEPARATOR, i):
            fields.append("".join(buf))
            buf = []
            i += len(FIELD_SEPARATOR)
            continue
        buf.append(ch)
        i += 1
    fields.append("".join(buf))
    return fields


def _decode_line(raw: bytes) -> str:
    """UTF-8 decode one stored line, tolerating a CRLF line ending."""
    try:
        return raw.removesuffix(b"\r").decode("utf-8")
    except UnicodeDecodeError as e:
        raise TaskFormatError(f"invalid UTF-8 at byte {e.start}") from None


def encode_task(task: Task) -> str:
    """Serialize one task to a single storage line (no trailing newline)."""
    parts = [str(task.task_type), "1" if task.done else "0", task.description]
    if isinstance(task, Deadline):
        parts.append(task.by)
    elif isinstance(task, Event):
        parts.extend([task.start, task.end])
    return FIELD_SEPARATOR.join(
        p if i < 2 else _escape(p) for i, p in enumerate(parts)
    )


def decode_task(line: str) -> Task:
    """Parse one storage line. Raises TaskFormatError on malformed input."""
    fields = _split_fields(line)
    if len(fields) < 3:
        raise TaskFormatError(f"expected at least 3 fields, got {len(fields)}")

    tag, flag, description = fields[0], fields[1], fields[2]
    if flag not in ("0", "1"):
        raise TaskFormatError(f"invalid done flag {flag!r}")
    if not description.strip():
        raise TaskFormatError("empty description")
    done = flag == "1"

    try:
        task_type = TaskType(tag)
    except ValueError:
        raise TaskFormatError(f"unknown task type {tag!r}") from None

    extra = fields[3:]
    if task_type is TaskType.TODO:
        if extra:
            raise TaskFormatError("todo takes no extra fields")
        return Todo(description=description, done=done)

    if task_type is TaskType.DEADLINE:
        if len(extra) != 1:
            raise TaskFormatError("deadline needs exactly one 'by' field")
        return Deadline(description=description, done=done, by=extra[0])

    if len(extra) != 2:
        raise TaskFormatError("event needs 'from' and 'to' fields")
    return Event(description=description, done=done, start=extra[0], end=extra[1])


class TaskStore:
    """
    Flat-file task store: one encoded task per line.

    The whole file is rewritten on every save; in-memory state is the source
    of truth while a session is running.
    """

    def __init__(self, path: str | Path = "data/lovespiritual.txt") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Task]:
        """Read all tasks. Missing file -> []. Malformed lines are skipped."""
        if not self._path.exists():
            logger.info("No task file at %s, starting empty.", self._path)
            return []

        tasks: list[Task] = []
        skipped = 0
        data = self._path.read_bytes()
        # Decode per line so one undecodable line only costs that line.
        for line_no, raw_bytes in enumerate(data.split(b"\n"), start=1):
            if not raw_bytes.strip():
                continue
            try:
                tasks.append(decode_task(_decode_line(raw_bytes)))
            except TaskFormatError as e:
                skipped += 1
                logger.warning("Skipping malformed line %d in %s: %s", line_no, self._path, e)

        logger.info("Loaded %d tasks from %s (skipped=%d)", len(tasks), self._path, skipped)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        """Overwrite the file with all tasks (atomic replace)."""
        lines = [encode_task(t) for t in tasks]
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
            os.replace(tmp, self._path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
        logger.debug("Saved %d tasks to %s", len(lines), self._path)
