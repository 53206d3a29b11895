# tests/test_console_connector.py

from __future__ import annotations

from collections.abc import Iterator

import pytest

from lovespiritual.cli.bootstrap import create_initial_state
from lovespiritual.config import Settings
from lovespiritual.connectors import console_connector
from lovespiritual.connectors.console_connector import (
    SAVE_FAILED,
    SEPARATOR,
    UNEXPECTED_ERROR,
    run_console_loop,
)
from lovespiritual.core.state import AppState
from lovespiritual.tasks.task_models import Deadline, Event, Todo


def feed(monkeypatch: pytest.MonkeyPatch, *lines: str) -> None:
    it: Iterator[str] = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_session_persists_and_reloads(
    state: AppState, settings: Settings, monkeypatch: pytest.MonkeyPatch, capsys
) -> None:
    feed(
        monkeypatch,
        "todo buy milk",
        "deadline submit report by Friday",
        "event team sync from Monday to Tuesday",
        "mark 1",
        "list",
        "bye",
        "todo never read",
    )

    run_console_loop(state)

    out = capsys.readouterr().out
    assert SEPARATOR in out
    assert "1.[T][X] buy milk" in out
    assert "2.[D][ ] submit report (by: Friday)" in out
    assert "3.[E][ ] team sync (from: Monday to: Tuesday)" in out
    assert "Bye bye!" in out
    assert "never read" not in out

    reloaded = create_initial_state(settings=settings)
    assert reloaded.tasks.snapshot() == [
        Todo(description="buy milk", done=True),
        Deadline(description="submit report", by="Friday"),
        Event(description="team sync", start="Monday", end="Tuesday"),
    ]


def test_validation_error_keeps_loop_running_without_saving(
    state: AppState, monkeypatch: pytest.MonkeyPatch, capsys
) -> None:
    feed(monkeypatch, "mark 5", "hello", "todo a", "bye")

    run_console_loop(state)

    out = capsys.readouterr().out
    assert "seems a bit off" in out
    assert "Let's get started with a command!" in out
    assert [str(t) for t in state.tasks] == ["[T][ ] a"]


def test_rejected_command_does_not_touch_storage(
    state: AppState, monkeypatch: pytest.MonkeyPatch
) -> None:
    saves: list[int] = []
    monkeypatch.setattr(state.store, "save", lambda tasks: saves.append(len(tasks)))
    feed(monkeypatch, "todo", "delete 1", "find x", "list", "todo a", "bye")

    run_console_loop(state)

    # Only "todo a" and "bye" persist.
    assert saves == [1, 1]


def test_unexpected_error_is_reported_and_loop_continues(
    state: AppState, monkeypatch: pytest.MonkeyPatch, capsys
) -> None:
    def boom(tasks, line):
        raise RuntimeError("kaboom")

    calls = {"n": 0}
    real_handle = console_connector.command_registry.handle

    def flaky(tasks, line):
        calls["n"] += 1
        if calls["n"] == 1:
            return boom(tasks, line)
        return real_handle(tasks, line)

    monkeypatch.setattr(console_connector.command_registry, "handle", flaky)
    feed(monkeypatch, "todo first", "todo second", "bye")

    run_console_loop(state)

    out = capsys.readouterr().out
    assert UNEXPECTED_ERROR in out
    assert [t.description for t in state.tasks] == ["second"]


def test_save_failure_is_reported_after_confirmation(
    state: AppState, monkeypatch: pytest.MonkeyPatch, capsys
) -> None:
    def fail(tasks):
        raise OSError("disk full")

    monkeypatch.setattr(state.store, "save", fail)
    feed(monkeypatch, "todo a", "bye")

    run_console_loop(state)

    out = capsys.readouterr().out
    assert out.index("[T][ ] a") < out.index(SAVE_FAILED)
    assert len(state.tasks) == 1


def test_end_of_input_saves_like_bye(
    state: AppState, settings: Settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    feed(monkeypatch, "todo keep me")

    run_console_loop(state)

    assert settings.data_file.read_text(encoding="utf-8") == "T | 0 | keep me\n"


def test_undecodable_input_line_is_reported_and_loop_continues(
    state: AppState, monkeypatch: pytest.MonkeyPatch, capsys
) -> None:
    replies: Iterator[str | Exception] = iter(
        [UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"), "todo after", "bye"]
    )

    def fake_input(prompt: str = "") -> str:
        reply = next(replies)
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr("builtins.input", fake_input)

    run_console_loop(state)

    out = capsys.readouterr().out
    assert UNEXPECTED_ERROR in out
    assert "Bye bye!" in out
    assert [t.description for t in state.tasks] == ["after"]
