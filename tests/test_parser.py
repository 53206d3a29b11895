# tests/test_parser.py

from __future__ import annotations

from lovespiritual.cli.parser import command_args, parse_command


def test_parse_command_takes_first_token() -> None:
    assert parse_command("todo buy milk") == "todo"
    assert parse_command("list") == "list"
    assert parse_command("deadline\tx by y") == "deadline"


def test_parse_command_empty_line_does_not_raise() -> None:
    assert parse_command("") == ""
    assert parse_command("   ") == ""


def test_command_args_strips_keyword_and_whitespace() -> None:
    assert command_args("todo   buy milk  ", "todo") == "buy milk"
    assert command_args("mark", "mark") == ""
