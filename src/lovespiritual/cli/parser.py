# src/lovespiritual/cli/parser.py

from __future__ import annotations


def parse_command(line: str) -> str:
    """
    Return the leading whitespace-delimited keyword of `line`.

    An empty or whitespace-only line yields "" (never raises); argument parsing
    is left to each command handler.
    """
    parts = line.split(maxsplit=1)
    return parts[0] if parts else ""


def command_args(line: str, keyword: str) -> str:
    """Text after the keyword, trimmed."""
    stripped = line.strip()
    return stripped[len(keyword):].strip() if stripped.startswith(keyword) else stripped
