# src/lovespiritual/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from ..tasks.task_list import TaskList
from ..tasks.task_models import Deadline, Event, Task, Todo
from .parser import command_args, parse_command

logger = logging.getLogger(__name__)

UNKNOWN_COMMAND = "(^_^) Let's get started with a command!"

_INTEGER = re.compile(r"[+-]?[0-9]+")

# Task numbers must fit a 32-bit signed int; wider values count as "not a number".
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1


class ResultKind(Enum):
    OK = "ok"
    VALIDATION_ERROR = "validation_error"
    EXIT = "exit"


@dataclass(slots=True)
class CommandResult:
    """
    What a handler hands back to the session loop.

    `mutated` asks the loop to persist the task list; it is never set on
    validation errors, so a rejected command leaves storage untouched.
    """

    kind: ResultKind
    lines: list[str] = field(default_factory=list)
    mutated: bool = False

    @classmethod
    def ok(cls, *lines: str, mutated: bool = False) -> CommandResult:
        return cls(ResultKind.OK, list(lines), mutated)

    @classmethod
    def invalid(cls, message: str) -> CommandResult:
        return cls(ResultKind.VALIDATION_ERROR, [message])

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


CommandHandler = Callable[[TaskList, str], CommandResult]


class CommandRegistry:
    """Keyword -> handler table. Keywords match exactly (case-sensitive)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}

    def register(self, name: str, handler: CommandHandler) -> None:
        self._handlers[name] = handler

    def handle(self, tasks: TaskList, line: str) -> CommandResult:
        """
        Dispatch one input line. Unknown (or empty) keywords are a validation error.
        Exceptions raised by handlers propagate to the caller.
        """
        name = parse_command(line)
        handler = self._handlers.get(name)
        if handler is None:
            logger.debug("Unknown command %r", name)
            return CommandResult.invalid(UNKNOWN_COMMAND)

        result = handler(tasks, command_args(line, name))
        logger.debug("Command %s -> %s (mutated=%s)", name, result.kind.value, result.mutated)
        return result


registry = CommandRegistry()


# ---- shared helpers ----


@dataclass(frozen=True, slots=True)
class _IndexMessages:
    missing: str
    not_a_number: str
    out_of_range: str


def _parse_index(raw: str, size: int, msgs: _IndexMessages) -> int | CommandResult:
    """
    Turn a 1-based task number into a 0-based index.

    Checks run in a fixed order (missing, not an integer, out of range), each
    with its own message.
    """
    if not raw:
        return CommandResult.invalid(msgs.missing)
    if not _INTEGER.fullmatch(raw):
        return CommandResult.invalid(msgs.not_a_number)
    number = int(raw)
    if not _INT_MIN <= number <= _INT_MAX:
        return CommandResult.invalid(msgs.not_a_number)
    index = number - 1
    if not 0 <= index < size:
        return CommandResult.invalid(msgs.out_of_range)
    return index


def _added(tasks: TaskList, task: Task, headline: str, count_line: str) -> CommandResult:
    tasks.add(task)
    return CommandResult.ok(headline, str(task), count_line.format(n=len(tasks)), mutated=True)


# ---- handlers ----


def cmd_list(tasks: TaskList, args: str) -> CommandResult:
    if not len(tasks):
        return CommandResult.ok("Your list is empty! (・o・) Add a todo, deadline or event to begin.")
    lines = ["Here are the tasks in your list:"]
    lines.extend(f"{pos}.{task}" for pos, task in tasks.numbered())
    return CommandResult.ok(*lines)


def cmd_todo(tasks: TaskList, args: str) -> CommandResult:
    if not args:
        return CommandResult.invalid(
            "Hmm... (¬‿¬) What's the todo? Looks like the description's missing!"
        )
    return _added(
        tasks,
        Todo(description=args),
        "Woohoo! (＾▽＾) Your task is safely added!",
        "Amazing! (•̀ᴗ•́) You've got {n} tasks lined up!",
    )


def cmd_deadline(tasks: TaskList, args: str) -> CommandResult:
    """
    deadline <description> by <time>

    Splits on the first "by" anywhere in the text, even inside a word.
    """
    if not args:
        return CommandResult.invalid("Oops! (｡•́︿•̀｡) Your deadline needs a little description!")
    if "by" not in args:
        return CommandResult.invalid("The 'by' is missing! (・_・;) When's it due?")

    description, by = (part.strip() for part in args.split("by", 1))
    if not description:
        return CommandResult.invalid(
            "Hmm... (・_・;) Don't forget to tell me what this deadline is about!"
        )
    if not by:
        return CommandResult.invalid("Uh-oh! (・へ・) I need to know the deadline date or time.")

    return _added(
        tasks,
        Deadline(description=description, by=by),
        "Yippee! (★^O^★) Task added successfully!",
        "Wow! (｡♥‿♥｡) You now have {n} tasks! Keep going!",
    )


def cmd_event(tasks: TaskList, args: str) -> CommandResult:
    """
    event <description> from <start> to <end>

    "from"/"to" presence is a plain substring check; the text is then split on
    "from " and the second piece on "to ". Only the first two pieces of each
    split are used.
    """
    if not args:
        return CommandResult.invalid("Uh-oh! (・_・;) Your event description seems to be missing!")
    if "from" not in args:
        return CommandResult.invalid(
            "Hmmm (・_・) Your event is missing the 'from' time! Please add it."
        )
    if "to" not in args:
        return CommandResult.invalid("Oops! (•‿•) The 'to' part is missing! Let's add it.")

    details = args.split("from ")
    description = details[0].strip()
    if not description:
        return CommandResult.invalid(
            "Yikes! (⊙_⊙;) You forgot to tell me what the event is about!"
        )

    times = details[1].split("to ") if len(details) > 1 else []
    if len(times) < 2 or not times[0].strip():
        return CommandResult.invalid("Start date/time? (。_。) We can't go without it!")
    if not times[1].strip():
        return CommandResult.invalid(
            "The end date/time is missing (･o･;) When does this event wrap up?"
        )

    return _added(
        tasks,
        Event(description=description, start=times[0].strip(), end=times[1].strip()),
        "Yay! (•‿•) I've added your task!",
        "Woot! (^▽^) You now have {n} tasks in your list!",
    )


_MARK_MSGS = _IndexMessages(
    missing="Hmm... (ʘ‿ʘ) A valid number, please?",
    not_a_number="Whoa there! (O.O) That's not a number! Can you double-check?",
    out_of_range="Hmm... (°ヘ°) That number seems a bit off. Try again?",
)

_UNMARK_MSGS = _IndexMessages(
    missing="Oopsie! (⊙_⊙) Please give me a valid number!",
    not_a_number="Hmm, that's not a number! (・_・;) Try again, please!",
    out_of_range="Yikes! (≧Д≦) That number doesn't look right. Can you double-check it?",
)

_DELETE_MSGS = _IndexMessages(
    missing="Eh? (・・?) Which task should I delete? Give me its number.",
    not_a_number="That's not a task number! (¬_¬) Please use digits.",
    out_of_range="Hmm (・_・ヾ) There's no task with that number to delete.",
)


def cmd_mark(tasks: TaskList, args: str) -> CommandResult:
    index = _parse_index(args, len(tasks), _MARK_MSGS)
    if isinstance(index, CommandResult):
        return index
    task = tasks[index]
    task.mark()
    return CommandResult.ok("Yay! (^_^) This task is all done!", str(task), mutated=True)


def cmd_unmark(tasks: TaskList, args: str) -> CommandResult:
    index = _parse_index(args, len(tasks), _UNMARK_MSGS)
    if isinstance(index, CommandResult):
        return index
    task = tasks[index]
    task.unmark()
    return CommandResult.ok("Got it! (◠‿◠) This task isn't done yet!", str(task), mutated=True)


def cmd_delete(tasks: TaskList, args: str) -> CommandResult:
    index = _parse_index(args, len(tasks), _DELETE_MSGS)
    if isinstance(index, CommandResult):
        return index
    removed = tasks.remove(index)
    return CommandResult.ok(
        "Poof! (ﾉ◕ヮ◕)ﾉ*:･ﾟ✧ I've removed this task:",
        str(removed),
        f"Now you have {len(tasks)} tasks in the list.",
        mutated=True,
    )


def cmd_find(tasks: TaskList, args: str) -> CommandResult:
    """Read-only: never asks for a save."""
    if not args:
        return CommandResult.invalid(
            "Oops! (・_・;) What should I find? Please give me a keyword."
        )
    lines = ["Here are the matching tasks in your list:"]
    matches = tasks.find(args)
    if matches:
        lines.extend(f"{pos}.{task}" for pos, task in matches)
    else:
        lines.append(f"No tasks found with the keyword: {args}")
    return CommandResult.ok(*lines)


def cmd_bye(tasks: TaskList, args: str) -> CommandResult:
    return CommandResult(
        ResultKind.EXIT, ["Bye bye! (^_^)/ Hope to see you again soon!"], mutated=True
    )


registry.register("list", cmd_list)
registry.register("todo", cmd_todo)
registry.register("deadline", cmd_deadline)
registry.register("event", cmd_event)
registry.register("mark", cmd_mark)
registry.register("unmark", cmd_unmark)
registry.register("delete", cmd_delete)
registry.register("find", cmd_find)
registry.register("bye", cmd_bye)
