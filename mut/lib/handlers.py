"""
Base handler implementations for selector routing.

This module provides the handler classes registered on the `Router`:
- `BaseHandler`: result formatting shared by every handler
- `ActionHandler`: handlers whose second argument picks an action
  (``authMe.registered``, ``bukkit.emptySlots`` ...)
- Time handlers: ``diffDays``, ``diffWeeks``, ``diffMonths``, ``getTheWeek``
- Duration handler: ``luckPermsExpiryTime``

Argument layout (selector first):
    diffDays.<unit>.<"HH:mm:ss">.<tomorrow>
    diffWeeks.<unit>.<"HH:mm:ss">.<1-7>
    diffMonths.<unit>.<"HH:mm:ss">.<1-31>
    getTheWeek
    luckPermsExpiryTime.<"{placeholder}">
"""

from abc import ABC, abstractmethod
from functools import partial
from typing import Any, Callable, Optional
from mut.models.dataModel import EvalResult, Outcome, ParseResult, PlayerContext
from mut.lib.duration import duration_parseToDays
from mut.lib.parser import BraceTokenParser, ExternalResolver
from mut.lib.timediff import TimeDiff
from mut.lib.log import LOG

Action = Callable[[list[str], Optional[PlayerContext]], Any]

# External %...% expander: (text, player=...) -> text
Placeholders = Callable[..., str]


def int_parse(text: str, default: int) -> int:
    """Parse a decimal integer, returning `default` when it is not one."""
    try:
        return int(text.strip())
    except ValueError:
        LOG(f"Not an integer: '{text}', using {default}")
        return default


def bool_parse(text: str) -> bool:
    """Only a case-insensitive 'true' is true."""
    return text.strip().lower() == "true"


class BaseHandler(ABC):
    """
    Base selector handler.

    Attributes:
        min_args: Arguments required, selector included
    """

    min_args: int = 1

    def reply(self, value: Any) -> EvalResult:
        """Wrap a value as a successful result; booleans render lower case."""
        if isinstance(value, bool):
            return EvalResult(text="true" if value else "false")
        return EvalResult(text=str(value))

    @abstractmethod
    def handle(self, args: list[str], player: Optional[PlayerContext]) -> EvalResult:
        """Answer a request whose arguments passed the `min_args` check."""


class ActionHandler(BaseHandler):
    """
    Handler whose second argument selects an action.

    Subclasses fill `actions` with ``name -> (min_args, callable)``; names
    are matched case-insensitively. Callables return the raw value to reply
    with.
    """

    min_args: int = 2

    def __init__(self) -> None:
        self.actions: dict[str, tuple[int, Action]] = {}

    def action_add(self, name: str, min_args: int, action: Action) -> None:
        self.actions[name.lower()] = (min_args, action)

    def handle(self, args: list[str], player: Optional[PlayerContext]) -> EvalResult:
        entry: Optional[tuple[int, Action]] = self.actions.get(args[1].lower())
        if entry is None:
            LOG(f"No action {args[1]} for {args[0]}")
            return EvalResult(outcome=Outcome.UNKNOWN_SELECTOR)
        min_args, action = entry
        if len(args) < min_args:
            LOG(f"{args[0]}.{args[1]} needs {min_args} arguments, got {len(args)}")
            return EvalResult(outcome=Outcome.INSUFFICIENT_ARGS)
        return self.reply(action(args, player))


class DiffDaysHandler(BaseHandler):
    """Time until today's (or tomorrow's) time of day."""

    min_args = 4

    def __init__(self, timediff: TimeDiff) -> None:
        self.timediff: TimeDiff = timediff

    def handle(self, args: list[str], player: Optional[PlayerContext]) -> EvalResult:
        return self.reply(
            self.timediff.to_time_of_day(args[2], args[1], bool_parse(args[3]))
        )


class DiffWeeksHandler(BaseHandler):
    """Time until the next given weekday; a non-numeric weekday means Monday."""

    min_args = 4

    def __init__(self, timediff: TimeDiff) -> None:
        self.timediff: TimeDiff = timediff

    def handle(self, args: list[str], player: Optional[PlayerContext]) -> EvalResult:
        return self.reply(
            self.timediff.to_next_weekday(args[2], int_parse(args[3], 1), args[1])
        )


class DiffMonthsHandler(BaseHandler):
    """Time until a day of next month; a non-numeric day means the last day."""

    min_args = 4

    def __init__(self, timediff: TimeDiff) -> None:
        self.timediff: TimeDiff = timediff

    def handle(self, args: list[str], player: Optional[PlayerContext]) -> EvalResult:
        return self.reply(
            self.timediff.to_next_month_day(args[2], int_parse(args[3], 31), args[1])
        )


class WeekdayHandler(BaseHandler):
    """English name of today's weekday."""

    def __init__(self, timediff: TimeDiff) -> None:
        self.timediff: TimeDiff = timediff

    def handle(self, args: list[str], player: Optional[PlayerContext]) -> EvalResult:
        return self.reply(self.timediff.weekday_name())


class ExpiryHandler(BaseHandler):
    """
    Days left on a permission expiry.

    The argument is interpolated first (``"{luckperms_expiry_time_vip}"``)
    against the external placeholder system, for the requesting player, then
    the resulting duration text is folded into days. A failed interpolation
    replies -1.
    """

    min_args = 2

    def __init__(self, placeholders: Placeholders) -> None:
        self.placeholders: Placeholders = placeholders

    def handle(self, args: list[str], player: Optional[PlayerContext]) -> EvalResult:
        parser: BraceTokenParser = BraceTokenParser(
            resolver=ExternalResolver(partial(self.placeholders, player=player))
        )
        result: ParseResult = parser.parse(args[1])
        if not result.success:
            return self.reply(-1)
        return self.reply(duration_parseToDays(result.text))
