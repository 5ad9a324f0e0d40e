"""
Time remaining until a recurring target instant.

Three recurrence rules are supported, all evaluated against the local wall
clock supplied by a `Clock`:

- time of day: today (or tomorrow) at ``HH:mm:ss``; a time already passed
  today is replaced by today 23:59:59
- next weekday: the next date strictly after today falling on a weekday
- next month day: a day of next month, clamped to that month's length

Results are converted with `unit_convert`, which divides by fixed unit
lengths (a month is 30 days, a year 365) and truncates toward zero. Unknown
units give -1.
"""

import re
from datetime import date, datetime, time, timedelta
from typing import Final, Optional
from dateutil.relativedelta import relativedelta
from mut.models.dataModel import Clock, TimeUnit
from mut.lib.log import LOG

END_OF_DAY: Final[time] = time(23, 59, 59)

WEEKDAY_NAMES: Final[tuple[str, ...]] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

_ONE_MILLI: Final[timedelta] = timedelta(milliseconds=1)

# HH:mm, HH:mm:ss or HH:mm:ss.fffffffff; nothing else is a time of day
_TIME_OF_DAY: Final[re.Pattern[str]] = re.compile(
    r"(\d{2}):(\d{2})(?::(\d{2})(?:\.(\d{1,9}))?)?", re.ASCII
)


class SystemClock:
    """Clock reading the process's local time zone."""

    def now(self) -> datetime:
        return datetime.now()


def unit_convert(millis: int, unit: str) -> int:
    """Convert a millisecond count into the requested unit.

    Args:
        millis: Signed duration in milliseconds
        unit: Unit token, case-insensitive

    Returns:
        The truncated count, or -1 for an unknown unit
    """
    found: Optional[TimeUnit] = TimeUnit.lookup(unit)
    if found is None:
        LOG(f"Unknown time unit: {unit}")
        return -1
    quotient: int = abs(millis) // found.value
    return quotient if millis >= 0 else -quotient


def millis_fromUnit(count: int, unit: str) -> int:
    """Inverse of `unit_convert` for whole counts; -1 for an unknown unit."""
    found: Optional[TimeUnit] = TimeUnit.lookup(unit)
    if found is None:
        return -1
    return count * found.value


def millis_between(start: datetime, end: datetime) -> int:
    """Signed milliseconds from start to end, floored."""
    return (end - start) // _ONE_MILLI


def time_parse(text: str, fallback: str | None = None) -> time:
    """Parse an ``HH:mm[:ss[.fff]]`` time of day.

    Unparseable text falls back to `fallback` (the configured fallback time,
    normally 23:59:59).
    """
    parsed: Optional[time] = time_ofDay(text)
    if parsed is not None:
        return parsed
    LOG(f"Unparseable time '{text}', using fallback")

    if fallback is None:
        from mut.config.settings import appsettings

        fallback = appsettings.fallbackTime
    parsed = time_ofDay(fallback)
    return parsed if parsed is not None else END_OF_DAY


def time_ofDay(text: str) -> Optional[time]:
    """Strict ``HH:mm[:ss[.fffffffff]]`` parse; None for anything else."""
    if not isinstance(text, str):
        return None
    match: Optional[re.Match[str]] = _TIME_OF_DAY.fullmatch(text.strip())
    if match is None:
        return None
    hour, minute, second, fraction = match.groups()
    try:
        return time(
            int(hour),
            int(minute),
            int(second or 0),
            int((fraction or "").ljust(6, "0")[:6]),
        )
    except ValueError:
        return None


def weekday_next(today: date, week_number: int) -> date:
    """The first date strictly after `today` on the given ISO weekday.

    Args:
        today: Reference date
        week_number: 1 (Monday) to 7 (Sunday); out of range means Monday

    Returns:
        A date between 1 and 7 days after today
    """
    if not 1 <= week_number <= 7:
        week_number = 1
    ahead: int = (week_number - 1 - today.weekday() - 1) % 7 + 1
    return today + timedelta(days=ahead)


def monthDay_next(today: date, day_of_month: int) -> date:
    """The given day of next month, clamped to the month's last day."""
    return today + relativedelta(months=1, day=max(day_of_month, 1))


class TimeDiff:
    """Time-difference engine bound to a clock.

    Attributes:
        clock: Source of the current local date-time
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.clock: Clock = clock if clock is not None else SystemClock()

    def to_time_of_day(self, time_str: str, unit: str, roll_to_tomorrow: bool) -> int:
        """Time until today's (or tomorrow's) occurrence of a time of day.

        If the occurrence today has already passed, the target becomes today
        at 23:59:59, regardless of the requested time.
        """
        now: datetime = self.clock.now()
        target_date: date = now.date() + timedelta(days=1 if roll_to_tomorrow else 0)
        target: datetime = datetime.combine(target_date, time_parse(time_str))

        if not roll_to_tomorrow and target < now:
            target = datetime.combine(now.date(), END_OF_DAY)

        return unit_convert(millis_between(now, target), unit)

    def to_next_weekday(self, time_str: str, week_number: int, unit: str) -> int:
        """Time until the next given weekday (never today) at a time of day."""
        now: datetime = self.clock.now()
        target: datetime = datetime.combine(
            weekday_next(now.date(), week_number), time_parse(time_str)
        )
        return unit_convert(millis_between(now, target), unit)

    def to_next_month_day(self, time_str: str, day_of_month: int, unit: str) -> int:
        """Time until a day of next month at a time of day."""
        now: datetime = self.clock.now()
        target: datetime = datetime.combine(
            monthDay_next(now.date(), day_of_month), time_parse(time_str)
        )
        return unit_convert(millis_between(now, target), unit)

    def since(self, start: datetime, unit: str) -> int:
        """Elapsed time from `start` until now.

        MILLI through HOUR truncate the exact duration. DAY, MONTH and YEAR
        count whole calendar periods, so a month here is a calendar month
        rather than a 30 day bucket.

        Returns:
            The elapsed count, or -1 for an unknown unit
        """
        now: datetime = self.clock.now()
        found: Optional[TimeUnit] = TimeUnit.lookup(unit)
        if found is None:
            LOG(f"Unknown time unit: {unit}")
            return -1
        if found in (TimeUnit.MONTH, TimeUnit.YEAR):
            delta: relativedelta = relativedelta(now, start)
            months: int = delta.years * 12 + delta.months
            return months if found == TimeUnit.MONTH else delta.years
        return unit_convert(millis_between(start, now), unit)

    def weekday_name(self) -> str:
        """English name of today's weekday."""
        return WEEKDAY_NAMES[self.clock.now().weekday()]
