"""
Formatting of date-times with Java-style patterns.

Server owners write registration-date patterns the way the auth plugin
documents them, e.g. ``yyyy-MM-dd HH:mm:ss`` or ``EEEE, d MMMM yyyy``.
This module formats a `datetime` with such a pattern.

Supported letters: y, u, M, L, d, D, H, k, K, h, m, s, S, a, E. Text between
single quotes is copied literally (``''`` is a quote). Any other ASCII letter
is rejected with ValueError.
"""

import re
from datetime import datetime
from typing import Callable, Final

MONTH_NAMES: Final[tuple[str, ...]] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

DAY_NAMES: Final[tuple[str, ...]] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

_PATTERN_PART: Final[re.Pattern[str]] = re.compile(
    r"'(?:[^']|'')*'|([A-Za-z])\1*|[^A-Za-z']+|'"
)


def _padded(value: int, width: int) -> str:
    return str(value).zfill(width)


def _year(dt: datetime, width: int) -> str:
    if width == 2:
        return _padded(dt.year % 100, 2)
    return _padded(dt.year, width)


def _month(dt: datetime, width: int) -> str:
    if width >= 4:
        return MONTH_NAMES[dt.month - 1]
    if width == 3:
        return MONTH_NAMES[dt.month - 1][:3]
    return _padded(dt.month, width)


def _weekday(dt: datetime, width: int) -> str:
    name: str = DAY_NAMES[dt.weekday()]
    return name if width >= 4 else name[:3]


def _fraction(dt: datetime, width: int) -> str:
    digits: str = _padded(dt.microsecond, 6) + "000"
    return digits[:width]


_FIELDS: Final[dict[str, Callable[[datetime, int], str]]] = {
    "y": _year,
    "u": _year,
    "M": _month,
    "L": _month,
    "d": lambda dt, width: _padded(dt.day, width),
    "D": lambda dt, width: _padded(dt.timetuple().tm_yday, width),
    "H": lambda dt, width: _padded(dt.hour, width),
    "k": lambda dt, width: _padded(dt.hour or 24, width),
    "K": lambda dt, width: _padded(dt.hour % 12, width),
    "h": lambda dt, width: _padded(dt.hour % 12 or 12, width),
    "m": lambda dt, width: _padded(dt.minute, width),
    "s": lambda dt, width: _padded(dt.second, width),
    "S": _fraction,
    "a": lambda dt, width: "AM" if dt.hour < 12 else "PM",
    "E": _weekday,
}


def datetime_formatPattern(dt: datetime, pattern: str) -> str:
    """Format `dt` with a Java-style date pattern.

    Args:
        dt: The date-time to format
        pattern: Pattern such as ``yyyy-MM-dd HH:mm:ss``

    Returns:
        The formatted text

    Raises:
        ValueError: If the pattern holds an unsupported letter or an
            unterminated quote
    """
    out: list[str] = []
    for match in _PATTERN_PART.finditer(pattern):
        part: str = match.group(0)
        if part == "'":
            raise ValueError(f"Unterminated quote in pattern: {pattern}")
        if part.startswith("'"):
            out.append(part[1:-1].replace("''", "'") if part != "''" else "'")
            continue
        letter: str | None = match.group(1)
        if letter is None:
            out.append(part)
            continue
        field: Callable[[datetime, int], str] | None = _FIELDS.get(letter)
        if field is None:
            raise ValueError(f"Unsupported pattern letter '{letter}' in: {pattern}")
        out.append(field(dt, len(part)))
    return "".join(out)
