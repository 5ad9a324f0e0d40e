"""
Quote-aware splitting of dotted placeholder arguments.

Placeholder parameters arrive as a single dotted string such as
``diffDays.second."HH:mm:ss".true``. Dots inside double quotes are part of
the argument, so ``a."b.c".d`` splits into ``["a", "b.c", "d"]``.

Malformed quoting (an odd number of quotes) is handled on a best effort
basis: the split points are whatever the lookahead decides.
"""

import re
from typing import Final

# A dot is a split point only if an even number of quotes follow it
_DOT_OUTSIDE_QUOTES: Final[re.Pattern[str]] = re.compile(
    r'\.(?=(?:[^"]*"[^"]*")*[^"]*$)'
)


def quotes_strip(part: str) -> str:
    """Remove one pair of surrounding double quotes, if present."""
    if len(part) >= 2 and part.startswith('"') and part.endswith('"'):
        return part[1:-1]
    return part


def args_split(text: str) -> list[str]:
    """Split a dotted argument string, ignoring dots inside quotes.

    Trailing empty pieces are dropped, but the result always holds at least
    one element (``""`` for empty input).

    Args:
        text: Raw argument string

    Returns:
        Ordered list of arguments with surrounding quotes removed
    """
    parts: list[str] = _DOT_OUTSIDE_QUOTES.split(text)
    while len(parts) > 1 and not parts[-1]:
        parts.pop()
    return [quotes_strip(part) for part in parts]
