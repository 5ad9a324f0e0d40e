"""
Folding of human-readable durations into days.

Permission plugins report expiry as free text such as ``1y 2mo 3w 4d`` or
``5h6m7s``. Every ``<number><unit>`` pair found anywhere in the text is
summed; anything else is ignored.

Units use fixed lengths: y=365d, mo=30d, w=7d, d=24h, h=3600s, m=60s, s=1s.
"""

import re
from typing import Final
from mut.models.dataModel import DurationToken

SECONDS_PER_DAY: Final[int] = 24 * 3600

UNIT_SECONDS: Final[dict[str, int]] = {
    "y": 365 * SECONDS_PER_DAY,
    "mo": 30 * SECONDS_PER_DAY,
    "w": 7 * SECONDS_PER_DAY,
    "d": SECONDS_PER_DAY,
    "h": 3600,
    "m": 60,
    "s": 1,
}

# "mo" must precede "m" in the alternation
_TOKEN: Final[re.Pattern[str]] = re.compile(r"([0-9]+)\s*(y|mo|w|d|h|m|s)")


def duration_tokens(text: str) -> list[DurationToken]:
    """Return every ``<number><unit>`` token in order of appearance."""
    return [
        DurationToken(value=int(match.group(1)), unit=match.group(2))
        for match in _TOKEN.finditer(text)
    ]


def duration_toSeconds(tokens: list[DurationToken]) -> int:
    return sum(token.value * UNIT_SECONDS[token.unit] for token in tokens)


def duration_parseToDays(text: str | None) -> int:
    """Fold a duration string into a whole number of days.

    The total is rounded to the nearest day, halves rounding up, so ``36h``
    gives 2 and ``11h`` gives 0.

    Args:
        text: Free-form duration text

    Returns:
        Day count, or -1 if the text is blank or holds no duration token
    """
    if text is None or not text.strip():
        return -1

    tokens: list[DurationToken] = duration_tokens(text)
    if not tokens:
        return -1

    return (duration_toSeconds(tokens) + SECONDS_PER_DAY // 2) // SECONDS_PER_DAY
