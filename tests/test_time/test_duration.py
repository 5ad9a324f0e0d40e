"""Tests for folding duration strings into days."""

import pytest
from mut.lib.duration import duration_parseToDays, duration_tokens
from pydantic import ValidationError
from mut.models.dataModel import DurationToken


@pytest.mark.parametrize(
    "text, days",
    [
        ("1d", 1),
        ("24h", 1),
        ("36h", 2),
        ("11h", 0),
        ("12h", 1),
        ("1w", 7),
        ("1mo", 30),
        ("1y", 365),
        ("1y 2mo 3w 4d", 365 + 60 + 21 + 4),
        ("1y2mo3d", 365 + 60 + 3),
        ("2 d 12 h", 3),
        ("90m", 0),
        ("86400s", 1),
    ],
)
def test_parse_to_days(text, days):
    assert duration_parseToDays(text) == days


@pytest.mark.parametrize("text", ["", "   ", "nonsense", "d h m", None])
def test_parse_to_days_sentinel(text):
    assert duration_parseToDays(text) == -1


def test_month_token_preferred_over_minute():
    assert duration_tokens("3mo") == [DurationToken(value=3, unit="mo")]


def test_unrecognized_text_ignored():
    assert duration_tokens("expires in 2d, maybe 5h?") == [
        DurationToken(value=2, unit="d"),
        DurationToken(value=5, unit="h"),
    ]
    assert duration_parseToDays("expires in 2d, maybe 5h?") == 2


def test_duration_token_is_immutable():
    token = DurationToken(value=2, unit="d")
    with pytest.raises(ValidationError):
        token.value = 3
    assert token == DurationToken(value=2, unit="d")
