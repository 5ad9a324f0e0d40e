"""Tests for Java-style date pattern formatting."""

from datetime import datetime
import pytest
from mut.lib.datefmt import datetime_formatPattern

MOMENT = datetime(2026, 3, 7, 14, 5, 9, 123456)


@pytest.mark.parametrize(
    "pattern, expected",
    [
        ("yyyy-MM-dd HH:mm:ss", "2026-03-07 14:05:09"),
        ("yy/M/d", "26/3/7"),
        ("dd MMM yyyy", "07 Mar 2026"),
        ("EEEE, d MMMM", "Saturday, 7 March"),
        ("EEE", "Sat"),
        ("hh:mm a", "02:05 PM"),
        ("HH:mm:ss.SSS", "14:05:09.123"),
        ("'at' HH'h'", "at 14h"),
        ("HH 'o''clock'", "14 o'clock"),
        ("''", "'"),
        ("uuuu-MM-dd", "2026-03-07"),
        ("LLLL d", "March 7"),
        ("D", "66"),
        ("DDD", "066"),
        ("K:mm a", "2:05 PM"),
        ("kk:mm", "14:05"),
    ],
)
def test_format(pattern, expected):
    assert datetime_formatPattern(MOMENT, pattern) == expected


def test_midnight_in_twelve_hour_clock():
    assert datetime_formatPattern(datetime(2026, 1, 1, 0, 30), "h:mm a") == "12:30 AM"


def test_hour_variants_at_midnight():
    midnight = datetime(2026, 1, 1, 0, 30)
    assert datetime_formatPattern(midnight, "k") == "24"
    assert datetime_formatPattern(midnight, "K") == "0"


def test_unsupported_letter():
    with pytest.raises(ValueError, match="Unsupported pattern letter"):
        datetime_formatPattern(MOMENT, "yyyy-QQ")


def test_unterminated_quote():
    with pytest.raises(ValueError, match="Unterminated quote"):
        datetime_formatPattern(MOMENT, "HH 'oops")
