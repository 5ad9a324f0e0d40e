"""Shared fixtures for the mut test suite."""

from datetime import datetime
from typing import Callable
import os
import pytest

# Keep test output free of debug logging
os.environ.setdefault("MUT_BEQUIET", "true")


class FixedClock:
    """Clock frozen at a given local date-time."""

    def __init__(self, moment: datetime) -> None:
        self.moment: datetime = moment

    def now(self) -> datetime:
        return self.moment


@pytest.fixture
def clock_at() -> Callable[..., FixedClock]:
    """Factory for clocks frozen at ``datetime(*args)``."""

    def make(*args: int) -> FixedClock:
        return FixedClock(datetime(*args))

    return make
