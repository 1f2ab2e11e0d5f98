"""
Injectable clock.

The import driver stamps ``started_at`` / ``completed_at`` on every run; it
asks a ``Clock`` instead of calling ``datetime.now()`` so tests can pin the
timestamps.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Source of timezone-aware 'now' values."""

    @abstractmethod
    def now(self) -> datetime: ...


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Test clock frozen at a fixed instant.

    ``now()`` keeps returning the same value until the test moves it with
    ``advance()`` or ``set_time()``.
    """

    DEFAULT_TIME = datetime(2025, 8, 1, 9, 0, 0, tzinfo=timezone.utc)

    def __init__(self, fixed_time: datetime | None = None):
        self._current = fixed_time or self.DEFAULT_TIME

    def now(self) -> datetime:
        return self._current

    def set_time(self, time: datetime) -> None:
        self._current = time

    def advance(self, seconds: int = 1) -> None:
        self._current += timedelta(seconds=seconds)
