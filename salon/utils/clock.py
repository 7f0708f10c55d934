from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in the server's local timezone (never UTC)."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Clock frozen at a given instant; used by tests and previews."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def set(self, instant: datetime):
        self.instant = instant


def date_str(dt: datetime) -> str:
    return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"


def time_str(dt: datetime) -> str:
    return f"{dt.hour:02d}:{dt.minute:02d}"


_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock
