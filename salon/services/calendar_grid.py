import calendar
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CalendarDay:
    date_str: str           # "" for padding cells
    day_of_month: int
    is_current_month: bool
    is_today: bool
    is_past: bool


PADDING_DAY = CalendarDay(date_str="", day_of_month=0, is_current_month=False, is_today=False, is_past=True)


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """
    Rolls a zero-based month over into the neighbouring years,
    e.g. (2025, -1) -> (2024, 11) and (2025, 12) -> (2026, 0).
    """
    carry, month = divmod(month, 12)
    return year + carry, month


def sunday_index(d: date) -> int:
    """Weekday column of a date in a Sunday-first week (0 = Sunday)."""
    return (d.weekday() + 1) % 7


def build_month_days(year: int, month: int, today: str) -> list[CalendarDay]:
    """
    Day cells for one month (month is zero-based), left-padded so the first
    day lands in its weekday column. No trailing padding is added.
    `today` is the local "YYYY-MM-DD" string used for the today/past flags.
    """
    year, month = normalize_month(year, month)
    first = date(year, month + 1, 1)
    _, last_day = calendar.monthrange(year, month + 1)

    days = [PADDING_DAY] * sunday_index(first)

    for day in range(1, last_day + 1):
        full_date = f"{year:04d}-{month + 1:02d}-{day:02d}"
        days.append(CalendarDay(
            date_str=full_date,
            day_of_month=day,
            is_current_month=True,
            is_today=full_date == today,
            # ISO dates sort correctly as plain strings
            is_past=full_date < today,
        ))

    return days
