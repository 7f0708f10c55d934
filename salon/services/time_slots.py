from datetime import datetime
from typing import Optional

from salon.utils.clock import date_str, time_str

DEFAULT_SERVICE_OPTIONS = [
    '컷',
    '펌',
    '매직',
    '셋팅',
    '염색',
    '클리닉',
    '시술',
]

# Normalization applied every time options are read from the store
RETIRED_SERVICE_OPTIONS = ['시술']
REQUIRED_SERVICE_OPTIONS = ['드라이', '샴푸']

FIRST_SLOT = (10, 10)
LAST_SLOT = (19, 30)
SLOT_MINUTES = 10


def _build_time_slots() -> list[str]:
    slots = []
    minutes = FIRST_SLOT[0] * 60 + FIRST_SLOT[1]
    last = LAST_SLOT[0] * 60 + LAST_SLOT[1]
    while minutes <= last:
        slots.append(f"{minutes // 60:02d}:{minutes % 60:02d}")
        minutes += SLOT_MINUTES
    return slots


TIME_SLOTS = _build_time_slots()


def normalize_service_options(stored: list[str]) -> list[str]:
    """Drops retired names and appends required ones that are missing."""
    options = [name for name in stored if name not in RETIRED_SERVICE_OPTIONS]
    for name in REQUIRED_SERVICE_OPTIONS:
        if name not in options:
            options.append(name)
    return options


def available_time_slots(selected_date: str, now: datetime, selected: Optional[str] = None) -> list[str]:
    """
    Slots offered by the booking form. On today only slots at or after the
    current minute are offered; the currently selected slot always stays.
    """
    if selected_date != date_str(now):
        return list(TIME_SLOTS)
    current = time_str(now)
    return [slot for slot in TIME_SLOTS if slot == selected or slot >= current]


def default_time_slot(selected_date: str, now: datetime) -> str:
    if selected_date == date_str(now):
        current = time_str(now)
        for slot in TIME_SLOTS:
            if slot >= current:
                return slot
    return TIME_SLOTS[0]
