from pydantic import BaseModel
from typing import Optional


class CellEntryResponse(BaseModel):
    """Compact preview; name and service are hidden once the slot has passed today"""
    id: str
    time: str
    customer_name: Optional[str] = None
    service_type: Optional[str] = None
    is_upcoming: bool
    is_past_time: bool


class CalendarCellResponse(BaseModel):
    date_str: str
    day_of_month: int
    is_current_month: bool
    is_today: bool
    is_past: bool
    is_red_day: bool
    is_selected: bool = False
    reservation_count: int
    entries: list[CellEntryResponse]


class MonthViewResponse(BaseModel):
    year: int
    month: int              # 1-based on the wire
    label: str
    cells: list[CalendarCellResponse]


class TimeSlotsResponse(BaseModel):
    date: str
    default: str
    slots: list[str]
