from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator
from typing import Optional


class ReservationCreate(BaseModel):
    """Form payload; used for both creating and fully overwriting a reservation."""
    customer_name: str = ""
    customer_phone: str = ""
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    time: str = Field(pattern=r"^\d{2}:\d{2}$")
    service_type: Optional[str] = None
    memo: str = ""

    @field_validator("date")
    @classmethod
    def date_must_exist(cls, value: str) -> str:
        date.fromisoformat(value)
        return value


class ReservationResponse(BaseModel):
    id: str
    customer_name: str
    customer_phone: str
    date: str
    time: str
    service_type: str
    memo: str
    created_at: datetime

    model_config = {"from_attributes": True}


class DayEntryResponse(BaseModel):
    reservation: ReservationResponse
    is_past: bool


class DayViewResponse(BaseModel):
    """Full day panel: every reservation, past ones dimmed"""
    date: str
    is_today: bool
    is_holiday: bool
    entries: list[DayEntryResponse]


class UpcomingDayResponse(BaseModel):
    date: str
    label: str
    is_today: bool
    count: int
    reservations: list[ReservationResponse]


class UpcomingResponse(BaseModel):
    total: int
    today_remaining: int
    days: list[UpcomingDayResponse]


class TodayRemainingResponse(BaseModel):
    date: str
    count: int


class LedgerMatchResponse(BaseModel):
    phone: str
    names: list[str]


class HistoryDayResponse(BaseModel):
    date: str
    label: str
    is_future: bool
    reservations: list[ReservationResponse]


class SearchResponse(BaseModel):
    query: str
    total: int
    is_last_four: bool
    days: list[HistoryDayResponse]
    ledger_matches: list[LedgerMatchResponse]
