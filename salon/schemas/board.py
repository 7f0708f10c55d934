from pydantic import BaseModel
from typing import Optional

from salon.schemas.calendar import MonthViewResponse
from salon.schemas.reservation import DayViewResponse, SearchResponse


class NavigateRequest(BaseModel):
    delta: int


class SelectDateRequest(BaseModel):
    date: str


class SearchRequest(BaseModel):
    query: str


class BoardResponse(BaseModel):
    """Everything the operator screen shows at once"""
    month_label: str
    selected_date: str
    today_remaining: int
    upcoming_total: int
    calendar: MonthViewResponse
    selected_day: DayViewResponse
    search: Optional[SearchResponse] = None
    service_options: list[str]
    is_loading: bool
    notice: Optional[str] = None
    form_error: Optional[str] = None
