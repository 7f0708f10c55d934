"""
Derived views over the in-memory reservation collection.

Every function here is total: an empty collection gives an empty result and
nothing is validated. Dates ("YYYY-MM-DD") and times ("HH:MM") are compared
as plain strings, which orders them correctly.
"""
import re
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from salon.schemas.calendar import CalendarCellResponse, CellEntryResponse, MonthViewResponse
from salon.schemas.reservation import (
    DayEntryResponse,
    DayViewResponse,
    HistoryDayResponse,
    LedgerMatchResponse,
    ReservationResponse,
    SearchResponse,
    UpcomingDayResponse,
    UpcomingResponse,
)
from salon.services.calendar_grid import build_month_days, normalize_month, sunday_index
from salon.services.holiday_calendar import is_korean_holiday, is_red_day
from salon.services.ledger import CustomerRecord
from salon.utils.clock import date_str, time_str

WEEKDAY_NAMES = ['일', '월', '화', '수', '목', '금', '토']
TODAY_LABEL = '오늘'
TOMORROW_LABEL = '내일'

_NON_DIGITS = re.compile(r"[^0-9]")


def digits_only(value: str) -> str:
    return _NON_DIGITS.sub("", value or "")


# ============ LABELS ============

def month_label(year: int, month: int) -> str:
    """month is zero-based, e.g. (2025, 5) -> '2025년 6월'"""
    year, month = normalize_month(year, month)
    return f"{year}년 {month + 1}월"


def short_date_label(value: str) -> str:
    d = date.fromisoformat(value)
    return f"{d.month}월 {d.day}일 ({WEEKDAY_NAMES[sunday_index(d)]})"


def long_date_label(value: str) -> str:
    d = date.fromisoformat(value)
    return f"{d.year}년 {d.month}월 {d.day}일 ({WEEKDAY_NAMES[sunday_index(d)]})"


def upcoming_day_label(value: str, today: str) -> str:
    tomorrow = (date.fromisoformat(today) + timedelta(days=1)).isoformat()
    if value == today:
        return TODAY_LABEL
    if value == tomorrow:
        return TOMORROW_LABEL
    return short_date_label(value)


def history_day_label(value: str, today: str) -> str:
    if value == today:
        return TODAY_LABEL
    return long_date_label(value)


# ============ DAY VIEW ============

def reservations_on(reservations: Sequence[ReservationResponse], day: str) -> list[ReservationResponse]:
    """Reservations of one date, ascending by time (double bookings keep their order)."""
    return sorted((r for r in reservations if r.date == day), key=lambda r: r.time)


def day_view(reservations: Sequence[ReservationResponse], day: str, now: datetime) -> DayViewResponse:
    today = date_str(now)
    now_time = time_str(now)

    entries = []
    for r in reservations_on(reservations, day):
        if day == today:
            is_past = r.time < now_time
        else:
            is_past = day < today
        entries.append(DayEntryResponse(reservation=r, is_past=is_past))

    return DayViewResponse(
        date=day,
        is_today=day == today,
        is_holiday=is_korean_holiday(day),
        entries=entries,
    )


# ============ UPCOMING ============

def is_upcoming(reservation: ReservationResponse, today: str, now_time: str) -> bool:
    return reservation.date > today or (reservation.date == today and reservation.time >= now_time)


def upcoming_reservations(reservations: Sequence[ReservationResponse], now: datetime) -> list[ReservationResponse]:
    today = date_str(now)
    now_time = time_str(now)
    return [r for r in reservations if is_upcoming(r, today, now_time)]


def today_remaining_count(reservations: Sequence[ReservationResponse], now: datetime) -> int:
    today = date_str(now)
    now_time = time_str(now)
    return sum(1 for r in reservations if r.date == today and r.time >= now_time)


def upcoming_view(reservations: Sequence[ReservationResponse], now: datetime) -> UpcomingResponse:
    """Remaining work grouped by date, earliest first."""
    today = date_str(now)
    upcoming = upcoming_reservations(reservations, now)

    grouped: dict[str, list[ReservationResponse]] = {}
    for r in upcoming:
        grouped.setdefault(r.date, []).append(r)

    days = []
    for day in sorted(grouped):
        items = sorted(grouped[day], key=lambda r: r.time)
        days.append(UpcomingDayResponse(
            date=day,
            label=upcoming_day_label(day, today),
            is_today=day == today,
            count=len(items),
            reservations=items,
        ))

    return UpcomingResponse(
        total=len(upcoming),
        today_remaining=today_remaining_count(reservations, now),
        days=days,
    )


# ============ SEARCH ============

def is_last_four_query(query: str) -> bool:
    """
    True only when the operator typed exactly four digits. Both checks are
    needed: "12-3" has four characters but only three digits.
    """
    return len(digits_only(query)) == 4 and len(query) == 4


def matches_query(reservation: ReservationResponse, query: str) -> bool:
    name_match = query.lower() in (reservation.customer_name or "").lower()

    clean_query = digits_only(query)
    clean_phone = digits_only(reservation.customer_phone)
    phone_match = False
    if clean_query:
        if is_last_four_query(query):
            phone_match = clean_phone.endswith(clean_query)
        else:
            phone_match = clean_query in clean_phone

    return name_match or phone_match


def search_reservations(reservations: Sequence[ReservationResponse], query: str) -> list[ReservationResponse]:
    """Matches in collection order; a blank query matches nothing."""
    query = query.strip()
    if not query:
        return []
    return [r for r in reservations if matches_query(r, query)]


def ledger_matches(ledger: Sequence[CustomerRecord], query: str) -> dict[str, list[str]]:
    """
    Ledger rows whose phone ends with a last-four query, grouped by the phone
    as written in the ledger, each with the distinct names used for it.
    Any other query (names, longer numbers) never consults the ledger.
    """
    query = query.strip()
    if not is_last_four_query(query):
        return {}

    grouped: dict[str, list[str]] = {}
    for record in ledger:
        if not digits_only(record.phone).endswith(query):
            continue
        names = grouped.setdefault(record.phone, [])
        if record.name not in names:
            names.append(record.name)
    return grouped


def group_history(results: Sequence[ReservationResponse], now: datetime) -> list[HistoryDayResponse]:
    """Search results as history: newest date first, latest time first."""
    today = date_str(now)
    ordered = sorted(results, key=lambda r: (r.date, r.time), reverse=True)

    grouped: dict[str, list[ReservationResponse]] = {}
    for r in ordered:
        grouped.setdefault(r.date, []).append(r)

    return [
        HistoryDayResponse(
            date=day,
            label=history_day_label(day, today),
            is_future=day >= today,
            reservations=items,
        )
        for day, items in grouped.items()
    ]


def search_view(reservations: Sequence[ReservationResponse], ledger: Sequence[CustomerRecord],
                query: str, now: datetime) -> SearchResponse:
    query = query.strip()
    results = search_reservations(reservations, query)
    matches = ledger_matches(ledger, query)
    return SearchResponse(
        query=query,
        total=len(results),
        is_last_four=is_last_four_query(query),
        days=group_history(results, now),
        ledger_matches=[LedgerMatchResponse(phone=phone, names=names) for phone, names in matches.items()],
    )


# ============ MONTH VIEW ============

def _cell_entries(day_reservations: list[ReservationResponse], is_today: bool, now_time: str) -> list[CellEntryResponse]:
    entries = []
    for r in day_reservations:
        is_past_time = is_today and r.time < now_time
        entries.append(CellEntryResponse(
            id=r.id,
            time=r.time,
            # no room in the grid for slots that are already over
            customer_name=None if is_past_time else r.customer_name,
            service_type=None if is_past_time else r.service_type,
            is_upcoming=is_today and r.time >= now_time,
            is_past_time=is_past_time,
        ))
    return entries


def month_view(year: int, month: int, reservations: Sequence[ReservationResponse], now: datetime,
               selected: Optional[str] = None) -> MonthViewResponse:
    """
    Calendar grid for a zero-based month with per-cell previews.
    Past days (and padding) carry a count but no preview entries.
    """
    year, month = normalize_month(year, month)
    today = date_str(now)
    now_time = time_str(now)

    by_date: dict[str, list[ReservationResponse]] = {}
    for r in reservations:
        by_date.setdefault(r.date, []).append(r)

    cells = []
    for column, day in enumerate(build_month_days(year, month, today)):
        day_reservations = sorted(by_date.get(day.date_str, []), key=lambda r: r.time) if day.date_str else []
        entries = [] if day.is_past else _cell_entries(day_reservations, day.is_today, now_time)
        cells.append(CalendarCellResponse(
            date_str=day.date_str,
            day_of_month=day.day_of_month,
            is_current_month=day.is_current_month,
            is_today=day.is_today,
            is_past=day.is_past,
            is_red_day=is_red_day(column, day.date_str),
            is_selected=bool(day.date_str) and day.date_str == selected,
            reservation_count=len(day_reservations),
            entries=entries,
        ))

    return MonthViewResponse(year=year, month=month + 1, label=month_label(year, month), cells=cells)
