"""
Operator session state for the schedule board.

The controller keeps a cached copy of the store's reservations plus the
ledger, and recomputes every view from that cache. Writes go to the store
first and patch the cache only when the store call succeeded.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Union

from salon.schemas.calendar import MonthViewResponse
from salon.schemas.reservation import (
    DayViewResponse,
    ReservationCreate,
    ReservationResponse,
    SearchResponse,
    UpcomingResponse,
)
from salon.services import schedule_views
from salon.services.calendar_grid import normalize_month
from salon.services.errors import (
    DELETE_FAILED_MESSAGE,
    LOAD_FAILED_MESSAGE,
    SAVE_FAILED_MESSAGE,
    ReservationValidationError,
    StoreError,
)
from salon.services.ledger import CustomerRecord
from salon.services.reservation_rules import prepare_reservation
from salon.services.reservation_store import ReservationStore
from salon.utils.clock import Clock, date_str

logger = logging.getLogger("salon.services.schedule_controller")


@dataclass(frozen=True)
class CreateReservation:
    data: ReservationCreate


@dataclass(frozen=True)
class UpdateReservation:
    reservation_id: str
    data: ReservationCreate


SaveCommand = Union[CreateReservation, UpdateReservation]


class ScheduleController:

    def __init__(self, store: ReservationStore, ledger_loader: Callable[[], list[CustomerRecord]], clock: Clock):
        self.store = store
        self.ledger_loader = ledger_loader
        self.clock = clock

        self.now: datetime = clock.now()
        self.year = self.now.year
        self.month = self.now.month - 1     # zero-based
        self.selected_date = date_str(self.now)

        self.reservations: list[ReservationResponse] = []
        self.ledger: list[CustomerRecord] = []
        self.service_options: list[str] = []

        self.search_query = ""
        self.search_results: list[ReservationResponse] = []
        self.is_search_open = False

        self.is_loading = False
        self.is_loaded = False
        self.notice: Optional[str] = None
        self.form_error: Optional[str] = None

    # ============ LOADING ============

    def _load_reservations(self) -> bool:
        self.is_loading = True
        try:
            self.reservations = self.store.list_reservations()
            self.is_loaded = True
            return True
        except StoreError:
            self.notice = LOAD_FAILED_MESSAGE
            return False
        finally:
            self.is_loading = False

    def _load_ledger(self):
        # never raises; an unreadable ledger is just empty
        self.ledger = self.ledger_loader()

    def load(self) -> bool:
        """Initial load right after the operator authenticated."""
        self.notice = None
        ok = self._load_reservations()
        self._load_ledger()
        self.service_options = self.store.list_service_options()
        logger.info(f"Board loaded: {len(self.reservations)} reservations, {len(self.ledger)} ledger rows")
        return ok

    def refresh(self) -> bool:
        self.tick()
        return self.load()

    def tick(self):
        """Re-sample "now"; called by the background timer, never touches the store."""
        self.now = self.clock.now()

    # ============ NAVIGATION ============

    def navigate_month(self, delta: int):
        self.year, self.month = normalize_month(self.year, self.month + delta)

    def go_to_today(self):
        self.tick()
        self.year = self.now.year
        self.month = self.now.month - 1
        self.selected_date = date_str(self.now)

    def select_date(self, value: str):
        if value:
            self.selected_date = value

    # ============ SEARCH ============

    def search(self, query: str) -> bool:
        query = query.strip()
        if not query:
            return False
        self.search_query = query
        self.search_results = schedule_views.search_reservations(self.reservations, query)
        self.is_search_open = True
        return True

    def close_search(self):
        self.is_search_open = False

    # ============ WRITES ============

    def save(self, command: SaveCommand) -> Optional[ReservationResponse]:
        self.form_error = None
        current_service_type = None
        if isinstance(command, UpdateReservation):
            current_service_type = next(
                (r.service_type for r in self.reservations if r.id == command.reservation_id), None
            )
        try:
            data = prepare_reservation(
                command.data,
                self.service_options or self.store.list_service_options(),
                current_service_type,
            )
        except ReservationValidationError as e:
            self.form_error = str(e)
            return None

        self.is_loading = True
        try:
            if isinstance(command, UpdateReservation):
                saved = self.store.update(command.reservation_id, data)
                self.reservations = [saved if r.id == saved.id else r for r in self.reservations]
            else:
                saved = self.store.create(data)
                self.reservations = self.reservations + [saved]
        except StoreError:
            self.notice = SAVE_FAILED_MESSAGE
            return None
        finally:
            self.is_loading = False

        self.notice = None
        return saved

    def delete(self, reservation_id: str) -> bool:
        self.is_loading = True
        try:
            self.store.delete(reservation_id)
        except StoreError:
            self.notice = DELETE_FAILED_MESSAGE
            return False
        finally:
            self.is_loading = False

        self.reservations = [r for r in self.reservations if r.id != reservation_id]
        self.notice = None
        return True

    # ============ PROJECTIONS ============

    @property
    def month_label(self) -> str:
        return schedule_views.month_label(self.year, self.month)

    @property
    def calendar(self) -> MonthViewResponse:
        return schedule_views.month_view(self.year, self.month, self.reservations, self.now, self.selected_date)

    @property
    def selected_day(self) -> DayViewResponse:
        return schedule_views.day_view(self.reservations, self.selected_date, self.now)

    @property
    def upcoming(self) -> UpcomingResponse:
        return schedule_views.upcoming_view(self.reservations, self.now)

    @property
    def today_remaining_count(self) -> int:
        return schedule_views.today_remaining_count(self.reservations, self.now)

    @property
    def search_result(self) -> Optional[SearchResponse]:
        if not self.is_search_open:
            return None
        return schedule_views.search_view(self.search_results, self.ledger, self.search_query, self.now)
