"""
Tests for the operator board controller.

Covers:
- loading, refresh and the clock tick
- month navigation and date selection
- save/delete with local cache patching
- validation and store failures leaving state untouched
"""
from datetime import datetime

import pytest

from salon.schemas.reservation import ReservationCreate
from salon.services.errors import (
    DELETE_FAILED_MESSAGE,
    LOAD_FAILED_MESSAGE,
    MISSING_CUSTOMER_MESSAGE,
    SAVE_FAILED_MESSAGE,
    UNKNOWN_SERVICE_MESSAGE,
    StoreError,
)
from salon.services.schedule_controller import CreateReservation, UpdateReservation
from tests.conftest import add_reservation


def form(**fields) -> ReservationCreate:
    data = {
        "customer_name": "Kim Soo",
        "customer_phone": "010-5555-1234",
        "date": "2025-06-10",
        "time": "13:00",
        "memo": "",
    }
    data.update(fields)
    return ReservationCreate(**data)


class TestLoading:

    def test_initial_state_follows_clock(self, controller):
        assert controller.year == 2025
        assert controller.month == 5
        assert controller.selected_date == "2025-06-10"
        assert controller.month_label == "2025년 6월"

    def test_load(self, controller, mixed_reservations):
        assert controller.load()

        assert controller.is_loaded
        assert not controller.is_loading
        assert len(controller.reservations) == 5
        assert len(controller.ledger) == 5
        assert controller.service_options[0] == "컷"

    def test_load_failure_keeps_previous_state(self, controller, todays_reservations, monkeypatch):
        controller.load()

        def failing_list():
            raise StoreError("offline")

        monkeypatch.setattr(controller.store, "list_reservations", failing_list)

        assert not controller.load()
        assert controller.notice == LOAD_FAILED_MESSAGE
        assert len(controller.reservations) == 3

    def test_refresh_picks_up_new_rows_and_time(self, controller, db, clock):
        controller.load()
        add_reservation(db, time="17:00")
        clock.set(datetime(2025, 6, 10, 18, 0))

        controller.refresh()

        assert len(controller.reservations) == 1
        assert controller.now == datetime(2025, 6, 10, 18, 0)
        assert controller.today_remaining_count == 0

    def test_tick_only_resamples_clock(self, controller, db, clock, todays_reservations):
        controller.load()
        assert controller.today_remaining_count == 2

        add_reservation(db, time="19:00")
        clock.set(datetime(2025, 6, 10, 10, 0))
        controller.tick()

        assert controller.today_remaining_count == 1
        assert len(controller.reservations) == 3

    def test_views_stable_without_writes(self, controller, mixed_reservations):
        controller.load()
        controller.search("kim")
        first = (controller.selected_day, controller.upcoming, controller.search_result)

        controller.load()
        controller.search("kim")
        assert (controller.selected_day, controller.upcoming, controller.search_result) == first


class TestNavigation:

    def test_navigate_back_over_new_year(self, controller, clock):
        clock.set(datetime(2025, 1, 15, 12, 0))
        controller.go_to_today()

        controller.navigate_month(-1)
        assert (controller.year, controller.month) == (2024, 11)
        assert controller.calendar.label == "2024년 12월"

        controller.navigate_month(2)
        assert (controller.year, controller.month) == (2025, 1)

    def test_go_to_today(self, controller):
        controller.navigate_month(5)
        controller.select_date("2025-12-24")

        controller.go_to_today()

        assert (controller.year, controller.month) == (2025, 5)
        assert controller.selected_date == "2025-06-10"

    def test_select_date_drives_day_panel(self, controller, mixed_reservations):
        controller.load()
        controller.select_date("2025-06-11")

        day = controller.selected_day
        assert day.date == "2025-06-11"
        assert [e.reservation.customer_name for e in day.entries] == ["Jung Ho"]

    def test_padding_cells_cannot_be_selected(self, controller):
        controller.select_date("")
        assert controller.selected_date == "2025-06-10"


class TestSearch:

    def test_last_four_search_with_ledger(self, controller, todays_reservations):
        controller.load()

        assert controller.search(" 1234 ")
        result = controller.search_result
        assert result.total == 1
        assert result.days[0].reservations[0].customer_name == "Kim Soo"
        assert [m.phone for m in result.ledger_matches] == ["010-1111-1234", "010 2222 1234"]
        assert result.ledger_matches[0].names == ["김민지", "박민지"]

    def test_name_search_without_ledger(self, controller, todays_reservations):
        controller.load()
        controller.search("kim")

        assert controller.search_result.total == 1
        assert controller.search_result.ledger_matches == []

    def test_blank_search_is_ignored(self, controller):
        assert not controller.search("   ")
        assert controller.search_result is None

    def test_close_search(self, controller):
        controller.search("kim")
        controller.close_search()
        assert controller.search_result is None


class TestSave:

    def test_create_appends_to_cache(self, controller):
        controller.load()
        saved = controller.save(CreateReservation(form()))

        assert saved is not None
        assert saved.service_type == "컷"    # first configured option
        assert controller.reservations == [saved]
        assert controller.today_remaining_count == 1

    def test_update_replaces_in_cache(self, controller, todays_reservations):
        controller.load()
        target = todays_reservations["later"]

        saved = controller.save(UpdateReservation(target.id, form(customer_name="Park Ji", time="16:00", service_type="펌")))

        assert saved.id == target.id
        cached = [r for r in controller.reservations if r.id == target.id]
        assert cached[0].time == "16:00"
        assert len(controller.reservations) == 3

    def test_edit_keeps_service_type_no_longer_offered(self, controller):
        """The seeding read still offers 시술; later reads drop it."""
        controller.load()
        assert "시술" in controller.service_options
        saved = controller.save(CreateReservation(form(service_type="시술")))

        controller.refresh()
        assert "시술" not in controller.service_options

        updated = controller.save(UpdateReservation(saved.id, form(service_type="시술", memo="late")))

        assert updated is not None
        assert controller.form_error is None
        assert updated.service_type == "시술"
        assert updated.memo == "late"

    def test_edit_cannot_switch_to_retired_service_type(self, controller, todays_reservations):
        controller.load()
        controller.refresh()
        target = todays_reservations["later"]

        assert controller.save(UpdateReservation(target.id, form(service_type="시술"))) is None
        assert controller.form_error == UNKNOWN_SERVICE_MESSAGE

    def test_missing_name_and_phone_rejected_before_store(self, controller, monkeypatch):
        controller.load()
        calls = []
        monkeypatch.setattr(controller.store, "create", lambda data: calls.append(data))

        assert controller.save(CreateReservation(form(customer_name=" ", customer_phone=""))) is None
        assert controller.form_error == MISSING_CUSTOMER_MESSAGE
        assert calls == []

    def test_phone_only_is_enough(self, controller):
        controller.load()
        assert controller.save(CreateReservation(form(customer_name=""))) is not None

    def test_store_failure_keeps_cache(self, controller, todays_reservations, monkeypatch):
        controller.load()
        before = list(controller.reservations)

        def failing_create(data):
            raise StoreError("offline")

        monkeypatch.setattr(controller.store, "create", failing_create)

        assert controller.save(CreateReservation(form())) is None
        assert controller.notice == SAVE_FAILED_MESSAGE
        assert controller.reservations == before
        assert not controller.is_loading

    def test_update_of_vanished_reservation(self, controller, todays_reservations, db):
        controller.load()
        target = todays_reservations["later"]
        target_id = target.id
        db.delete(target)
        db.commit()

        assert controller.save(UpdateReservation(target_id, form())) is None
        assert controller.notice == SAVE_FAILED_MESSAGE


class TestDelete:

    def test_delete_removes_from_cache(self, controller, todays_reservations):
        controller.load()
        target = todays_reservations["now"]

        assert controller.delete(target.id)
        assert target.id not in [r.id for r in controller.reservations]

    def test_delete_failure(self, controller, todays_reservations):
        controller.load()

        assert not controller.delete("unknown")
        assert controller.notice == DELETE_FAILED_MESSAGE
        assert len(controller.reservations) == 3


@pytest.mark.parametrize("hour,minute,expected", [
    (8, 0, 3),
    (9, 0, 2),
    (9, 1, 1),
    (14, 1, 0),
])
def test_today_remaining_follows_clock(controller, clock, todays_reservations, hour, minute, expected):
    clock.set(datetime(2025, 6, 10, hour, minute))
    controller.load()
    controller.tick()
    assert controller.today_remaining_count == expected
