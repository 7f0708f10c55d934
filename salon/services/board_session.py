from typing import Optional

from salon.schemas.board import BoardResponse
from salon.services.ledger import get_ledger
from salon.services.reservation_store import ReservationStore
from salon.services.schedule_controller import ScheduleController
from salon.utils.clock import get_clock

# Single operator, single board
_controller: Optional[ScheduleController] = None


def get_controller() -> ScheduleController:
    global _controller
    if _controller is None:
        _controller = ScheduleController(ReservationStore(), get_ledger, get_clock())
    return _controller


def board_snapshot(controller: ScheduleController) -> BoardResponse:
    return BoardResponse(
        month_label=controller.month_label,
        selected_date=controller.selected_date,
        today_remaining=controller.today_remaining_count,
        upcoming_total=controller.upcoming.total,
        calendar=controller.calendar,
        selected_day=controller.selected_day,
        search=controller.search_result,
        service_options=controller.service_options,
        is_loading=controller.is_loading,
        notice=controller.notice,
        form_error=controller.form_error,
    )
