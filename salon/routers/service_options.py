from typing import Optional

from fastapi import APIRouter, Depends, Query

from salon.schemas.calendar import TimeSlotsResponse
from salon.services.reservation_store import ReservationStore, get_store
from salon.services.time_slots import available_time_slots, default_time_slot
from salon.utils.clock import Clock, get_clock
from salon.utils.security import require_session

router = APIRouter(tags=["service-options"], dependencies=[Depends(require_session)])


@router.get("/service-options/", response_model=list[str])
def get_service_options(store: ReservationStore = Depends(get_store)):
    return store.list_service_options()


@router.get("/time-slots/", response_model=TimeSlotsResponse)
def get_time_slots(date: str = Query(pattern=r"^\d{4}-\d{2}-\d{2}$"),
                   selected: Optional[str] = None,
                   clock: Clock = Depends(get_clock)
):
    """Slots the booking form offers for a date; on today only the remaining ones."""
    now = clock.now()
    return TimeSlotsResponse(
        date=date,
        default=default_time_slot(date, now),
        slots=available_time_slots(date, now, selected)
    )
