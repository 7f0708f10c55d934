from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path

from salon.schemas.calendar import MonthViewResponse
from salon.services import schedule_views
from salon.services.errors import LOAD_FAILED_MESSAGE, StoreError
from salon.services.reservation_store import ReservationStore, get_store
from salon.utils.clock import Clock, get_clock
from salon.utils.security import require_session

router = APIRouter(prefix="/calendar", tags=["calendar"], dependencies=[Depends(require_session)])


@router.get("/{year}/{month}", response_model=MonthViewResponse)
def get_month(year: int = Path(ge=1, le=9999),
              month: int = Path(ge=1, le=12),
              selected: Optional[str] = None,
              store: ReservationStore = Depends(get_store),
              clock: Clock = Depends(get_clock)
):
    """
    Month grid with red days and per-day previews. month is 1-based here,
    the grid itself works zero-based.
    """
    try:
        reservations = store.list_reservations()
    except StoreError:
        raise HTTPException(status_code=503, detail=LOAD_FAILED_MESSAGE)
    return schedule_views.month_view(year, month - 1, reservations, clock.now(), selected)
