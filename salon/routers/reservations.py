import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from salon.schemas.reservation import (
    DayViewResponse,
    ReservationCreate,
    ReservationResponse,
    SearchResponse,
    TodayRemainingResponse,
    UpcomingResponse,
)
from salon.services import schedule_views
from salon.services.errors import (
    DELETE_FAILED_MESSAGE,
    LOAD_FAILED_MESSAGE,
    SAVE_FAILED_MESSAGE,
    ReservationNotFound,
    ReservationValidationError,
    StoreError,
)
from salon.services.ledger import CustomerRecord, get_ledger
from salon.services.reservation_rules import prepare_reservation
from salon.services.reservation_store import ReservationStore, get_store
from salon.utils.clock import Clock, date_str, get_clock
from salon.utils.security import require_session

logger = logging.getLogger("salon.routers.reservations")

router = APIRouter(prefix="/reservations", tags=["reservations"], dependencies=[Depends(require_session)])

NOT_FOUND_MESSAGE = "예약을 찾을 수 없습니다"


def _load_all(store: ReservationStore) -> list[ReservationResponse]:
    try:
        return store.list_reservations()
    except StoreError:
        raise HTTPException(status_code=503, detail=LOAD_FAILED_MESSAGE)


def _validated(request: ReservationCreate,
               store: ReservationStore,
               current_service_type: Optional[str] = None
) -> ReservationCreate:
    try:
        return prepare_reservation(request, store.list_service_options(), current_service_type)
    except ReservationValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/", response_model=list[ReservationResponse])
def get_all_reservations(store: ReservationStore = Depends(get_store)):
    return _load_all(store)


@router.post("/", response_model=ReservationResponse)
def create_reservation(request: ReservationCreate,
                       store: ReservationStore = Depends(get_store)
):
    data = _validated(request, store)
    try:
        return store.create(data)
    except StoreError:
        raise HTTPException(status_code=503, detail=SAVE_FAILED_MESSAGE)


@router.put("/{id}", response_model=ReservationResponse)
def update_reservation(id: str,
                       request: ReservationCreate,
                       store: ReservationStore = Depends(get_store)
):
    try:
        current = store.get(id)
    except ReservationNotFound:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    except StoreError:
        raise HTTPException(status_code=503, detail=SAVE_FAILED_MESSAGE)

    data = _validated(request, store, current.service_type)
    try:
        return store.update(id, data)
    except ReservationNotFound:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    except StoreError:
        raise HTTPException(status_code=503, detail=SAVE_FAILED_MESSAGE)


@router.delete("/{id}")
def delete_reservation(id: str, store: ReservationStore = Depends(get_store)):
    try:
        store.delete(id)
    except ReservationNotFound:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    except StoreError:
        raise HTTPException(status_code=503, detail=DELETE_FAILED_MESSAGE)
    return {"message": "예약이 삭제되었습니다"}


@router.get("/day/{day}", response_model=DayViewResponse)
def get_day(day: str = Path(pattern=r"^\d{4}-\d{2}-\d{2}$"),
            store: ReservationStore = Depends(get_store),
            clock: Clock = Depends(get_clock)
):
    """Full day panel, ascending by time; past slots are flagged, not dropped."""
    return schedule_views.day_view(_load_all(store), day, clock.now())


@router.get("/upcoming", response_model=UpcomingResponse)
def get_upcoming(store: ReservationStore = Depends(get_store),
                 clock: Clock = Depends(get_clock)
):
    return schedule_views.upcoming_view(_load_all(store), clock.now())


@router.get("/today-remaining", response_model=TodayRemainingResponse)
def get_today_remaining(store: ReservationStore = Depends(get_store),
                        clock: Clock = Depends(get_clock)
):
    now = clock.now()
    return TodayRemainingResponse(
        date=date_str(now),
        count=schedule_views.today_remaining_count(_load_all(store), now)
    )


@router.get("/search", response_model=SearchResponse)
def search_reservations(q: str = Query(min_length=1),
                        store: ReservationStore = Depends(get_store),
                        ledger: list[CustomerRecord] = Depends(get_ledger),
                        clock: Clock = Depends(get_clock)
):
    """
    Name or phone search. Exactly four typed digits match phone endings only
    and additionally pull the names the ledger knows for those numbers.
    """
    if not q.strip():
        raise HTTPException(status_code=422, detail="검색어를 입력해 주세요")
    return schedule_views.search_view(_load_all(store), ledger, q, clock.now())
