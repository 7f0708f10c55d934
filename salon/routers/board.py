from fastapi import APIRouter, Depends, HTTPException

from salon.schemas.board import BoardResponse, NavigateRequest, SearchRequest, SelectDateRequest
from salon.schemas.reservation import ReservationCreate
from salon.services.board_session import board_snapshot, get_controller
from salon.services.schedule_controller import CreateReservation, ScheduleController, UpdateReservation
from salon.utils.security import require_session

router = APIRouter(prefix="/board", tags=["board"], dependencies=[Depends(require_session)])


def _loaded(controller: ScheduleController) -> ScheduleController:
    if not controller.is_loaded:
        controller.load()
    return controller


def _after_write(controller: ScheduleController, ok: bool) -> BoardResponse:
    if ok:
        return board_snapshot(controller)
    if controller.form_error:
        raise HTTPException(status_code=422, detail=controller.form_error)
    raise HTTPException(status_code=503, detail=controller.notice)


@router.get("", response_model=BoardResponse)
def get_board(controller: ScheduleController = Depends(get_controller)):
    return board_snapshot(_loaded(controller))


@router.post("/refresh", response_model=BoardResponse)
def refresh_board(controller: ScheduleController = Depends(get_controller)):
    controller.refresh()
    return board_snapshot(controller)


@router.post("/navigate", response_model=BoardResponse)
def navigate_month(request: NavigateRequest, controller: ScheduleController = Depends(get_controller)):
    _loaded(controller).navigate_month(request.delta)
    return board_snapshot(controller)


@router.post("/today", response_model=BoardResponse)
def go_to_today(controller: ScheduleController = Depends(get_controller)):
    _loaded(controller).go_to_today()
    return board_snapshot(controller)


@router.post("/select", response_model=BoardResponse)
def select_date(request: SelectDateRequest, controller: ScheduleController = Depends(get_controller)):
    _loaded(controller).select_date(request.date)
    return board_snapshot(controller)


@router.post("/search", response_model=BoardResponse)
def search(request: SearchRequest, controller: ScheduleController = Depends(get_controller)):
    # blank queries leave the board unchanged
    _loaded(controller).search(request.query)
    return board_snapshot(controller)


@router.post("/search/close", response_model=BoardResponse)
def close_search(controller: ScheduleController = Depends(get_controller)):
    controller.close_search()
    return board_snapshot(controller)


@router.post("/reservations", response_model=BoardResponse)
def create_reservation(request: ReservationCreate, controller: ScheduleController = Depends(get_controller)):
    saved = _loaded(controller).save(CreateReservation(request))
    return _after_write(controller, saved is not None)


@router.put("/reservations/{id}", response_model=BoardResponse)
def update_reservation(id: str, request: ReservationCreate, controller: ScheduleController = Depends(get_controller)):
    saved = _loaded(controller).save(UpdateReservation(id, request))
    return _after_write(controller, saved is not None)


@router.delete("/reservations/{id}", response_model=BoardResponse)
def delete_reservation(id: str, controller: ScheduleController = Depends(get_controller)):
    deleted = _loaded(controller).delete(id)
    return _after_write(controller, deleted)
