import logging
from typing import Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from salon.database import SessionLocal
from salon.models import Reservation, ServiceType
from salon.schemas.reservation import ReservationCreate, ReservationResponse
from salon.services.errors import ReservationNotFound, StoreError
from salon.services.time_slots import DEFAULT_SERVICE_OPTIONS, normalize_service_options

logger = logging.getLogger("salon.services.reservation_store")


class ReservationStore:
    """
    CRUD gateway over the reservation and service type tables.
    Every call runs in its own session; database errors surface as StoreError.
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    # ============ RESERVATIONS ============

    def list_reservations(self) -> list[ReservationResponse]:
        try:
            with self.session_factory() as db:
                rows = db.query(Reservation).order_by(Reservation.created_at).all()
                return [ReservationResponse.model_validate(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Loading reservations failed: {e}")
            raise StoreError("list failed") from e

    def get(self, reservation_id: str) -> ReservationResponse:
        try:
            with self.session_factory() as db:
                reservation = db.query(Reservation).filter(Reservation.id == reservation_id).first()
                if not reservation:
                    raise ReservationNotFound(reservation_id)
                return ReservationResponse.model_validate(reservation)
        except SQLAlchemyError as e:
            logger.error(f"Loading reservation {reservation_id} failed: {e}")
            raise StoreError("get failed") from e

    def create(self, data: ReservationCreate) -> ReservationResponse:
        try:
            with self.session_factory() as db:
                reservation = Reservation(**data.model_dump())
                db.add(reservation)
                db.commit()
                db.refresh(reservation)
                logger.info(f"Reservation {reservation.id} created for {reservation.date} {reservation.time}")
                return ReservationResponse.model_validate(reservation)
        except SQLAlchemyError as e:
            logger.error(f"Creating reservation failed: {e}")
            raise StoreError("create failed") from e

    def update(self, reservation_id: str, data: ReservationCreate) -> ReservationResponse:
        """Overwrites every field except id and created_at."""
        try:
            with self.session_factory() as db:
                reservation = db.query(Reservation).filter(Reservation.id == reservation_id).first()
                if not reservation:
                    raise ReservationNotFound(reservation_id)
                for field, value in data.model_dump().items():
                    setattr(reservation, field, value)
                db.commit()
                db.refresh(reservation)
                logger.info(f"Reservation {reservation_id} updated")
                return ReservationResponse.model_validate(reservation)
        except SQLAlchemyError as e:
            logger.error(f"Updating reservation {reservation_id} failed: {e}")
            raise StoreError("update failed") from e

    def delete(self, reservation_id: str) -> None:
        try:
            with self.session_factory() as db:
                reservation = db.query(Reservation).filter(Reservation.id == reservation_id).first()
                if not reservation:
                    raise ReservationNotFound(reservation_id)
                db.delete(reservation)
                db.commit()
                logger.info(f"Reservation {reservation_id} deleted")
        except SQLAlchemyError as e:
            logger.error(f"Deleting reservation {reservation_id} failed: {e}")
            raise StoreError("delete failed") from e

    # ============ SERVICE OPTIONS ============

    def _seed_service_options(self, db: Session) -> list[str]:
        # One transaction for the whole default set
        db.add_all([
            ServiceType(name=name, order=index)
            for index, name in enumerate(DEFAULT_SERVICE_OPTIONS)
        ])
        db.commit()
        logger.info(f"Seeded {len(DEFAULT_SERVICE_OPTIONS)} service types")
        return list(DEFAULT_SERVICE_OPTIONS)

    def _stored_service_options(self, db: Session) -> list[str]:
        rows = db.query(ServiceType).order_by(ServiceType.order).all()
        return [row.name for row in rows]

    def list_service_options(self) -> list[str]:
        """
        Service types ordered by their sort key. An empty table is seeded with
        the defaults, which are returned as stored. Otherwise the read-time
        normalization (retired names dropped, required names appended) applies.
        """
        try:
            with self.session_factory() as db:
                stored = self._stored_service_options(db)
                if not stored:
                    try:
                        return self._seed_service_options(db)
                    except IntegrityError:
                        # someone else seeded first
                        db.rollback()
                        stored = self._stored_service_options(db)
                return normalize_service_options(stored)
        except SQLAlchemyError as e:
            logger.error(f"Loading service types failed, using defaults: {e}")
            return list(DEFAULT_SERVICE_OPTIONS)


def get_store() -> ReservationStore:
    return ReservationStore()
