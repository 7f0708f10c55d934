"""
Pytest fixtures for the salon scheduler.

The app reads its settings at import time, so the environment is prepared
before anything from salon is imported.
"""
import os

from passlib.context import CryptContext

SHARED_PASSWORD = "smile999"

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ACCESS_PASSWORD_HASH", CryptContext(schemes=["bcrypt"]).hash(SHARED_PASSWORD))
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LEDGER_SOURCE", "does-not-exist.csv")

import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salon.main import app
from salon.database import Base
from salon.models import Reservation
from salon.services.board_session import get_controller
from salon.services.ledger import CustomerRecord, get_ledger
from salon.services.reservation_store import ReservationStore, get_store
from salon.services.schedule_controller import ScheduleController
from salon.utils.clock import FixedClock, get_clock
from salon.utils.security import create_session_token


# ============ DATABASE SETUP ============

# In-memory SQLite shared by every connection of a test
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Tuesday morning
FROZEN_NOW = datetime(2025, 6, 10, 9, 0)


# ============ BASE FIXTURES ============

@pytest.fixture(scope="function")
def db():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db):
    return ReservationStore(TestingSessionLocal)


@pytest.fixture
def clock():
    return FixedClock(FROZEN_NOW)


@pytest.fixture
def ledger():
    return [
        CustomerRecord(name="김민지", phone="010-1111-1234"),
        CustomerRecord(name="김민지", phone="010-1111-1234"),
        CustomerRecord(name="박민지", phone="010-1111-1234"),
        CustomerRecord(name="이수진", phone="010 2222 1234"),
        CustomerRecord(name="최영희", phone="010-3333-9999"),
    ]


@pytest.fixture
def controller(store, ledger, clock):
    return ScheduleController(store, lambda: list(ledger), clock)


@pytest.fixture(scope="function")
def client(store, ledger, clock, controller):
    """
    TestClient with the store, clock, ledger and board controller replaced
    by test doubles.
    """
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_ledger] = lambda: list(ledger)
    app.dependency_overrides[get_controller] = lambda: controller

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def session_token():
    return create_session_token()


# ============ DATA FIXTURES ============

def add_reservation(db, **fields) -> Reservation:
    data = {
        "customer_name": "홍길동",
        "customer_phone": "010-5555-1234",
        "date": "2025-06-10",
        "time": "10:30",
        "service_type": "컷",
        "memo": "",
    }
    data.update(fields)
    reservation = Reservation(**data)
    db.add(reservation)
    db.commit()
    db.refresh(reservation)
    return reservation


@pytest.fixture
def todays_reservations(db):
    """One slot already over, two still ahead."""
    return {
        "early": add_reservation(db, customer_name="Kim Soo", customer_phone="010-1111-1234", time="08:30"),
        "now": add_reservation(db, customer_name="Lee Min", customer_phone="010-2222-5678", time="09:00"),
        "later": add_reservation(db, customer_name="Park Ji", customer_phone="", time="14:00", service_type="펌"),
    }


@pytest.fixture
def mixed_reservations(db, todays_reservations):
    """Today plus a past and a future day."""
    return {
        **todays_reservations,
        "yesterday": add_reservation(db, customer_name="Choi Na", date="2025-06-09", time="15:00"),
        "tomorrow": add_reservation(db, customer_name="Jung Ho", customer_phone="010-9999-0000", date="2025-06-11", time="10:10"),
    }


# ============ HELPERS ============

def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
