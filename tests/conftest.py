"""Shared pytest fixtures for cleanic tests."""

import itertools
import os

# Keep the module-level engine off the developer's database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cleanic.client.cart_store import CartStore
from cleanic.client.storage import MemoryStorage
from cleanic.database import Base, get_db
from cleanic.domain.bookings.router import get_booking_service
from cleanic.domain.bookings.service import BookingService
from cleanic.main import app


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session in a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def override_db(session_factory):
    """Point the app's get_db dependency at the test database."""

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(override_db):
    """FastAPI test client backed by the in-memory database."""
    return TestClient(app)


@pytest.fixture
def enforce_capacity(session_factory, override_db):
    """Turn on daily capacity enforcement for POST /api/bookings."""

    def _service():
        session = session_factory()
        try:
            yield BookingService(session, enforce_capacity=True)
        finally:
            session.close()

    app.dependency_overrides[get_booking_service] = _service
    yield


@pytest.fixture
def clock():
    """Millisecond clock that advances by one on every call."""
    counter = itertools.count(1_760_000_000_000)
    return lambda: next(counter)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def cart(storage, clock):
    return CartStore(storage, clock=clock)


@pytest.fixture
def interior_premium_sedan():
    return {
        "packageId": "2",
        "packageName": "Interior Premium",
        "basePrice": 189,
        "vehicleType": "sedan",
        "finalPrice": 189,
        "quantity": 1,
    }


@pytest.fixture
def booking_payload():
    """A valid POST /api/bookings body for one Interior Premium on a sedan."""
    return {
        "customer": {
            "firstName": "Jane",
            "lastName": "Doe",
            "fullName": "Jane Doe",
            "email": "jane@example.com",
            "phone": "514-555-0199",
            "streetAddress": "123 Main Street",
            "city": "Montreal",
            "postalCode": "h1a 1a1",
        },
        "bookingDate": "2026-10-20T14:00:00",
        "bookingTime": "7:30 AM",
        "paymentMethod": "e_transfer",
        "serviceTotal": 189,
        "packages": [
            {
                "packageId": "2",
                "packageName": "Interior Premium",
                "vehicleType": "sedan",
                "basePrice": 189,
                "finalPrice": 189,
                "quantity": 1,
            }
        ],
        "message": None,
    }
