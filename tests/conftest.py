import os

# Point the app's default engine at SQLite before any src module is imported.
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.api.dependencies import get_db
from src.domain.state_machine import BookingStatus, SeatStatus
from src.infrastructure.db.models import Base, Booking, Row, Seat, Venue, Zone
from src.main import app


DEFAULT_CATEGORIES = [
    {"name": "vip", "color": "#FFD700", "price": 1500, "isVisible": True},
    {"name": "ga", "color": "#4A90D9", "price": 450, "isVisible": True},
]


@pytest.fixture
def engine():
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
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def venue_layout(db_session):
    """One venue, one zone, one row; returns (venue, row)."""
    venue = Venue(name="Test Hall", categories=[dict(c) for c in DEFAULT_CATEGORIES])
    db_session.add(venue)
    db_session.flush()
    zone = Zone(name="Orchestra", venue_id=venue.id)
    db_session.add(zone)
    db_session.flush()
    row = Row(row_number="A", zone_id=zone.id)
    db_session.add(row)
    db_session.commit()
    return venue, row


@pytest.fixture
def make_seat(db_session, venue_layout):
    _, row = venue_layout
    counter = {"n": 0}

    def _make(category: str = "vip", booking: Booking | None = None, **fields) -> Seat:
        counter["n"] += 1
        if booking is not None:
            fields.setdefault("status", SeatStatus.RESERVED)
        seat = Seat(
            seat_number=fields.pop("seat_number", f"A{counter['n']:02d}"),
            category=category,
            status=fields.pop("status", SeatStatus.AVAILABLE),
            booking_id=booking.id if booking is not None else None,
            row_id=row.id,
            **fields,
        )
        db_session.add(seat)
        db_session.commit()
        return seat

    return _make


@pytest.fixture
def make_booking(db_session, make_seat):
    def _make(
        status: BookingStatus = BookingStatus.PENDING,
        seats: int = 0,
        category: str = "vip",
        amount: str = "100.00",
        created_at: datetime | None = None,
        image: str | None = None,
        **fields,
    ) -> Booking:
        booking = Booking(
            id=fields.pop("id", str(uuid4())),
            name=fields.pop("name", "Test Customer"),
            email=fields.pop("email", "customer@example.com"),
            phone=fields.pop("phone", "+200000000"),
            amount=Decimal(amount),
            status=status,
            image=image,
            created_at=created_at or datetime.now(timezone.utc),
            **fields,
        )
        db_session.add(booking)
        db_session.commit()

        seat_status = SeatStatus.BOOKED if status == BookingStatus.APPROVED else SeatStatus.RESERVED
        for _ in range(seats):
            make_seat(category=category, booking=booking, status=seat_status)
        return booking

    return _make
