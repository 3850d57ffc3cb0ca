# src/infrastructure/db/models.py

from sqlalchemy import (
    JSON,
    Boolean,
    String,
    Numeric,
    DateTime,
    Enum,
    ForeignKey,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from src.infrastructure.db.session import Base
from src.domain.state_machine import BookingStatus, SeatStatus


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class Venue(Base):
    """
    A venue owns its category definitions as an ordered JSON list of
    {name, color, price, isVisible} objects.
    """

    __tablename__ = "venues"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    categories: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    zones: Mapped[list["Zone"]] = relationship(back_populates="venue")


class Zone(Base):
    __tablename__ = "zones"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    venue_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("venues.id"),
        nullable=False,
    )

    venue: Mapped[Venue] = relationship(back_populates="zones")
    rows: Mapped[list["Row"]] = relationship(back_populates="zone")


class Row(Base):
    __tablename__ = "rows"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    row_number: Mapped[str] = mapped_column(String(16), nullable=False)
    zone_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("zones.id"),
        nullable=False,
    )

    zone: Mapped[Zone] = relationship(back_populates="rows")
    seats: Mapped[list["Seat"]] = relationship(back_populates="row")


class Booking(Base):
    """
    A customer's reservation of one or more seats.
    Created elsewhere in the pending state; handlers only move its status.
    """

    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(
            BookingStatus,
            name="booking_status",
            values_callable=_enum_values,
        ),
        nullable=False,
        default=BookingStatus.PENDING,
    )
    kashier_transaction_id: Mapped[str | None] = mapped_column(
        String(128),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    seats: Mapped[list["Seat"]] = relationship(back_populates="booking")


class Seat(Base):
    __tablename__ = "seats"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    seat_number: Mapped[str] = mapped_column(String(16), nullable=False)
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[SeatStatus] = mapped_column(
        Enum(
            SeatStatus,
            name="seat_status",
            values_callable=_enum_values,
        ),
        nullable=False,
        default=SeatStatus.AVAILABLE,
    )
    booking_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("bookings.id"),
        nullable=True,
    )
    name_on_ticket: Mapped[str | None] = mapped_column(String(128), nullable=True)
    check_in: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    last_check_in: Mapped[datetime | None] = mapped_column(
        "last Check-in",
        DateTime(timezone=True),
        nullable=True,
    )
    row_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rows.id"),
        nullable=False,
    )

    booking: Mapped[Booking | None] = relationship(back_populates="seats")
    row: Mapped[Row] = relationship(back_populates="seats")


class CategorySetting(Base):
    __tablename__ = "category_settings"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    category_id: Mapped[str] = mapped_column(String(64), nullable=False)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint(
            "category_id",
            name="uq_category_settings_category_id",
        ),
    )
