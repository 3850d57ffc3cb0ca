# src/infrastructure/repositories/booking_repository.py

from typing import Sequence

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select, update

from src.infrastructure.db.models import Booking, Seat, Row, Zone
from src.domain.state_machine import BookingStatus


def _with_seat_detail(stmt):
    # booking -> seats -> row -> zone, as the order views render it.
    return stmt.options(
        selectinload(Booking.seats)
        .selectinload(Seat.row)
        .selectinload(Row.zone)
        .selectinload(Zone.venue)
    )


class BookingRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(
        self,
        booking_id: str,
    ) -> Booking | None:

        stmt = select(Booking).where(Booking.id == booking_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_with_seats(self, booking_id: str) -> Booking | None:
        stmt = _with_seat_detail(select(Booking).where(Booking.id == booking_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def list_by_ids(
        self,
        booking_ids: Sequence[str],
        newest_first: bool = False,
    ) -> list[Booking]:

        stmt = _with_seat_detail(select(Booking).where(Booking.id.in_(booking_ids)))
        if newest_first:
            stmt = stmt.order_by(Booking.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def list_by_status(
        self,
        statuses: Sequence[BookingStatus] | None = None,
        with_seats: bool = False,
        oldest_first: bool = False,
    ) -> list[Booking]:

        stmt = select(Booking)
        if statuses:
            stmt = stmt.where(Booking.status.in_(statuses))
        if with_seats:
            stmt = _with_seat_detail(stmt)
        order = Booking.created_at.asc() if oldest_first else Booking.created_at.desc()
        return list(self.db.execute(stmt.order_by(order)).scalars().all())

    def list_recent(self, limit: int) -> list[Booking]:
        stmt = select(Booking).order_by(Booking.created_at.desc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def set_status(
        self,
        booking_id: str,
        new_status: BookingStatus,
    ) -> int:
        """
        Single UPDATE keyed by id. Returns the number of rows touched.
        """
        result = self.db.execute(
            update(Booking)
            .where(Booking.id == booking_id)
            .values(status=new_status)
        )
        return result.rowcount

    def mark_paid_by_gateway(
        self,
        booking_id: str,
        transaction_id: str | None,
        proof_image: str,
    ) -> int:

        result = self.db.execute(
            update(Booking)
            .where(Booking.id == booking_id)
            .values(
                status=BookingStatus.APPROVED,
                kashier_transaction_id=transaction_id,
                image=proof_image,
            )
        )
        return result.rowcount

    def update_status(
        self,
        booking: Booking,
        new_status: BookingStatus,
    ) -> None:

        booking.status = new_status
