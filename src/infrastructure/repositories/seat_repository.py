# src/infrastructure/repositories/seat_repository.py

from typing import Iterable

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select, update

from src.infrastructure.db.models import Seat, Row, Zone
from src.domain.state_machine import SeatStatus


class SeatRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, seat_id: str) -> Seat | None:
        stmt = (
            select(Seat)
            .where(Seat.id == seat_id)
            .options(
                selectinload(Seat.row).selectinload(Row.zone),
                selectinload(Seat.booking),
            )
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_all(self) -> list[Seat]:
        stmt = (
            select(Seat)
            .options(selectinload(Seat.row).selectinload(Row.zone))
            .order_by(Seat.seat_number)
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_for_venue(
        self,
        venue_id: str,
        categories: Iterable[str] | None = None,
    ) -> list[Seat]:
        """
        Seats of one venue, optionally restricted to the given categories.
        """
        stmt = (
            select(Seat)
            .join(Seat.row)
            .join(Row.zone)
            .where(Zone.venue_id == venue_id)
            .options(selectinload(Seat.row).selectinload(Row.zone))
            .order_by(Seat.seat_number)
        )
        if categories is not None:
            stmt = stmt.where(Seat.category.in_(list(categories)))
        return list(self.db.execute(stmt).scalars().all())

    def list_assigned(self) -> list[Seat]:
        stmt = (
            select(Seat)
            .where(Seat.booking_id.is_not(None))
            .options(
                selectinload(Seat.row).selectinload(Row.zone),
                selectinload(Seat.booking),
            )
            .order_by(Seat.seat_number)
        )
        return list(self.db.execute(stmt).scalars().all())

    def count_by_status(self) -> dict[SeatStatus, int]:
        counts = {seat_status: 0 for seat_status in SeatStatus}
        for seat_status in self.db.execute(select(Seat.status)).scalars():
            counts[seat_status] += 1
        return counts

    def release_for_booking(self, booking_id: str) -> int:
        """
        Detach every seat from the booking.
        booking_id and status are cleared in the same statement.
        """
        result = self.db.execute(
            update(Seat)
            .where(Seat.booking_id == booking_id)
            .values(booking_id=None, status=SeatStatus.AVAILABLE)
        )
        return result.rowcount

    def mark_booked_for_booking(self, booking_id: str) -> int:
        result = self.db.execute(
            update(Seat)
            .where(Seat.booking_id == booking_id)
            .values(status=SeatStatus.BOOKED)
        )
        return result.rowcount
