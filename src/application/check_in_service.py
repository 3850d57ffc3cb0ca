import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.domain.exceptions import CheckInError, SeatNotFoundError, StoreError
from src.domain.state_machine import BookingStatus
from src.infrastructure.db.models import Seat
from src.infrastructure.repositories.seat_repository import SeatRepository

logger = logging.getLogger(__name__)


class CheckInService:
    """Door scanning. A ticket's QR code carries the seat id."""

    def __init__(self, db: Session):
        self.db = db
        self.seat_repository = SeatRepository(db)

    def _load_seat(self, seat_id: str) -> Seat:
        seat = self.seat_repository.get_by_id(seat_id.strip())
        if not seat:
            raise SeatNotFoundError("Invalid ticket: seat not found")
        return seat

    def seat_info(self, seat_id: str) -> Seat:
        try:
            return self._load_seat(seat_id)
        except SQLAlchemyError as exc:
            logger.error("Error loading seat %s: %s", seat_id, exc)
            raise StoreError(str(exc)) from exc

    def _ticketed_seat(self, seat_id: str) -> Seat:
        seat = self._load_seat(seat_id)
        if not seat.booking_id or not seat.booking:
            raise CheckInError("Seat is not assigned to a booking")
        if seat.booking.status != BookingStatus.APPROVED:
            raise CheckInError(
                f"Booking is {seat.booking.status.value}, not approved"
            )
        return seat

    def check_in(self, seat_id: str) -> Seat:
        try:
            seat = self._ticketed_seat(seat_id)
            if seat.check_in:
                raise CheckInError("Seat is already checked in")

            seat.check_in = True
            seat.last_check_in = datetime.now(timezone.utc)
            self.db.flush()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error checking in seat %s: %s", seat_id, exc)
            raise StoreError(str(exc)) from exc

        logger.info("Seat %s checked in", seat.id)
        return seat

    def check_out(self, seat_id: str) -> Seat:
        try:
            seat = self._ticketed_seat(seat_id)
            if not seat.check_in:
                raise CheckInError("Seat is not checked in")

            seat.check_in = False
            self.db.flush()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error checking out seat %s: %s", seat_id, exc)
            raise StoreError(str(exc)) from exc

        logger.info("Seat %s checked out", seat.id)
        return seat

    def attendees(self) -> list[Seat]:
        try:
            return self.seat_repository.list_assigned()
        except SQLAlchemyError as exc:
            logger.error("Error listing attendees: %s", exc)
            raise StoreError(str(exc)) from exc
