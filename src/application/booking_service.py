import logging
from typing import Any, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.domain.exceptions import BookingNotFoundError, BookingNotPendingError, StoreError
from src.domain.order_ids import partition_order_ids
from src.domain.state_machine import BookingStateMachine, BookingStatus
from src.infrastructure.db.models import Booking
from src.infrastructure.repositories.booking_repository import BookingRepository
from src.infrastructure.repositories.seat_repository import SeatRepository

logger = logging.getLogger(__name__)


class BookingService:
    """Application service coordinating booking workflow."""

    def __init__(self, db: Session):
        self.db = db
        self.booking_repository = BookingRepository(db)
        self.seat_repository = SeatRepository(db)

    def cancel_booking(self, booking_id: str) -> None:
        """
        Mark the booking cancelled, then free its seats, as two separate
        commits. If freeing the seats fails, one attempt is made to put the
        booking back to pending before the error is raised.
        """
        try:
            self.booking_repository.set_status(booking_id, BookingStatus.CANCELLED)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error cancelling booking %s: %s", booking_id, exc)
            raise StoreError(str(exc)) from exc

        try:
            released = self.seat_repository.release_for_booking(booking_id)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error releasing seats for booking %s: %s", booking_id, exc)
            self._revert_to_pending(booking_id)
            raise StoreError(str(exc)) from exc

        logger.info("Cancelled booking %s and released %s seats", booking_id, released)

    def _revert_to_pending(self, booking_id: str) -> None:
        try:
            self.booking_repository.set_status(booking_id, BookingStatus.PENDING)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(
                "Compensating write failed; booking %s stays cancelled with seats held",
                booking_id,
            )
        else:
            logger.warning("Booking %s reverted to pending after failed seat release", booking_id)

    def validate_order_ids(
        self,
        candidates: Sequence[Any],
    ) -> tuple[list[str], list[Any], list[Booking]]:
        """
        Returns (valid_ids, invalid_ids, bookings).

        invalid_ids holds malformed ids followed by well-formed ids with no
        record; only well-formed ids ever reach the store.
        """
        well_formed, malformed = partition_order_ids(candidates)
        logger.debug("Well-formed ids: %s; malformed ids: %s", well_formed, malformed)

        bookings: list[Booking] = []
        if well_formed:
            bookings = self._read(
                lambda: self.booking_repository.list_by_ids(well_formed)
            )

        existing_ids = [booking.id for booking in bookings]
        missing = [booking_id for booking_id in well_formed if booking_id not in existing_ids]

        return existing_ids, malformed + missing, bookings

    def get_bookings_by_ids(self, booking_ids: Sequence[str]) -> list[Booking]:
        return self._read(
            lambda: self.booking_repository.list_by_ids(booking_ids, newest_first=True)
        )

    def get_booking_details(self, booking_id: str) -> Booking:
        booking = self._read(lambda: self.booking_repository.get_with_seats(booking_id))
        if not booking:
            raise BookingNotFoundError("Booking not found")
        return booking

    def list_bookings(self, status: BookingStatus | None = None) -> list[Booking]:
        statuses = [status] if status else None
        return self._read(
            lambda: self.booking_repository.list_by_status(statuses, with_seats=True)
        )

    def attach_payment_proof(self, booking_id: str, image: str) -> Booking:
        try:
            booking = self.booking_repository.get_by_id(booking_id)
            if not booking:
                raise BookingNotFoundError("Booking not found")
            if booking.status != BookingStatus.PENDING:
                raise BookingNotPendingError(
                    f"Booking is {booking.status.value}; payment proof is only accepted while pending"
                )

            booking.image = image
            self.db.flush()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error attaching payment proof to booking %s: %s", booking_id, exc)
            raise StoreError(str(exc)) from exc
        return booking

    def review_booking(self, booking_id: str, approve: bool) -> Booking:
        """
        Admin decision on a pending booking. Approval books its seats,
        rejection hands them back to the map.
        """
        try:
            booking = self.booking_repository.get_by_id(booking_id)
            if not booking:
                raise BookingNotFoundError("Booking not found")

            if approve:
                self._transition(booking, BookingStatus.APPROVED)
                self.seat_repository.mark_booked_for_booking(booking.id)
            else:
                self._transition(booking, BookingStatus.REJECTED)
                self.seat_repository.release_for_booking(booking.id)

            self.db.flush()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error reviewing booking %s: %s", booking_id, exc)
            raise StoreError(str(exc)) from exc

        logger.info("Booking %s reviewed: %s", booking.id, booking.status.value)
        return booking

    def _transition(self, booking: Booking, to_status: BookingStatus) -> None:
        BookingStateMachine.validate_transition(booking.status, to_status)
        self.booking_repository.update_status(booking, to_status)

    def _read(self, query):
        try:
            return query()
        except SQLAlchemyError as exc:
            logger.error("Store read failed: %s", exc)
            raise StoreError(str(exc)) from exc
