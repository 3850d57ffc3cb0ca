

class SeatReservationError(Exception):
    """
    Base exception for all domain-level errors
    inside the seat reservation engine.
    """


class InvalidStateTransitionError(SeatReservationError):
    """
    Raised when an illegal booking state transition is attempted.
    """

    def __init__(self, from_state: str, to_state: str):
        self.from_state = from_state
        self.to_state = to_state

        message = (
            f"Illegal state transition attempted: "
            f"{from_state} -> {to_state}"
        )
        super().__init__(message)


class BookingNotFoundError(SeatReservationError):
    """Raised when a booking id matches no record."""


class SeatNotFoundError(SeatReservationError):
    """Raised when a scanned seat id matches no record."""


class VenueNotFoundError(SeatReservationError):
    """Raised when a venue id matches no record."""


class CategoryNotFoundError(SeatReservationError):
    """Raised when a venue does not define the requested category."""


class CheckInError(SeatReservationError):
    """Raised when a seat cannot be checked in or out in its current state."""


class StoreError(SeatReservationError):
    """
    Raised when the backing store rejects a read or write.
    The message is the store's own error text.
    """


class BookingNotPendingError(SeatReservationError):
    """Raised when a payment proof arrives for a booking that is no longer pending."""
