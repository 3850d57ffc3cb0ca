from src.api.schemas.schemas import (
    BookingDetailsResponse,
    BookingRecordResponse,
    BookingSeatResponse,
    RecentBookingResponse,
    RowResponse,
    ScannedSeatResponse,
    SeatMapEntryResponse,
    TicketHolderResponse,
    ZoneResponse,
)
from src.infrastructure.db.models import Booking, Row, Seat


def row_response(row: Row | None) -> RowResponse | None:
    if row is None:
        return None
    return RowResponse(
        row_number=row.row_number,
        zones=ZoneResponse(name=row.zone.name) if row.zone else None,
    )


def booking_seat_response(seat: Seat) -> BookingSeatResponse:
    return BookingSeatResponse(
        id=seat.id,
        seat_number=seat.seat_number,
        category=seat.category,
        status=seat.status.value,
        name_on_ticket=seat.name_on_ticket,
        rows=row_response(seat.row),
    )


def booking_record_response(booking: Booking) -> BookingRecordResponse:
    return BookingRecordResponse(
        id=booking.id,
        name=booking.name,
        email=booking.email,
        phone=booking.phone,
        amount=float(booking.amount),
        image=booking.image,
        status=booking.status.value,
        created_at=booking.created_at,
        seats=[booking_seat_response(seat) for seat in booking.seats],
    )


def booking_details_response(booking: Booking) -> BookingDetailsResponse:
    record = booking_record_response(booking)
    categories: list[dict] = []
    # All seats of a booking sit in one venue; the first one names it.
    if booking.seats and booking.seats[0].row and booking.seats[0].row.zone:
        venue = booking.seats[0].row.zone.venue
        categories = list(venue.categories or []) if venue else []
    return BookingDetailsResponse(**record.model_dump(), categories=categories)


def recent_booking_response(booking: Booking) -> RecentBookingResponse:
    return RecentBookingResponse(
        id=booking.id,
        name=booking.name,
        email=booking.email,
        amount=float(booking.amount),
        status=booking.status.value,
        created_at=booking.created_at,
    )


def seat_map_entry_response(seat: Seat) -> SeatMapEntryResponse:
    return SeatMapEntryResponse(
        id=seat.id,
        seat_number=seat.seat_number,
        category=seat.category,
        status=seat.status.value,
        rows=row_response(seat.row),
    )


def scanned_seat_response(seat: Seat) -> ScannedSeatResponse:
    holder = None
    if seat.booking is not None:
        holder = TicketHolderResponse(
            name=seat.booking.name,
            email=seat.booking.email,
            phone=seat.booking.phone,
        )
    return ScannedSeatResponse(
        id=seat.id,
        seat_number=seat.seat_number,
        name_on_ticket=seat.name_on_ticket,
        check_in=seat.check_in,
        last_check_in=seat.last_check_in,
        booking_id=seat.booking_id,
        row_id=seat.row_id,
        rows=row_response(seat.row),
        bookings=holder,
    )
