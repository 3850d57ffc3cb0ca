from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select

from src.domain.state_machine import BookingStatus, SeatStatus
from src.infrastructure.db.models import Base, Booking, Row, Seat, Venue, Zone
from src.infrastructure.db.session import engine, get_db_session

VENUE_NAME = "Grand Theatre"

CATEGORIES = [
    {"name": "VIP", "color": "#FFD700", "price": 1500, "isVisible": True},
    {"name": "Premium", "color": "#C0C0C0", "price": 900, "isVisible": True},
    {"name": "Regular", "color": "#4A90D9", "price": 450, "isVisible": True},
]

# zone -> (row numbers, category, seats per row)
LAYOUT = {
    "Orchestra": (["A", "B"], "VIP", 8),
    "Mezzanine": (["C", "D", "E"], "Premium", 10),
    "Balcony": (["F", "G", "H"], "Regular", 12),
}


def _ago(days: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=days)


def seed_venue(db) -> Venue:
    venue = db.execute(select(Venue).where(Venue.name == VENUE_NAME)).scalar_one_or_none()
    if venue:
        venue.categories = [dict(category) for category in CATEGORIES]
        return venue

    venue = Venue(name=VENUE_NAME, categories=[dict(category) for category in CATEGORIES])
    db.add(venue)
    db.flush()

    for zone_name, (row_numbers, category, seats_per_row) in LAYOUT.items():
        zone = Zone(name=zone_name, venue_id=venue.id)
        db.add(zone)
        db.flush()
        for row_number in row_numbers:
            row = Row(row_number=row_number, zone_id=zone.id)
            db.add(row)
            db.flush()
            for index in range(1, seats_per_row + 1):
                db.add(
                    Seat(
                        seat_number=f"{row_number}{index}",
                        category=category,
                        status=SeatStatus.AVAILABLE,
                        row_id=row.id,
                    )
                )
    db.flush()
    return venue


def seed_bookings(db) -> None:
    if db.execute(select(Booking).limit(1)).scalar_one_or_none():
        return

    samples = [
        ("Layla Hassan", "layla@example.com", "+201001234567", "A1", BookingStatus.APPROVED, 40),
        ("Omar Nabil", "omar@example.com", "+201001112233", "C3", BookingStatus.APPROVED, 12),
        ("Mona Adel", "mona@example.com", "+201009998877", "F7", BookingStatus.PENDING, 1),
    ]
    for name, email, phone, seat_number, booking_status, days_ago in samples:
        seat = db.execute(
            select(Seat).where(Seat.seat_number == seat_number)
        ).scalar_one()
        price = next(c["price"] for c in CATEGORIES if c["name"] == seat.category)
        booking = Booking(
            name=name,
            email=email,
            phone=phone,
            amount=Decimal(price),
            status=booking_status,
            created_at=_ago(days_ago),
        )
        db.add(booking)
        db.flush()
        seat.booking_id = booking.id
        seat.name_on_ticket = name
        seat.status = (
            SeatStatus.BOOKED if booking_status == BookingStatus.APPROVED else SeatStatus.RESERVED
        )


def main() -> None:
    Base.metadata.create_all(bind=engine)
    with get_db_session() as db:
        venue = seed_venue(db)
        seed_bookings(db)
        venue_id = venue.id
    print(f"Seed complete: venue {venue_id} with seats and sample bookings.")
    print(f"Set DEFAULT_VENUE_ID={venue_id} to serve its categories on /categories.")


if __name__ == "__main__":
    main()
