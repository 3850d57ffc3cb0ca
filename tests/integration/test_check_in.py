from sqlalchemy.exc import OperationalError

from src.domain.state_machine import BookingStatus
from src.infrastructure.db.models import Seat
from src.infrastructure.repositories.seat_repository import SeatRepository


def _approved_seat(make_booking) -> Seat:
    booking = make_booking(BookingStatus.APPROVED, seats=1, name="Ticket Holder")
    return booking.seats[0]


def test_check_in_marks_seat(client, db_session, make_booking):
    seat = _approved_seat(make_booking)

    response = client.post("/check-in", json={"qrCode": seat.id})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["seat"]["check_in"] is True
    assert body["seat"]["bookings"]["name"] == "Ticket Holder"

    db_session.expire_all()
    stored = db_session.get(Seat, seat.id)
    assert stored.check_in is True
    assert stored.last_check_in is not None


def test_qr_code_whitespace_is_ignored(client, make_booking):
    seat = _approved_seat(make_booking)

    response = client.post("/check-in", json={"qrCode": f"  {seat.id}\n"})

    assert response.status_code == 200


def test_second_scan_conflicts(client, make_booking):
    seat = _approved_seat(make_booking)
    client.post("/check-in", json={"qrCode": seat.id})

    response = client.post("/check-in", json={"qrCode": seat.id})

    assert response.status_code == 409
    assert response.json()["detail"] == "Seat is already checked in"


def test_unassigned_seat_cannot_check_in(client, make_seat):
    seat = make_seat()

    response = client.post("/check-in", json={"qrCode": seat.id})

    assert response.status_code == 409


def test_unapproved_booking_cannot_check_in(client, make_booking):
    booking = make_booking(BookingStatus.PENDING, seats=1)

    response = client.post("/check-in", json={"qrCode": booking.seats[0].id})

    assert response.status_code == 409
    assert response.json()["detail"] == "Booking is pending, not approved"


def test_unknown_seat_is_not_found(client):
    response = client.post("/check-in", json={"qrCode": "no-such-seat"})

    assert response.status_code == 404


def test_check_out_after_check_in(client, db_session, make_booking):
    seat = _approved_seat(make_booking)
    client.post("/check-in", json={"qrCode": seat.id})

    response = client.post("/check-out", json={"qrCode": seat.id})

    assert response.status_code == 200
    assert response.json()["seat"]["check_in"] is False
    db_session.expire_all()
    stored = db_session.get(Seat, seat.id)
    assert stored.check_in is False
    assert stored.last_check_in is not None


def test_check_out_without_check_in_conflicts(client, make_booking):
    seat = _approved_seat(make_booking)

    assert client.post("/check-out", json={"qrCode": seat.id}).status_code == 409


def test_seat_info_and_attendees(client, make_booking, make_seat):
    seat = _approved_seat(make_booking)
    make_seat()

    info = client.get(f"/check-in/seats/{seat.id}")
    assert info.status_code == 200
    assert info.json()["rows"] == {"row_number": "A", "zones": {"name": "Orchestra"}}

    attendees = client.get("/check-in/attendees").json()
    assert [entry["id"] for entry in attendees] == [seat.id]


def test_scan_store_failure_is_reported(client, monkeypatch):
    def fail(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection reset"))

    monkeypatch.setattr(SeatRepository, "get_by_id", fail)

    response = client.post("/check-in", json={"qrCode": "any-seat"})

    assert response.status_code == 500
    assert "connection reset" in response.json()["detail"]
