from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from src.domain.state_machine import BookingStatus, SeatStatus
from src.infrastructure.db.models import Booking, Seat
from src.infrastructure.repositories.booking_repository import BookingRepository
from src.infrastructure.repositories.seat_repository import SeatRepository

MISSING_ID = "33333333-3333-4333-8333-333333333333"


def _seats_for(db_session, booking_id):
    return list(db_session.execute(select(Seat).where(Seat.booking_id == booking_id)).scalars())


def _store_failure(*args, **kwargs):
    raise OperationalError("UPDATE", {}, Exception("disk I/O error"))


# ---------------------
# CANCEL
# ---------------------

def test_cancel_releases_every_seat(client, db_session, make_booking):
    booking = make_booking(status=BookingStatus.PENDING, seats=3)
    seat_ids = [seat.id for seat in booking.seats]

    response = client.post("/cancel-order", json={"bookingId": booking.id})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Booking cancelled successfully",
        "error": None,
    }

    db_session.expire_all()
    assert db_session.get(Booking, booking.id).status == BookingStatus.CANCELLED
    for seat_id in seat_ids:
        seat = db_session.get(Seat, seat_id)
        assert seat.status == SeatStatus.AVAILABLE
        assert seat.booking_id is None


def test_cancel_requires_booking_id(client):
    response = client.post("/cancel-order", json={})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["error"] == "Booking ID is required"


def test_cancel_reverts_to_pending_when_seat_release_fails(
    client, db_session, make_booking, monkeypatch
):
    booking = make_booking(status=BookingStatus.APPROVED, seats=2)
    monkeypatch.setattr(SeatRepository, "release_for_booking", _store_failure)

    response = client.post("/cancel-order", json={"bookingId": booking.id})

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert "disk I/O error" in response.json()["error"]

    db_session.expire_all()
    # Compensation always lands on pending, whatever the prior status was.
    assert db_session.get(Booking, booking.id).status == BookingStatus.PENDING
    assert len(_seats_for(db_session, booking.id)) == 2


def test_cancel_reports_failure_when_booking_write_fails(
    client, db_session, make_booking, monkeypatch
):
    booking = make_booking(status=BookingStatus.PENDING, seats=1)
    monkeypatch.setattr(BookingRepository, "set_status", _store_failure)

    response = client.post("/cancel-order", json={"bookingId": booking.id})

    assert response.status_code == 500
    assert response.json()["success"] is False

    db_session.expire_all()
    assert db_session.get(Booking, booking.id).status == BookingStatus.PENDING
    assert _seats_for(db_session, booking.id)[0].status == SeatStatus.RESERVED


# ---------------------
# FETCH BY IDS
# ---------------------

def test_get_bookings_by_ids_returns_existing_newest_first(client, make_booking):
    now = datetime.now(timezone.utc)
    older = make_booking(created_at=now - timedelta(days=2), seats=1)
    newer = make_booking(created_at=now - timedelta(hours=1), seats=2)

    response = client.post(
        "/get-bookings-by-ids",
        json={"orderIds": [older.id, MISSING_ID, newer.id]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [item["id"] for item in body["bookings"]] == [newer.id, older.id]

    seat = body["bookings"][0]["seats"][0]
    assert seat["rows"] == {"row_number": "A", "zones": {"name": "Orchestra"}}
    assert seat["status"] == "reserved"


def test_get_bookings_by_ids_rejects_empty_or_non_list(client):
    for payload in [{"orderIds": []}, {"orderIds": "abc"}, {}]:
        response = client.post("/get-bookings-by-ids", json=payload)
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "bookings": None,
            "error": "Order IDs are required",
        }


# ---------------------
# VALIDATE
# ---------------------

def test_validate_splits_known_unknown_and_malformed(client, make_booking):
    booking = make_booking(seats=1)

    response = client.post(
        "/validate-order-ids",
        json={"orderIds": [booking.id, "not-a-uuid", MISSING_ID]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["validIds"] == [booking.id]
    assert body["invalidIds"] == ["not-a-uuid", MISSING_ID]
    assert [item["id"] for item in body["allBookings"]] == [booking.id]


def test_validate_skips_store_for_malformed_ids(client, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("store must not be queried")

    monkeypatch.setattr(BookingRepository, "list_by_ids", fail)

    response = client.post("/validate-order-ids", json={"orderIds": ["x", 12, ""]})

    assert response.status_code == 200
    assert response.json() == {"validIds": [], "invalidIds": ["x", 12, ""], "allBookings": []}


def test_validate_rejects_non_list(client):
    response = client.post("/validate-order-ids", json={"orderIds": "abc"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid order IDs"}


# ---------------------
# DETAILS / PAYMENT PROOF
# ---------------------

def test_booking_details_include_venue_categories(client, make_booking):
    booking = make_booking(seats=2, amount="300.00")

    response = client.get(f"/bookings/{booking.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["amount"] == 300.0
    assert len(body["seats"]) == 2
    assert [category["name"] for category in body["categories"]] == ["vip", "ga"]


def test_booking_details_not_found(client):
    assert client.get(f"/bookings/{MISSING_ID}").status_code == 404


def test_payment_proof_attaches_to_pending_booking(client, db_session, make_booking):
    booking = make_booking(seats=1)

    response = client.post(
        f"/bookings/{booking.id}/payment-proof",
        json={"image": "payment-proofs/abc.webp"},
    )

    assert response.status_code == 200
    assert response.json()["image"] == "payment-proofs/abc.webp"
    db_session.expire_all()
    assert db_session.get(Booking, booking.id).image == "payment-proofs/abc.webp"


def test_payment_proof_refused_once_booking_is_decided(client, make_booking):
    booking = make_booking(status=BookingStatus.CANCELLED)

    response = client.post(
        f"/bookings/{booking.id}/payment-proof",
        json={"image": "payment-proofs/abc.webp"},
    )

    assert response.status_code == 409


def test_payment_proof_store_failure_is_reported(client, make_booking, monkeypatch):
    booking = make_booking()
    monkeypatch.setattr(BookingRepository, "get_by_id", _store_failure)

    response = client.post(
        f"/bookings/{booking.id}/payment-proof",
        json={"image": "payment-proofs/abc.webp"},
    )

    assert response.status_code == 500
    assert "disk I/O error" in response.json()["detail"]
