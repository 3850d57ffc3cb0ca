import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.domain import aggregation
from src.domain.exceptions import StoreError
from src.domain.state_machine import BookingStatus, SeatStatus
from src.infrastructure.db.models import Booking
from src.infrastructure.repositories.booking_repository import BookingRepository
from src.infrastructure.repositories.seat_repository import SeatRepository

logger = logging.getLogger(__name__)

RECENT_BOOKINGS_LIMIT = 5


class DashboardService:
    """Read-only admin statistics, recomputed from full scans on every call."""

    def __init__(self, db: Session):
        self.db = db
        self.booking_repository = BookingRepository(db)
        self.seat_repository = SeatRepository(db)

    def _status_counts(self) -> dict[BookingStatus, int]:
        counts = {booking_status: 0 for booking_status in BookingStatus}
        stmt = select(Booking.status, func.count()).group_by(Booking.status)
        for booking_status, count in self.db.execute(stmt).all():
            counts[booking_status] = count
        return counts

    def _pending_with_proof(self) -> int:
        stmt = (
            select(func.count())
            .select_from(Booking)
            .where(Booking.status == BookingStatus.PENDING)
            .where(Booking.image.is_not(None))
        )
        return self.db.execute(stmt).scalar_one()

    def get_stats(self) -> dict:
        try:
            status_counts = self._status_counts()
            pending_count = self._pending_with_proof()
            approved = self.booking_repository.list_by_status(
                [BookingStatus.APPROVED],
                oldest_first=True,
            )
            active = self.booking_repository.list_by_status(
                [BookingStatus.PENDING, BookingStatus.APPROVED],
                with_seats=True,
                oldest_first=True,
            )
            recent = self.booking_repository.list_recent(RECENT_BOOKINGS_LIMIT)
            seat_counts = self.seat_repository.count_by_status()
        except SQLAlchemyError as exc:
            logger.error("Error fetching dashboard stats: %s", exc)
            raise StoreError(str(exc)) from exc

        approved_count = status_counts[BookingStatus.APPROVED]
        rejected_count = status_counts[BookingStatus.REJECTED]
        revenue = aggregation.total_revenue(approved)
        total_seats = sum(seat_counts.values())

        return {
            "pending_count": pending_count,
            "approved_count": approved_count,
            "rejected_count": rejected_count,
            "cancelled_count": status_counts[BookingStatus.CANCELLED],
            "total_bookings": sum(status_counts.values()),
            "total_revenue": float(revenue),
            "average_revenue": float(aggregation.average_revenue(revenue, approved_count)),
            "approval_rate": aggregation.approval_rate(
                pending_count, approved_count, rejected_count
            ),
            "seats": {
                "total": total_seats,
                "available": seat_counts[SeatStatus.AVAILABLE],
                "booked": seat_counts[SeatStatus.BOOKED],
                "reserved": seat_counts[SeatStatus.RESERVED],
                "available_percent": aggregation.percentage(
                    seat_counts[SeatStatus.AVAILABLE], total_seats
                ),
                "booked_percent": aggregation.percentage(
                    seat_counts[SeatStatus.BOOKED], total_seats
                ),
                "reserved_percent": aggregation.percentage(
                    seat_counts[SeatStatus.RESERVED], total_seats
                ),
            },
            "recent_bookings": recent,
            "revenue_by_month": aggregation.revenue_by_month(approved),
            "category_distribution": aggregation.category_distribution(active),
        }
