from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_db
from src.api.schemas.converters import (
    booking_record_response,
    recent_booking_response,
    seat_map_entry_response,
)
from src.api.schemas.schemas import (
    BookingRecordResponse,
    BookingResponse,
    CategorySettingsRequest,
    CategoryVisibilityRequest,
    DashboardResponse,
    SeatMapEntryResponse,
    SuccessResponse,
)
from src.application.booking_service import BookingService
from src.application.category_service import CategoryService
from src.application.dashboard_service import DashboardService
from src.domain.exceptions import (
    BookingNotFoundError,
    CategoryNotFoundError,
    InvalidStateTransitionError,
    StoreError,
    VenueNotFoundError,
)
from src.domain.state_machine import BookingStatus
from src.infrastructure.repositories.seat_repository import SeatRepository


router = APIRouter(prefix="/admin", tags=["admin"])


def _store_failure(exc: StoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc),
    )


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(db: Session = Depends(get_db)):
    try:
        stats = DashboardService(db).get_stats()
    except StoreError as exc:
        raise _store_failure(exc) from exc

    stats["recent_bookings"] = [
        recent_booking_response(booking) for booking in stats["recent_bookings"]
    ]
    return DashboardResponse(**stats)


@router.get("/bookings", response_model=list[BookingRecordResponse])
def list_bookings(
    status_filter: BookingStatus | None = None,
    db: Session = Depends(get_db),
):
    try:
        bookings = BookingService(db).list_bookings(status_filter)
    except StoreError as exc:
        raise _store_failure(exc) from exc
    return [booking_record_response(booking) for booking in bookings]


def _review(booking_id: str, approve: bool, db: Session) -> BookingResponse:
    try:
        booking = BookingService(db).review_booking(booking_id, approve=approve)
    except BookingNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except InvalidStateTransitionError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc

    return BookingResponse(
        booking_id=booking.id,
        status=booking.status.value,
    )


@router.post("/bookings/{booking_id}/approve", response_model=BookingResponse)
def approve_booking(booking_id: str, db: Session = Depends(get_db)):
    return _review(booking_id, approve=True, db=db)


@router.post("/bookings/{booking_id}/reject", response_model=BookingResponse)
def reject_booking(booking_id: str, db: Session = Depends(get_db)):
    return _review(booking_id, approve=False, db=db)


@router.get("/seats", response_model=list[SeatMapEntryResponse])
def list_seats(db: Session = Depends(get_db)):
    return [seat_map_entry_response(seat) for seat in SeatRepository(db).list_all()]


@router.get("/venues/{venue_id}/categories", response_model=list[dict])
def list_venue_categories(venue_id: str, db: Session = Depends(get_db)):
    try:
        return CategoryService(db).get_categories(venue_id)
    except VenueNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc


@router.patch("/venues/{venue_id}/categories/{category_name}", response_model=list[dict])
def set_category_visibility(
    venue_id: str,
    category_name: str,
    request: CategoryVisibilityRequest,
    db: Session = Depends(get_db),
):
    try:
        return CategoryService(db).set_category_visibility(
            venue_id,
            category_name,
            request.isVisible,
        )
    except (VenueNotFoundError, CategoryNotFoundError) as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc


@router.get("/category-settings", response_model=dict[str, bool])
def get_category_settings(db: Session = Depends(get_db)):
    try:
        return CategoryService(db).get_category_settings()
    except StoreError as exc:
        raise _store_failure(exc) from exc


@router.put("/category-settings", response_model=SuccessResponse)
def save_category_settings(
    request: CategorySettingsRequest,
    db: Session = Depends(get_db),
):
    try:
        CategoryService(db).save_category_settings(request.settings)
    except StoreError as exc:
        raise _store_failure(exc) from exc
    return SuccessResponse(success=True)
