import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from src.api.dependencies import get_db
from src.api.schemas.converters import booking_details_response, booking_record_response
from src.api.schemas.schemas import (
    BookingDetailsResponse,
    BookingRecordResponse,
    BookingsByIdsResponse,
    CancelOrderRequest,
    CancelOrderResponse,
    OrderIdsRequest,
    PaymentProofRequest,
    ValidateOrderIdsResponse,
)
from src.application.booking_service import BookingService
from src.domain.exceptions import BookingNotFoundError, BookingNotPendingError, StoreError


router = APIRouter(tags=["orders"])
logger = logging.getLogger(__name__)


def _failure(status_code: int, model) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=model.model_dump(mode="json"))


@router.post("/cancel-order", response_model=CancelOrderResponse)
def cancel_order(
    request: CancelOrderRequest,
    db: Session = Depends(get_db),
):
    if not request.bookingId:
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            CancelOrderResponse(success=False, error="Booking ID is required"),
        )

    try:
        BookingService(db).cancel_booking(request.bookingId)
    except StoreError as exc:
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            CancelOrderResponse(success=False, error=str(exc)),
        )

    return CancelOrderResponse(
        success=True,
        message="Booking cancelled successfully",
        error=None,
    )


@router.post("/get-bookings-by-ids", response_model=BookingsByIdsResponse)
def get_bookings_by_ids(
    request: OrderIdsRequest,
    db: Session = Depends(get_db),
):
    order_ids = request.orderIds
    if not isinstance(order_ids, list) or not order_ids:
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            BookingsByIdsResponse(success=False, error="Order IDs are required"),
        )

    try:
        bookings = BookingService(db).get_bookings_by_ids(
            [str(order_id) for order_id in order_ids]
        )
    except StoreError as exc:
        logger.error("Error fetching bookings: %s", exc)
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            BookingsByIdsResponse(success=False, error=str(exc)),
        )

    return BookingsByIdsResponse(
        success=True,
        bookings=[booking_record_response(booking) for booking in bookings],
        error=None,
    )


@router.post("/validate-order-ids", response_model=ValidateOrderIdsResponse)
def validate_order_ids(
    request: OrderIdsRequest,
    db: Session = Depends(get_db),
):
    if not isinstance(request.orderIds, list):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid order IDs"},
        )

    try:
        valid_ids, invalid_ids, bookings = BookingService(db).validate_order_ids(
            request.orderIds
        )
    except StoreError as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": f"Failed to validate order IDs: {exc}"},
        )

    logger.info("Order ids in store: %s; pruned: %s", valid_ids, invalid_ids)
    return ValidateOrderIdsResponse(
        validIds=valid_ids,
        invalidIds=invalid_ids,
        allBookings=[booking_record_response(booking) for booking in bookings],
    )


@router.get("/bookings/{booking_id}", response_model=BookingDetailsResponse)
def get_booking(booking_id: str, db: Session = Depends(get_db)):
    try:
        booking = BookingService(db).get_booking_details(booking_id)
    except BookingNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    return booking_details_response(booking)


@router.post("/bookings/{booking_id}/payment-proof", response_model=BookingRecordResponse)
def upload_payment_proof(
    booking_id: str,
    request: PaymentProofRequest,
    db: Session = Depends(get_db),
):
    service = BookingService(db)
    try:
        service.attach_payment_proof(booking_id, request.image)
        booking = service.get_booking_details(booking_id)
    except BookingNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except BookingNotPendingError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    return booking_record_response(booking)
