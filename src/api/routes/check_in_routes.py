from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_db
from src.api.schemas.converters import scanned_seat_response
from src.api.schemas.schemas import ScanRequest, ScanResponse, ScannedSeatResponse
from src.application.check_in_service import CheckInService
from src.domain.exceptions import CheckInError, SeatNotFoundError, StoreError


router = APIRouter(tags=["check-in"])


def _store_failure(exc: StoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc),
    )


def _scan(action, seat_id: str, message: str) -> ScanResponse:
    try:
        seat = action(seat_id)
    except SeatNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except CheckInError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc

    return ScanResponse(
        success=True,
        message=message,
        seat=scanned_seat_response(seat),
    )


@router.post("/check-in", response_model=ScanResponse)
def check_in(request: ScanRequest, db: Session = Depends(get_db)):
    return _scan(CheckInService(db).check_in, request.qrCode, "Checked in")


@router.post("/check-out", response_model=ScanResponse)
def check_out(request: ScanRequest, db: Session = Depends(get_db)):
    return _scan(CheckInService(db).check_out, request.qrCode, "Checked out")


@router.get("/check-in/seats/{seat_id}", response_model=ScannedSeatResponse)
def seat_info(seat_id: str, db: Session = Depends(get_db)):
    try:
        seat = CheckInService(db).seat_info(seat_id)
    except SeatNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc
    return scanned_seat_response(seat)


@router.get("/check-in/attendees", response_model=list[ScannedSeatResponse])
def list_attendees(db: Session = Depends(get_db)):
    try:
        seats = CheckInService(db).attendees()
    except StoreError as exc:
        raise _store_failure(exc) from exc
    return [scanned_seat_response(seat) for seat in seats]
