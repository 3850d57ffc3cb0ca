from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_db
from src.api.schemas.converters import seat_map_entry_response
from src.api.schemas.schemas import SeatMapEntryResponse
from src.application.category_service import CategoryService
from src.domain.exceptions import StoreError, VenueNotFoundError
from src.infrastructure import config


router = APIRouter(tags=["venues"])


def _venue_not_found(exc: VenueNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=str(exc),
    )


def _store_failure(exc: StoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc),
    )


@router.get("/categories", response_model=list[dict])
def get_default_venue_categories(db: Session = Depends(get_db)):
    venue_id = config.default_venue_id()
    if not venue_id:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="DEFAULT_VENUE_ID is not configured.",
        )
    try:
        return CategoryService(db).get_visible_categories(venue_id)
    except VenueNotFoundError as exc:
        raise _venue_not_found(exc) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc


@router.get("/venues/{venue_id}/categories", response_model=list[dict])
def get_venue_categories(venue_id: str, db: Session = Depends(get_db)):
    try:
        return CategoryService(db).get_visible_categories(venue_id)
    except VenueNotFoundError as exc:
        raise _venue_not_found(exc) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc


@router.get("/venues/{venue_id}/seats", response_model=list[SeatMapEntryResponse])
def get_seat_map(venue_id: str, db: Session = Depends(get_db)):
    try:
        seats = CategoryService(db).get_visible_seat_map(venue_id)
    except VenueNotFoundError as exc:
        raise _venue_not_found(exc) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc
    return [seat_map_entry_response(seat) for seat in seats]
