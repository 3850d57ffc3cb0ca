import logging
from typing import Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.domain.exceptions import CategoryNotFoundError, StoreError, VenueNotFoundError
from src.infrastructure.db.models import Seat, Venue
from src.infrastructure.repositories.category_settings_repository import CategorySettingsRepository
from src.infrastructure.repositories.seat_repository import SeatRepository
from src.infrastructure.repositories.venue_repository import VenueRepository

logger = logging.getLogger(__name__)


def is_category_visible(category: Mapping) -> bool:
    # A category without the flag has never been hidden.
    return category.get("isVisible") is not False


class CategoryService:
    """
    Category visibility. The venue's embedded category list is the source of
    truth for the seat map; the category_settings table is a flat admin
    mapping kept alongside it.
    """

    def __init__(self, db: Session):
        self.db = db
        self.venue_repository = VenueRepository(db)
        self.settings_repository = CategorySettingsRepository(db)
        self.seat_repository = SeatRepository(db)

    def _get_venue(self, venue_id: str) -> Venue:
        try:
            venue = self.venue_repository.get_by_id(venue_id)
        except SQLAlchemyError as exc:
            logger.error("Error loading venue %s: %s", venue_id, exc)
            raise StoreError(str(exc)) from exc
        if not venue:
            raise VenueNotFoundError(f"Venue {venue_id} not found")
        return venue

    def get_categories(self, venue_id: str) -> list[dict]:
        return list(self._get_venue(venue_id).categories or [])

    def get_visible_categories(self, venue_id: str) -> list[dict]:
        return [
            category
            for category in self.get_categories(venue_id)
            if is_category_visible(category)
        ]

    def set_category_visibility(
        self,
        venue_id: str,
        category_name: str,
        is_visible: bool,
    ) -> list[dict]:
        venue = self._get_venue(venue_id)
        categories = [dict(category) for category in venue.categories or []]

        matched = False
        for category in categories:
            if category.get("name") == category_name:
                category["isVisible"] = is_visible
                matched = True
        if not matched:
            raise CategoryNotFoundError(
                f"Category {category_name} not defined for venue {venue_id}"
            )

        try:
            self.venue_repository.replace_categories(venue, categories)
            self.db.flush()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error updating categories of venue %s: %s", venue_id, exc)
            raise StoreError(str(exc)) from exc
        logger.info(
            "Category %s on venue %s set visible=%s",
            category_name,
            venue_id,
            is_visible,
        )
        return categories

    def get_visible_seat_map(self, venue_id: str) -> list[Seat]:
        names = [
            category.get("name")
            for category in self.get_visible_categories(venue_id)
        ]
        try:
            return self.seat_repository.list_for_venue(venue_id, categories=names)
        except SQLAlchemyError as exc:
            logger.error("Error loading seat map of venue %s: %s", venue_id, exc)
            raise StoreError(str(exc)) from exc

    def get_category_settings(self) -> dict[str, bool]:
        try:
            rows = self.settings_repository.list_all()
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
        return {row.category_id: row.is_visible for row in rows}

    def save_category_settings(self, settings: Mapping[str, bool]) -> None:
        try:
            self.settings_repository.replace_all(settings)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error saving category settings: %s", exc)
            raise StoreError(str(exc)) from exc
