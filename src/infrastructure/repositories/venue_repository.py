# src/infrastructure/repositories/venue_repository.py

from sqlalchemy.orm import Session
from sqlalchemy import select

from src.infrastructure.db.models import Venue


class VenueRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, venue_id: str) -> Venue | None:
        stmt = select(Venue).where(Venue.id == venue_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def replace_categories(self, venue: Venue, categories: list[dict]) -> None:
        # JSON columns only notice reassignment, not in-place edits.
        venue.categories = [dict(category) for category in categories]
