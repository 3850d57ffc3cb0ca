# src/infrastructure/repositories/category_settings_repository.py

from typing import Mapping

from sqlalchemy.orm import Session
from sqlalchemy import delete, select

from src.infrastructure.db.models import CategorySetting


class CategorySettingsRepository:

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[CategorySetting]:
        stmt = select(CategorySetting).order_by(CategorySetting.id)
        return list(self.db.execute(stmt).scalars().all())

    def replace_all(self, settings: Mapping[str, bool]) -> None:
        """
        Make the table hold exactly `settings`.
        Existing keys are updated in place and missing keys are deleted,
        so the table is never empty mid-save.
        """
        existing = {item.category_id: item for item in self.list_all()}

        for category_id, is_visible in settings.items():
            row = existing.get(category_id)
            if row:
                row.is_visible = bool(is_visible)
            else:
                self.db.add(
                    CategorySetting(
                        category_id=category_id,
                        is_visible=bool(is_visible),
                    )
                )

        stale = [key for key in existing if key not in settings]
        if stale:
            self.db.execute(
                delete(CategorySetting).where(CategorySetting.category_id.in_(stale))
            )
