from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import delete, select

from ..core.enums import MealType
from ..database.models import MealRow
from .model import Meal
from .repository import MealRepository


def _to_meal(row: MealRow) -> Meal:
    return Meal(meal_id=row.id, date=row.date, meal_type=row.meal_type, description=row.description)


class SqlMealRepository(MealRepository):
    def __init__(self, db):
        self._db = db

    def get_by_id(self, meal_id: str) -> Optional[Meal]:
        row = self._db.session.get(MealRow, meal_id)
        return _to_meal(row) if row else None

    def find_slot(self, *, day: str, meal_type: MealType) -> Optional[Meal]:
        stmt = select(MealRow).where(MealRow.date == day, MealRow.meal_type == meal_type.value)
        row = self._db.session.scalars(stmt).first()
        return _to_meal(row) if row else None

    def list_range(self, *, start: str, end: str) -> Sequence[Meal]:
        stmt = select(MealRow).where(MealRow.date >= start, MealRow.date <= end)
        meals = [_to_meal(r) for r in self._db.session.scalars(stmt)]
        # meal_type strings do not sort in slot order
        return sorted(meals, key=lambda m: (m.date, m.slot_order))

    def list_for_date(self, day: str) -> Sequence[Meal]:
        return self.list_range(start=day, end=day)

    def create(self, *, day: str, meal_type: MealType, description: str, now: datetime) -> str:
        row = MealRow(date=day, meal_type=meal_type.value, description=description, created_at=now, updated_at=now)
        self._db.session.add(row)
        self._db.session.flush()
        return row.id

    def update_description(self, meal_id: str, *, description: str, now: datetime) -> bool:
        row = self._db.session.get(MealRow, meal_id)
        if not row:
            return False
        row.description = description
        row.updated_at = now
        self._db.session.flush()
        return True

    def delete(self, meal_id: str) -> bool:
        result = self._db.session.execute(delete(MealRow).where(MealRow.id == meal_id))
        return result.rowcount > 0
