from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import MealType
from .model import Meal


class MealRepository(Protocol):
    def get_by_id(self, meal_id: str) -> Optional[Meal]:
        raise NotImplementedError

    def find_slot(self, *, day: str, meal_type: MealType) -> Optional[Meal]:
        raise NotImplementedError

    def list_range(self, *, start: str, end: str) -> Sequence[Meal]:
        raise NotImplementedError

    def list_for_date(self, day: str) -> Sequence[Meal]:
        raise NotImplementedError

    def create(self, *, day: str, meal_type: MealType, description: str, now: datetime) -> str:
        raise NotImplementedError

    def update_description(self, meal_id: str, *, description: str, now: datetime) -> bool:
        raise NotImplementedError

    def delete(self, meal_id: str) -> bool:
        raise NotImplementedError
