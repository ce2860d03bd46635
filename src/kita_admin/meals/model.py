from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import MealType

_ORDER = {meal_type.value: index for index, meal_type in enumerate(MealType)}


@dataclass(frozen=True)
class Meal:
    meal_id: str
    date: str
    meal_type: str
    description: str

    @property
    def slot_order(self) -> int:
        return _ORDER.get(self.meal_type, len(_ORDER))
