from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import format_date, friday_of, monday_of, now_local
from ..common.validators import optional, parse_enum, require_fields, require_iso_date
from ..core.enums import MealType
from ..core.exceptions import DuplicateMealSlot, NotFound, ValidationError
from ..database.transaction import TransactionFactory
from .model import Meal
from .repository import MealRepository

logger = logging.getLogger(__name__)

ENTITY = "Mahlzeit"


class MealService:
    def __init__(self, meals: MealRepository, *, tx: TransactionFactory, clock: Callable[[], datetime] = now_local):
        self._meals = meals
        self._tx = tx
        self._clock = clock

    def week(self, reference: date) -> tuple[str, str, Sequence[Meal]]:
        """Monday..Friday of the week containing ``reference``."""
        start = format_date(monday_of(reference))
        end = format_date(friday_of(reference))
        return start, end, self._meals.list_range(start=start, end=end)

    def create(self, *, day: str, meal_type: str, description: str) -> str:
        fields = require_fields(
            ENTITY, "Alle Felder sind erforderlich", day=day, meal_type=meal_type, description=description
        )
        require_iso_date(fields["day"], "Datum", entity=ENTITY)
        slot = parse_enum(MealType, fields["meal_type"], ValidationError, "Ungültiger Mahlzeit-Typ")

        with self._tx():
            if self._meals.find_slot(day=fields["day"], meal_type=slot):
                raise DuplicateMealSlot("Für diesen Tag und Typ existiert bereits eine Mahlzeit")
            meal_id = self._meals.create(
                day=fields["day"], meal_type=slot, description=fields["description"], now=self._clock()
            )
        logger.info("Created meal %s (%s %s)", meal_id, fields["day"], slot.value)
        return meal_id

    def edit(self, meal_id: str, *, description: str) -> None:
        fields = require_fields(ENTITY, "Alle Felder sind erforderlich", id=meal_id, description=description)
        with self._tx():
            if not self._meals.update_description(fields["id"], description=fields["description"], now=self._clock()):
                raise NotFound("Mahlzeit nicht gefunden")

    def delete(self, meal_id: Optional[str]) -> None:
        meal_id = optional(meal_id)
        if not meal_id:
            raise ValidationError("ID ist erforderlich", entity=ENTITY)
        with self._tx():
            if not self._meals.delete(meal_id):
                raise NotFound("Mahlzeit nicht gefunden")
