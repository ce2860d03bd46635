from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import clean, optional, parse_enum, require_fields, require_iso_date
from ..core.enums import Priority
from ..core.exceptions import InvalidDateRange, NotFound, ValidationError
from ..database.transaction import TransactionFactory
from .model import Announcement
from .repository import AnnouncementRepository

logger = logging.getLogger(__name__)

ENTITY = "Ankündigung"


def _validated(title, message, valid_from, valid_to, priority, **extra) -> tuple[dict, Priority]:
    fields = require_fields(
        ENTITY,
        "Alle Pflichtfelder müssen ausgefüllt sein",
        title=title,
        message=message,
        valid_from=valid_from,
        valid_to=valid_to,
        **extra,
    )
    require_iso_date(fields["valid_from"], "Gültig von", entity=ENTITY)
    require_iso_date(fields["valid_to"], "Gültig bis", entity=ENTITY)
    if fields["valid_to"] < fields["valid_from"]:
        raise InvalidDateRange("Gültig bis darf nicht vor Gültig von liegen", entity=ENTITY)
    level = parse_enum(Priority, clean(priority) or Priority.NORMAL.value, ValidationError, "Ungültige Priorität")
    return fields, level


class AnnouncementService:
    def __init__(
        self, announcements: AnnouncementRepository, *, tx: TransactionFactory, clock: Callable[[], datetime] = now_local
    ):
        self._announcements = announcements
        self._tx = tx
        self._clock = clock

    def list_all(self) -> Sequence[Announcement]:
        return self._announcements.list_all()

    def create(
        self, *, title: str, message: str, valid_from: str, valid_to: str, priority: Optional[str] = None
    ) -> str:
        fields, level = _validated(title, message, valid_from, valid_to, priority)
        with self._tx():
            announcement_id = self._announcements.create(
                title=fields["title"],
                message=fields["message"],
                valid_from=fields["valid_from"],
                valid_to=fields["valid_to"],
                priority=level,
                now=self._clock(),
            )
        logger.info("Created announcement %s (%s)", announcement_id, level.value)
        return announcement_id

    def edit(
        self,
        announcement_id: str,
        *,
        title: str,
        message: str,
        valid_from: str,
        valid_to: str,
        priority: Optional[str] = None,
    ) -> None:
        fields, level = _validated(title, message, valid_from, valid_to, priority, id=announcement_id)
        with self._tx():
            updated = self._announcements.update(
                fields["id"],
                title=fields["title"],
                message=fields["message"],
                valid_from=fields["valid_from"],
                valid_to=fields["valid_to"],
                priority=level,
                now=self._clock(),
            )
            if not updated:
                raise NotFound("Ankündigung nicht gefunden")

    def delete(self, announcement_id: Optional[str]) -> None:
        announcement_id = optional(announcement_id)
        if not announcement_id:
            raise ValidationError("ID ist erforderlich", entity=ENTITY)
        with self._tx():
            if not self._announcements.delete(announcement_id):
                raise NotFound("Ankündigung nicht gefunden")
