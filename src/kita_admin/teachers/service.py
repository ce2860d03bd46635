from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import optional, require_fields
from ..core.exceptions import DuplicateEmail, NotFound
from ..database.transaction import TransactionFactory
from .model import Teacher
from .repository import TeacherRepository

logger = logging.getLogger(__name__)

ENTITY = "Erzieher"


class TeacherService:
    """Create and edit teachers. Deleting goes through the lifecycle guard."""

    def __init__(self, teachers: TeacherRepository, *, tx: TransactionFactory, clock: Callable[[], datetime] = now_local):
        self._teachers = teachers
        self._tx = tx
        self._clock = clock

    def list_all(self) -> Sequence[Teacher]:
        return self._teachers.list_all()

    def create(self, *, first_name: str, last_name: str, email: str, photo_path: Optional[str] = None) -> str:
        fields = require_fields(
            ENTITY, "Alle Felder sind erforderlich", first_name=first_name, last_name=last_name, email=email
        )

        with self._tx():
            if self._teachers.get_by_email(fields["email"]):
                raise DuplicateEmail("E-Mail bereits vorhanden")
            teacher_id = self._teachers.create(
                first_name=fields["first_name"],
                last_name=fields["last_name"],
                email=fields["email"],
                photo_path=optional(photo_path),
                now=self._clock(),
            )
        logger.info("Created teacher %s", teacher_id)
        return teacher_id

    def edit(
        self,
        teacher_id: str,
        *,
        first_name: str,
        last_name: str,
        email: str,
        photo_path: Optional[str] = None,
    ) -> None:
        fields = require_fields(
            ENTITY,
            "Alle Felder sind erforderlich",
            id=teacher_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
        )

        with self._tx():
            existing = self._teachers.get_by_email(fields["email"])
            if existing and existing.teacher_id != fields["id"]:
                raise DuplicateEmail("E-Mail bereits vorhanden")

            updated = self._teachers.update(
                fields["id"],
                first_name=fields["first_name"],
                last_name=fields["last_name"],
                email=fields["email"],
                photo_path=optional(photo_path),
                now=self._clock(),
            )
            if not updated:
                raise NotFound("Erzieher nicht gefunden")
