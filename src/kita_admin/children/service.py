from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import optional, require_fields, require_iso_date
from ..core.exceptions import NotFound, ValidationError
from ..database.transaction import TransactionFactory
from ..groups.repository import GroupRepository
from ..profiles.repository import ProfileRepository
from .model import Child
from .repository import ChildRepository

logger = logging.getLogger(__name__)

ENTITY = "Kind"


class ChildService:
    def __init__(
        self,
        children: ChildRepository,
        groups: GroupRepository,
        profiles: ProfileRepository,
        *,
        tx: TransactionFactory,
        clock: Callable[[], datetime] = now_local,
    ):
        self._children = children
        self._groups = groups
        self._profiles = profiles
        self._tx = tx
        self._clock = clock

    def list_all(self) -> Sequence[Child]:
        return self._children.list_all()

    def _check_group(self, group_id: Optional[str]) -> Optional[str]:
        if group_id and not self._groups.get_by_id(group_id):
            raise NotFound("Gruppe nicht gefunden")
        return group_id

    def create(
        self,
        *,
        first_name: str,
        last_name: str,
        birthdate: str,
        group_id: Optional[str] = None,
        photo_path: Optional[str] = None,
    ) -> str:
        fields = require_fields(
            ENTITY,
            "Vorname, Nachname und Geburtstag sind erforderlich",
            first_name=first_name,
            last_name=last_name,
            birthdate=birthdate,
        )
        require_iso_date(fields["birthdate"], "Geburtstag", entity=ENTITY)

        with self._tx():
            child_id = self._children.create(
                first_name=fields["first_name"],
                last_name=fields["last_name"],
                birthdate=fields["birthdate"],
                group_id=self._check_group(optional(group_id)),
                photo_path=optional(photo_path),
                now=self._clock(),
            )
        logger.info("Created child %s", child_id)
        return child_id

    def edit(
        self,
        child_id: str,
        *,
        first_name: str,
        last_name: str,
        birthdate: str,
        group_id: Optional[str] = None,
        photo_path: Optional[str] = None,
    ) -> None:
        fields = require_fields(
            ENTITY,
            "Alle Pflichtfelder müssen ausgefüllt sein",
            id=child_id,
            first_name=first_name,
            last_name=last_name,
            birthdate=birthdate,
        )
        require_iso_date(fields["birthdate"], "Geburtstag", entity=ENTITY)

        with self._tx():
            updated = self._children.update(
                fields["id"],
                first_name=fields["first_name"],
                last_name=fields["last_name"],
                birthdate=fields["birthdate"],
                group_id=self._check_group(optional(group_id)),
                photo_path=optional(photo_path),
                now=self._clock(),
            )
            if not updated:
                raise NotFound("Kind nicht gefunden")

    def delete(self, child_id: str) -> None:
        child_id = optional(child_id)
        if not child_id:
            raise ValidationError("Kind-ID erforderlich", entity=ENTITY)

        with self._tx():
            links = self._profiles.delete_links_for_child(child_id)
            if not self._children.delete(child_id):
                raise NotFound("Kind nicht gefunden")
        logger.info("Deleted child %s (%d parent links removed)", child_id, links)
