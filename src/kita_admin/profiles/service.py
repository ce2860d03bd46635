from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence, Set

from ..common.datetime_utils import now_local
from ..common.validators import clean, optional, parse_enum, require_fields
from ..core.enums import RelationKind
from ..core.exceptions import InvalidRelationKind, NotFound, ValidationError
from ..database.transaction import TransactionFactory
from ..users.repository import UserRepository
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


class ProfileService:
    """Parent/employee profile details and the admin list pages.

    Linking children and teachers lives in the lifecycle module because it
    carries the duplicate/ownership guards.
    """

    def __init__(
        self,
        profiles: ProfileRepository,
        users: UserRepository,
        *,
        tx: TransactionFactory,
        clock: Callable[[], datetime] = now_local,
    ):
        self._profiles = profiles
        self._users = users
        self._tx = tx
        self._clock = clock

    def list_users(self) -> Sequence[dict]:
        return self._profiles.list_users_view()

    def list_parents(self) -> Sequence[dict]:
        return self._profiles.list_parents_view()

    def list_employees(self) -> Sequence[dict]:
        return self._profiles.list_employees_view()

    def linked_teacher_ids(self) -> Set[str]:
        return self._profiles.linked_teacher_ids()

    def children_of(self, user_id: str) -> Sequence[dict]:
        return self._profiles.list_children_for_parent(user_id)

    def parent_profile(self, user_id: str):
        return self._profiles.get_parent_profile(user_id)

    def employee_profile(self, user_id: str):
        return self._profiles.get_employee_profile(user_id)

    def _require_user(self, user_id: str) -> str:
        user_id = clean(user_id)
        if not user_id:
            raise ValidationError("Benutzer-ID erforderlich", entity="Benutzer")
        if not self._users.get_by_id(user_id):
            raise NotFound("Benutzer nicht gefunden")
        return user_id

    def update_parent_profile(self, user_id: str, *, phone: Optional[str], address: Optional[str]) -> None:
        with self._tx():
            user_id = self._require_user(user_id)
            now = self._clock()
            phone, address = optional(phone), optional(address)
            if not self._profiles.update_parent_profile(user_id, phone=phone, address=address, now=now):
                self._profiles.create_parent_profile(user_id, now=now, phone=phone, address=address)

    def unlink_child(self, link_id: str) -> None:
        link_id = clean(link_id)
        if not link_id:
            raise ValidationError("Verknüpfungs-ID erforderlich", entity="Eltern")
        with self._tx():
            if not self._profiles.delete_link(link_id):
                raise NotFound("Verknüpfung nicht gefunden")
        logger.info("Removed child link %s", link_id)

    def update_link(self, link_id: str, relation: Optional[str]) -> None:
        fields = require_fields("Eltern", "Verknüpfung und Beziehung sind erforderlich", id=link_id, relation=relation)
        kind = parse_enum(RelationKind, fields["relation"], InvalidRelationKind, "Ungültige Beziehung")
        with self._tx():
            if not self._profiles.update_link(fields["id"], relation=kind, now=self._clock()):
                raise NotFound("Verknüpfung nicht gefunden")

    def update_employee_profile(self, user_id: str, *, position: Optional[str]) -> None:
        with self._tx():
            user_id = self._require_user(user_id)
            now = self._clock()
            position = optional(position)
            if not self._profiles.set_position(user_id, position=position, now=now):
                self._profiles.create_employee_profile(user_id, now=now, position=position)

    def unlink_teacher(self, user_id: str) -> None:
        with self._tx():
            user_id = self._require_user(user_id)
            if not self._profiles.set_teacher(user_id, teacher_id=None, now=self._clock()):
                raise NotFound("Mitarbeiterprofil nicht gefunden")
        logger.info("Removed teacher link of user %s", user_id)
