"""Role/profile consistency and the guarded deletes.

A user's parent or employee profile is created the first time the role is
assigned and kept when the role changes away, so a re-promoted user gets
their old phone/address/links back. Deletes that would orphan a referenced
row are refused. Every operation runs in a single transaction.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..auth.repository import AuthRepository
from ..children.repository import ChildRepository
from ..common.datetime_utils import now_local
from ..common.validators import clean, parse_enum, require_fields
from ..core.enums import RelationKind, Role
from ..core.exceptions import (
    DuplicateLink,
    GroupHasChildren,
    InvalidRelationKind,
    InvalidRole,
    LastAdminProtected,
    NotFound,
    TeacherAlreadyLinked,
    TeacherHasSchedule,
    TeacherNotFound,
    ValidationError,
)
from ..database.transaction import TransactionFactory
from ..groups.repository import GroupRepository
from ..profiles.repository import ProfileRepository
from ..schedules.repository import ScheduleRepository
from ..teachers.repository import TeacherRepository
from ..users.model import User
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)


class RoleProfileLifecycle:
    def __init__(
        self,
        *,
        users: UserRepository,
        auth: AuthRepository,
        profiles: ProfileRepository,
        groups: GroupRepository,
        children: ChildRepository,
        teachers: TeacherRepository,
        schedules: ScheduleRepository,
        tx: TransactionFactory,
        clock: Callable[[], datetime] = now_local,
    ):
        self._users = users
        self._auth = auth
        self._profiles = profiles
        self._groups = groups
        self._children = children
        self._teachers = teachers
        self._schedules = schedules
        self._tx = tx
        self._clock = clock

    def _require_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFound("Benutzer nicht gefunden")
        return user

    def _ensure_parent_profile(self, user_id: str, now: datetime) -> str:
        profile = self._profiles.get_parent_profile(user_id)
        if profile:
            return profile.profile_id
        logger.info("Creating parent profile for user %s", user_id)
        return self._profiles.create_parent_profile(user_id, now=now)

    def _ensure_employee_profile(self, user_id: str, now: datetime) -> str:
        profile = self._profiles.get_employee_profile(user_id)
        if profile:
            return profile.profile_id
        logger.info("Creating employee profile for user %s", user_id)
        return self._profiles.create_employee_profile(user_id, now=now)

    def set_role(self, user_id: str, role: Optional[str]) -> User:
        """Change the role and make sure the matching profile exists.

        The profile of the previous role is left untouched.
        """
        user_id = clean(user_id)
        if not user_id:
            raise ValidationError("Benutzer-ID erforderlich", entity="Benutzer")
        new_role = parse_enum(Role, role, InvalidRole, "Ungültige Rolle")

        with self._tx():
            user = self._require_user(user_id)
            now = self._clock()
            self._users.set_role(user_id, role=new_role, now=now)
            if new_role is Role.PARENT:
                self._ensure_parent_profile(user_id, now)
            elif new_role is Role.EMPLOYEE:
                self._ensure_employee_profile(user_id, now)

        logger.info("Role of user %s changed %s -> %s", user_id, user.role, new_role.value)
        return self._users.get_by_id(user_id)

    def delete_user(self, user_id: str) -> None:
        user_id = clean(user_id)
        if not user_id:
            raise ValidationError("Benutzer-ID erforderlich", entity="Benutzer")

        with self._tx():
            user = self._require_user(user_id)
            if user.role == Role.ADMIN.value and self._users.count_by_role(Role.ADMIN) <= 1:
                logger.warning("Refused to delete last admin %s", user_id)
                raise LastAdminProtected("Der letzte Administrator kann nicht gelöscht werden")

            parent = self._profiles.get_parent_profile(user_id)
            if parent:
                self._profiles.delete_links_for_profile(parent.profile_id)
                self._profiles.delete_parent_profile(user_id)
            self._profiles.delete_employee_profile(user_id)
            self._auth.delete_sessions_for_user(user_id)
            self._auth.delete_accounts_for_user(user_id)
            self._users.delete_by_id(user_id)

        logger.info("Deleted user %s (%s)", user_id, user.role)

    def delete_group(self, group_id: str) -> None:
        group_id = clean(group_id)
        if not group_id:
            raise ValidationError("Gruppen-ID erforderlich", entity="Gruppe")

        with self._tx():
            if self._children.exists_in_group(group_id):
                logger.warning("Refused to delete group %s: children assigned", group_id)
                raise GroupHasChildren("Gruppe kann nicht gelöscht werden, da noch Kinder zugeordnet sind")
            if not self._groups.delete(group_id):
                raise NotFound("Gruppe nicht gefunden")

        logger.info("Deleted group %s", group_id)

    def delete_teacher(self, teacher_id: str) -> None:
        teacher_id = clean(teacher_id)
        if not teacher_id:
            raise ValidationError("Erzieher-ID erforderlich", entity="Erzieher")

        with self._tx():
            if self._schedules.exists_for_teacher(teacher_id):
                logger.warning("Refused to delete teacher %s: schedule entries exist", teacher_id)
                raise TeacherHasSchedule("Erzieher kann nicht gelöscht werden, da noch Dienstplan-Einträge existieren")
            if not self._teachers.get_by_id(teacher_id):
                raise NotFound("Erzieher nicht gefunden")
            self._profiles.clear_teacher_reference(teacher_id, now=self._clock())
            self._teachers.delete(teacher_id)

        logger.info("Deleted teacher %s", teacher_id)

    def link_child_to_parent(self, user_id: str, child_id: str, relation: Optional[str]) -> str:
        fields = require_fields("Eltern", "Benutzer und Kind sind erforderlich", user_id=user_id, child_id=child_id)
        kind = parse_enum(
            RelationKind, clean(relation) or RelationKind.GUARDIAN.value, InvalidRelationKind, "Ungültige Beziehung"
        )

        with self._tx():
            self._require_user(fields["user_id"])
            if not self._children.get_by_id(fields["child_id"]):
                raise NotFound("Kind nicht gefunden")
            now = self._clock()
            profile_id = self._ensure_parent_profile(fields["user_id"], now)
            if self._profiles.find_link(parent_profile_id=profile_id, child_id=fields["child_id"]):
                raise DuplicateLink("Dieses Kind ist bereits verknüpft")
            link_id = self._profiles.create_link(
                parent_profile_id=profile_id, child_id=fields["child_id"], relation=kind, now=now
            )

        logger.info("Linked child %s to user %s as %s", fields["child_id"], fields["user_id"], kind.value)
        return link_id

    def link_teacher_to_employee(self, user_id: str, teacher_id: str) -> None:
        fields = require_fields(
            "Mitarbeiter", "Benutzer und Erzieher sind erforderlich", user_id=user_id, teacher_id=teacher_id
        )

        with self._tx():
            if not self._teachers.get_by_id(fields["teacher_id"]):
                raise TeacherNotFound("Erzieher nicht gefunden")
            self._require_user(fields["user_id"])
            holder = self._profiles.get_employee_profile_by_teacher(fields["teacher_id"])
            if holder and holder.user_id != fields["user_id"]:
                raise TeacherAlreadyLinked("Dieser Erzieher ist bereits mit einem anderen Mitarbeiter verknüpft")
            now = self._clock()
            self._ensure_employee_profile(fields["user_id"], now)
            self._profiles.set_teacher(fields["user_id"], teacher_id=fields["teacher_id"], now=now)

        logger.info("Linked teacher %s to user %s", fields["teacher_id"], fields["user_id"])
