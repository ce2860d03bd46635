from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence, Set

from sqlalchemy import delete, select, update

from ..core.enums import RelationKind, Role
from ..database.models import ChildLinkRow, ChildRow, EmployeeProfileRow, ParentProfileRow, UserRow
from .model import ChildLink, EmployeeProfile, ParentProfile
from .repository import ProfileRepository


def _to_parent(row: ParentProfileRow) -> ParentProfile:
    return ParentProfile(profile_id=row.id, user_id=row.user_id, phone=row.phone, address=row.address)


def _to_employee(row: EmployeeProfileRow) -> EmployeeProfile:
    return EmployeeProfile(profile_id=row.id, user_id=row.user_id, teacher_id=row.teacher_id, position=row.position)


def _to_link(row: ChildLinkRow) -> ChildLink:
    return ChildLink(link_id=row.id, parent_profile_id=row.parent_profile_id, child_id=row.child_id, relation=row.relation)


def _child_of_link(link: ChildLinkRow) -> dict:
    child = link.child
    group = child.group if child else None
    return {
        "id": link.child_id,
        "link_id": link.id,
        "first_name": child.first_name if child else None,
        "last_name": child.last_name if child else None,
        "relation": link.relation,
        "group_id": child.group_id if child else None,
        "group_name": group.name if group else None,
        "group_color": group.color if group else None,
    }


class SqlProfileRepository(ProfileRepository):
    def __init__(self, db):
        self._db = db

    def _parent_row(self, user_id: str) -> Optional[ParentProfileRow]:
        return self._db.session.scalar(select(ParentProfileRow).where(ParentProfileRow.user_id == user_id))

    def _employee_row(self, user_id: str) -> Optional[EmployeeProfileRow]:
        return self._db.session.scalar(select(EmployeeProfileRow).where(EmployeeProfileRow.user_id == user_id))

    # parent profiles

    def get_parent_profile(self, user_id: str) -> Optional[ParentProfile]:
        row = self._parent_row(user_id)
        return _to_parent(row) if row else None

    def create_parent_profile(
        self, user_id: str, *, now: datetime, phone: Optional[str] = None, address: Optional[str] = None
    ) -> str:
        row = ParentProfileRow(user_id=user_id, phone=phone, address=address, created_at=now, updated_at=now)
        self._db.session.add(row)
        self._db.session.flush()
        return row.id

    def update_parent_profile(self, user_id: str, *, phone: Optional[str], address: Optional[str], now: datetime) -> bool:
        row = self._parent_row(user_id)
        if not row:
            return False
        row.phone = phone
        row.address = address
        row.updated_at = now
        self._db.session.flush()
        return True

    def delete_parent_profile(self, user_id: str) -> bool:
        result = self._db.session.execute(delete(ParentProfileRow).where(ParentProfileRow.user_id == user_id))
        return result.rowcount > 0

    # child links

    def get_link(self, link_id: str) -> Optional[ChildLink]:
        row = self._db.session.get(ChildLinkRow, link_id)
        return _to_link(row) if row else None

    def find_link(self, *, parent_profile_id: str, child_id: str) -> Optional[ChildLink]:
        row = self._db.session.scalar(
            select(ChildLinkRow).where(
                ChildLinkRow.parent_profile_id == parent_profile_id,
                ChildLinkRow.child_id == child_id,
            )
        )
        return _to_link(row) if row else None

    def create_link(self, *, parent_profile_id: str, child_id: str, relation: RelationKind, now: datetime) -> str:
        row = ChildLinkRow(
            parent_profile_id=parent_profile_id,
            child_id=child_id,
            relation=relation.value,
            created_at=now,
            updated_at=now,
        )
        self._db.session.add(row)
        self._db.session.flush()
        return row.id

    def update_link(self, link_id: str, *, relation: RelationKind, now: datetime) -> bool:
        row = self._db.session.get(ChildLinkRow, link_id)
        if not row:
            return False
        row.relation = relation.value
        row.updated_at = now
        self._db.session.flush()
        return True

    def delete_link(self, link_id: str) -> bool:
        result = self._db.session.execute(delete(ChildLinkRow).where(ChildLinkRow.id == link_id))
        return result.rowcount > 0

    def delete_links_for_profile(self, parent_profile_id: str) -> int:
        result = self._db.session.execute(delete(ChildLinkRow).where(ChildLinkRow.parent_profile_id == parent_profile_id))
        return int(result.rowcount)

    def delete_links_for_child(self, child_id: str) -> int:
        result = self._db.session.execute(delete(ChildLinkRow).where(ChildLinkRow.child_id == child_id))
        return int(result.rowcount)

    # employee profiles

    def get_employee_profile(self, user_id: str) -> Optional[EmployeeProfile]:
        row = self._employee_row(user_id)
        return _to_employee(row) if row else None

    def get_employee_profile_by_teacher(self, teacher_id: str) -> Optional[EmployeeProfile]:
        row = self._db.session.scalar(select(EmployeeProfileRow).where(EmployeeProfileRow.teacher_id == teacher_id))
        return _to_employee(row) if row else None

    def create_employee_profile(
        self, user_id: str, *, now: datetime, position: Optional[str] = None, teacher_id: Optional[str] = None
    ) -> str:
        row = EmployeeProfileRow(
            user_id=user_id,
            position=position,
            teacher_id=teacher_id,
            created_at=now,
            updated_at=now,
        )
        self._db.session.add(row)
        self._db.session.flush()
        return row.id

    def set_position(self, user_id: str, *, position: Optional[str], now: datetime) -> bool:
        row = self._employee_row(user_id)
        if not row:
            return False
        row.position = position
        row.updated_at = now
        self._db.session.flush()
        return True

    def set_teacher(self, user_id: str, *, teacher_id: Optional[str], now: datetime) -> bool:
        row = self._employee_row(user_id)
        if not row:
            return False
        row.teacher_id = teacher_id
        row.updated_at = now
        self._db.session.flush()
        return True

    def clear_teacher_reference(self, teacher_id: str, *, now: datetime) -> int:
        result = self._db.session.execute(
            update(EmployeeProfileRow)
            .where(EmployeeProfileRow.teacher_id == teacher_id)
            .values(teacher_id=None, updated_at=now)
        )
        return int(result.rowcount)

    def delete_employee_profile(self, user_id: str) -> bool:
        result = self._db.session.execute(delete(EmployeeProfileRow).where(EmployeeProfileRow.user_id == user_id))
        return result.rowcount > 0

    # list views

    def list_users_view(self) -> Sequence[dict]:
        users = self._db.session.scalars(select(UserRow).order_by(UserRow.created_at.desc())).all()
        parents = {p.user_id: p for p in self._db.session.scalars(select(ParentProfileRow))}
        employees = {e.user_id: e for e in self._db.session.scalars(select(EmployeeProfileRow))}

        out: list[dict] = []
        for u in users:
            parent = parents.get(u.id)
            employee = employees.get(u.id)
            out.append(
                {
                    "id": u.id,
                    "name": u.name,
                    "email": u.email,
                    "role": u.role,
                    "created_at": u.created_at,
                    "parent_profile": (
                        {"id": parent.id, "phone": parent.phone, "address": parent.address} if parent else None
                    ),
                    "employee_profile": (
                        {"id": employee.id, "position": employee.position, "teacher_id": employee.teacher_id}
                        if employee
                        else None
                    ),
                }
            )
        return out

    def list_parents_view(self) -> Sequence[dict]:
        users = self._db.session.scalars(
            select(UserRow).where(UserRow.role == Role.PARENT.value).order_by(UserRow.created_at.desc())
        ).all()
        profiles = {p.user_id: p for p in self._db.session.scalars(select(ParentProfileRow))}

        children_by_profile: dict[str, list[dict]] = {}
        for link in self._db.session.scalars(select(ChildLinkRow)):
            children_by_profile.setdefault(link.parent_profile_id, []).append(_child_of_link(link))

        out: list[dict] = []
        for u in users:
            profile = profiles.get(u.id)
            out.append(
                {
                    "id": u.id,
                    "name": u.name,
                    "email": u.email,
                    "role": u.role,
                    "created_at": u.created_at,
                    "parent_profile_id": profile.id if profile else None,
                    "phone": profile.phone if profile else None,
                    "address": profile.address if profile else None,
                    "children": children_by_profile.get(profile.id, []) if profile else [],
                }
            )
        return out

    def list_employees_view(self) -> Sequence[dict]:
        users = self._db.session.scalars(
            select(UserRow).where(UserRow.role == Role.EMPLOYEE.value).order_by(UserRow.created_at.desc())
        ).all()
        profiles = {p.user_id: p for p in self._db.session.scalars(select(EmployeeProfileRow))}

        out: list[dict] = []
        for u in users:
            profile = profiles.get(u.id)
            teacher = profile.teacher if profile else None
            out.append(
                {
                    "id": u.id,
                    "name": u.name,
                    "email": u.email,
                    "role": u.role,
                    "created_at": u.created_at,
                    "employee_profile_id": profile.id if profile else None,
                    "position": profile.position if profile else None,
                    "teacher_id": profile.teacher_id if profile else None,
                    "teacher_first_name": teacher.first_name if teacher else None,
                    "teacher_last_name": teacher.last_name if teacher else None,
                    "teacher_email": teacher.email if teacher else None,
                    "teacher_photo_path": teacher.photo_path if teacher else None,
                }
            )
        return out

    def linked_teacher_ids(self) -> Set[str]:
        rows = self._db.session.scalars(
            select(EmployeeProfileRow.teacher_id).where(EmployeeProfileRow.teacher_id.is_not(None))
        )
        return set(rows)

    def list_children_for_parent(self, user_id: str) -> Sequence[dict]:
        profile = self._parent_row(user_id)
        if not profile:
            return []
        links = self._db.session.scalars(
            select(ChildLinkRow)
            .join(ChildRow, ChildRow.id == ChildLinkRow.child_id)
            .where(ChildLinkRow.parent_profile_id == profile.id)
            .order_by(ChildRow.last_name, ChildRow.first_name)
        )
        return [_child_of_link(link) for link in links]
