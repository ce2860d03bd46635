from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence, Set

from ..core.enums import RelationKind
from .model import ChildLink, EmployeeProfile, ParentProfile


class ProfileRepository(Protocol):
    """Role profiles (parent / employee) and parent-child links."""

    # parent profiles
    def get_parent_profile(self, user_id: str) -> Optional[ParentProfile]:
        raise NotImplementedError

    def create_parent_profile(
        self, user_id: str, *, now: datetime, phone: Optional[str] = None, address: Optional[str] = None
    ) -> str:
        raise NotImplementedError

    def update_parent_profile(self, user_id: str, *, phone: Optional[str], address: Optional[str], now: datetime) -> bool:
        raise NotImplementedError

    def delete_parent_profile(self, user_id: str) -> bool:
        raise NotImplementedError

    # child links
    def get_link(self, link_id: str) -> Optional[ChildLink]:
        raise NotImplementedError

    def find_link(self, *, parent_profile_id: str, child_id: str) -> Optional[ChildLink]:
        raise NotImplementedError

    def create_link(self, *, parent_profile_id: str, child_id: str, relation: RelationKind, now: datetime) -> str:
        raise NotImplementedError

    def update_link(self, link_id: str, *, relation: RelationKind, now: datetime) -> bool:
        raise NotImplementedError

    def delete_link(self, link_id: str) -> bool:
        raise NotImplementedError

    def delete_links_for_profile(self, parent_profile_id: str) -> int:
        raise NotImplementedError

    def delete_links_for_child(self, child_id: str) -> int:
        raise NotImplementedError

    # employee profiles
    def get_employee_profile(self, user_id: str) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def get_employee_profile_by_teacher(self, teacher_id: str) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def create_employee_profile(
        self, user_id: str, *, now: datetime, position: Optional[str] = None, teacher_id: Optional[str] = None
    ) -> str:
        raise NotImplementedError

    def set_position(self, user_id: str, *, position: Optional[str], now: datetime) -> bool:
        raise NotImplementedError

    def set_teacher(self, user_id: str, *, teacher_id: Optional[str], now: datetime) -> bool:
        raise NotImplementedError

    def clear_teacher_reference(self, teacher_id: str, *, now: datetime) -> int:
        raise NotImplementedError

    def delete_employee_profile(self, user_id: str) -> bool:
        raise NotImplementedError

    # list views (UI tables)
    def list_users_view(self) -> Sequence[dict]:
        raise NotImplementedError

    def list_parents_view(self) -> Sequence[dict]:
        raise NotImplementedError

    def list_employees_view(self) -> Sequence[dict]:
        raise NotImplementedError

    def linked_teacher_ids(self) -> Set[str]:
        raise NotImplementedError

    def list_children_for_parent(self, user_id: str) -> Sequence[dict]:
        raise NotImplementedError
