from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ParentProfile:
    profile_id: str
    user_id: str
    phone: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class EmployeeProfile:
    profile_id: str
    user_id: str
    teacher_id: Optional[str] = None
    position: Optional[str] = None


@dataclass(frozen=True)
class ChildLink:
    """Join row between a parent profile and a child."""

    link_id: str
    parent_profile_id: str
    child_id: str
    relation: str
