from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Group:
    """A classroom/cohort of children, shown in its display color."""

    group_id: str
    name: str
    color: str
