from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Child:
    """Domain entity: enrolled child.

    ``birthdate`` is the stored ISO string; only its MM-DD part matters for
    birthday checks.
    """

    child_id: str
    first_name: str
    last_name: str
    birthdate: str
    group_id: Optional[str] = None
    photo_path: Optional[str] = None
    group_name: Optional[str] = None
    group_color: Optional[str] = None

    @property
    def month_day(self) -> str:
        return self.birthdate[5:]
