from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Teacher


class TeacherRepository(Protocol):
    def list_all(self) -> Sequence[Teacher]:
        """Ordered by last name, first name."""

        raise NotImplementedError

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Teacher]:
        raise NotImplementedError

    def create(self, *, first_name: str, last_name: str, email: str, photo_path: Optional[str], now: datetime) -> str:
        raise NotImplementedError

    def update(
        self,
        teacher_id: str,
        *,
        first_name: str,
        last_name: str,
        email: str,
        photo_path: Optional[str],
        now: datetime,
    ) -> bool:
        raise NotImplementedError

    def delete(self, teacher_id: str) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
