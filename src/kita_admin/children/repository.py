from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Child


class ChildRepository(Protocol):
    def list_all(self) -> Sequence[Child]:
        """Ordered by last name, first name; includes the group."""

        raise NotImplementedError

    def get_by_id(self, child_id: str) -> Optional[Child]:
        raise NotImplementedError

    def create(
        self,
        *,
        first_name: str,
        last_name: str,
        birthdate: str,
        group_id: Optional[str],
        photo_path: Optional[str],
        now: datetime,
    ) -> str:
        raise NotImplementedError

    def update(
        self,
        child_id: str,
        *,
        first_name: str,
        last_name: str,
        birthdate: str,
        group_id: Optional[str],
        photo_path: Optional[str],
        now: datetime,
    ) -> bool:
        raise NotImplementedError

    def delete(self, child_id: str) -> bool:
        raise NotImplementedError

    def exists_in_group(self, group_id: str) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
