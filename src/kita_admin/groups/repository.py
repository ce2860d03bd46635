from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Group


class GroupRepository(Protocol):
    def list_all(self) -> Sequence[Group]:
        """Ordered by name."""

        raise NotImplementedError

    def get_by_id(self, group_id: str) -> Optional[Group]:
        raise NotImplementedError

    def create(self, *, name: str, color: str, now: datetime) -> str:
        raise NotImplementedError

    def update(self, group_id: str, *, name: str, color: str, now: datetime) -> bool:
        raise NotImplementedError

    def delete(self, group_id: str) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
