from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Priority
from .model import Announcement


class AnnouncementRepository(Protocol):
    def list_all(self) -> Sequence[Announcement]:
        """All announcements, newest validity window first."""

        raise NotImplementedError

    def list_active(self, day: str) -> Sequence[Announcement]:
        """Announcements valid on ``day``: important first, then newest created."""

        raise NotImplementedError

    def get_by_id(self, announcement_id: str) -> Optional[Announcement]:
        raise NotImplementedError

    def create(
        self, *, title: str, message: str, valid_from: str, valid_to: str, priority: Priority, now: datetime
    ) -> str:
        raise NotImplementedError

    def update(
        self,
        announcement_id: str,
        *,
        title: str,
        message: str,
        valid_from: str,
        valid_to: str,
        priority: Priority,
        now: datetime,
    ) -> bool:
        raise NotImplementedError

    def delete(self, announcement_id: str) -> bool:
        raise NotImplementedError
