from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import ScheduleEntry


class ScheduleRepository(Protocol):
    def get_by_id(self, entry_id: str) -> Optional[ScheduleEntry]:
        raise NotImplementedError

    def list_range(self, *, start: str, end: str, teacher_id: Optional[str] = None) -> Sequence[ScheduleEntry]:
        """Entries with start <= date <= end, ordered by date and start time."""

        raise NotImplementedError

    def list_for_date(self, day: str) -> Sequence[ScheduleEntry]:
        raise NotImplementedError

    def create(self, *, teacher_id: str, day: str, start_time: str, end_time: str, now: datetime) -> str:
        raise NotImplementedError

    def update_times(self, entry_id: str, *, start_time: str, end_time: str, now: datetime) -> bool:
        raise NotImplementedError

    def delete(self, entry_id: str) -> bool:
        raise NotImplementedError

    def exists_for_teacher(self, teacher_id: str) -> bool:
        raise NotImplementedError
