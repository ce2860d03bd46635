from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ScheduleEntry:
    """A teacher's same-day shift. Times are zero-padded HH:MM strings."""

    entry_id: str
    teacher_id: str
    date: str
    start_time: str
    end_time: str
    teacher_first_name: Optional[str] = None
    teacher_last_name: Optional[str] = None
    teacher_photo_path: Optional[str] = None

    def covers(self, hhmm: str) -> bool:
        # zero-padded 24h strings compare like times
        return self.start_time <= hhmm <= self.end_time
