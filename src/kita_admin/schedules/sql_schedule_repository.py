from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import delete, select

from ..database.models import ScheduleEntryRow
from .model import ScheduleEntry
from .repository import ScheduleRepository


def _to_entry(row: ScheduleEntryRow) -> ScheduleEntry:
    teacher = row.teacher
    return ScheduleEntry(
        entry_id=row.id,
        teacher_id=row.teacher_id,
        date=row.date,
        start_time=row.start_time,
        end_time=row.end_time,
        teacher_first_name=teacher.first_name if teacher else None,
        teacher_last_name=teacher.last_name if teacher else None,
        teacher_photo_path=teacher.photo_path if teacher else None,
    )


class SqlScheduleRepository(ScheduleRepository):
    def __init__(self, db):
        self._db = db

    def get_by_id(self, entry_id: str) -> Optional[ScheduleEntry]:
        row = self._db.session.get(ScheduleEntryRow, entry_id)
        return _to_entry(row) if row else None

    def list_range(self, *, start: str, end: str, teacher_id: Optional[str] = None) -> Sequence[ScheduleEntry]:
        stmt = (
            select(ScheduleEntryRow)
            .where(ScheduleEntryRow.date >= start, ScheduleEntryRow.date <= end)
            .order_by(ScheduleEntryRow.date, ScheduleEntryRow.start_time)
        )
        if teacher_id is not None:
            stmt = stmt.where(ScheduleEntryRow.teacher_id == teacher_id)
        return [_to_entry(r) for r in self._db.session.scalars(stmt)]

    def list_for_date(self, day: str) -> Sequence[ScheduleEntry]:
        return self.list_range(start=day, end=day)

    def create(self, *, teacher_id: str, day: str, start_time: str, end_time: str, now: datetime) -> str:
        row = ScheduleEntryRow(
            teacher_id=teacher_id,
            date=day,
            start_time=start_time,
            end_time=end_time,
            created_at=now,
            updated_at=now,
        )
        self._db.session.add(row)
        self._db.session.flush()
        return row.id

    def update_times(self, entry_id: str, *, start_time: str, end_time: str, now: datetime) -> bool:
        row = self._db.session.get(ScheduleEntryRow, entry_id)
        if not row:
            return False
        row.start_time = start_time
        row.end_time = end_time
        row.updated_at = now
        self._db.session.flush()
        return True

    def delete(self, entry_id: str) -> bool:
        result = self._db.session.execute(delete(ScheduleEntryRow).where(ScheduleEntryRow.id == entry_id))
        return result.rowcount > 0

    def exists_for_teacher(self, teacher_id: str) -> bool:
        stmt = select(ScheduleEntryRow.id).where(ScheduleEntryRow.teacher_id == teacher_id).limit(1)
        return self._db.session.scalar(stmt) is not None
