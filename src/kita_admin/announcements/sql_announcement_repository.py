from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import case, delete, select

from ..core.enums import Priority
from ..database.models import AnnouncementRow
from .model import Announcement
from .repository import AnnouncementRepository

_PRIORITY_RANK = case((AnnouncementRow.priority == Priority.IMPORTANT.value, 1), else_=0)


def _to_announcement(row: AnnouncementRow) -> Announcement:
    return Announcement(
        announcement_id=row.id,
        title=row.title,
        message=row.message,
        valid_from=row.valid_from,
        valid_to=row.valid_to,
        priority=row.priority,
        created_at=row.created_at,
    )


class SqlAnnouncementRepository(AnnouncementRepository):
    def __init__(self, db):
        self._db = db

    def list_all(self) -> Sequence[Announcement]:
        stmt = select(AnnouncementRow).order_by(AnnouncementRow.valid_from.desc(), AnnouncementRow.created_at.desc())
        return [_to_announcement(r) for r in self._db.session.scalars(stmt)]

    def list_active(self, day: str) -> Sequence[Announcement]:
        stmt = (
            select(AnnouncementRow)
            .where(AnnouncementRow.valid_from <= day, AnnouncementRow.valid_to >= day)
            .order_by(_PRIORITY_RANK.desc(), AnnouncementRow.created_at.desc())
        )
        return [_to_announcement(r) for r in self._db.session.scalars(stmt)]

    def get_by_id(self, announcement_id: str) -> Optional[Announcement]:
        row = self._db.session.get(AnnouncementRow, announcement_id)
        return _to_announcement(row) if row else None

    def create(
        self, *, title: str, message: str, valid_from: str, valid_to: str, priority: Priority, now: datetime
    ) -> str:
        row = AnnouncementRow(
            title=title,
            message=message,
            valid_from=valid_from,
            valid_to=valid_to,
            priority=priority.value,
            created_at=now,
            updated_at=now,
        )
        self._db.session.add(row)
        self._db.session.flush()
        return row.id

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
        row = self._db.session.get(AnnouncementRow, announcement_id)
        if not row:
            return False
        row.title = title
        row.message = message
        row.valid_from = valid_from
        row.valid_to = valid_to
        row.priority = priority.value
        row.updated_at = now
        self._db.session.flush()
        return True

    def delete(self, announcement_id: str) -> bool:
        result = self._db.session.execute(delete(AnnouncementRow).where(AnnouncementRow.id == announcement_id))
        return result.rowcount > 0
