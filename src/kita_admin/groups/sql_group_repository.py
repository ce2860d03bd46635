from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import delete, func, select

from ..database.models import GroupRow
from .model import Group
from .repository import GroupRepository


def _to_group(row: GroupRow) -> Group:
    return Group(group_id=row.id, name=row.name, color=row.color)


class SqlGroupRepository(GroupRepository):
    def __init__(self, db):
        self._db = db

    def list_all(self) -> Sequence[Group]:
        return [_to_group(r) for r in self._db.session.scalars(select(GroupRow).order_by(GroupRow.name))]

    def get_by_id(self, group_id: str) -> Optional[Group]:
        row = self._db.session.get(GroupRow, group_id)
        return _to_group(row) if row else None

    def create(self, *, name: str, color: str, now: datetime) -> str:
        row = GroupRow(name=name, color=color, created_at=now, updated_at=now)
        self._db.session.add(row)
        self._db.session.flush()
        return row.id

    def update(self, group_id: str, *, name: str, color: str, now: datetime) -> bool:
        row = self._db.session.get(GroupRow, group_id)
        if not row:
            return False
        row.name = name
        row.color = color
        row.updated_at = now
        self._db.session.flush()
        return True

    def delete(self, group_id: str) -> bool:
        result = self._db.session.execute(delete(GroupRow).where(GroupRow.id == group_id))
        return result.rowcount > 0

    def count(self) -> int:
        return int(self._db.session.scalar(select(func.count()).select_from(GroupRow)))
