from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import delete, func, select

from ..database.models import ChildRow
from .model import Child
from .repository import ChildRepository


def _to_child(row: ChildRow) -> Child:
    return Child(
        child_id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        birthdate=row.birthdate,
        group_id=row.group_id,
        photo_path=row.photo_path,
        group_name=row.group.name if row.group else None,
        group_color=row.group.color if row.group else None,
    )


class SqlChildRepository(ChildRepository):
    def __init__(self, db):
        self._db = db

    def list_all(self) -> Sequence[Child]:
        stmt = select(ChildRow).order_by(ChildRow.last_name, ChildRow.first_name)
        return [_to_child(r) for r in self._db.session.scalars(stmt)]

    def get_by_id(self, child_id: str) -> Optional[Child]:
        row = self._db.session.get(ChildRow, child_id)
        return _to_child(row) if row else None

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
        row = ChildRow(
            first_name=first_name,
            last_name=last_name,
            birthdate=birthdate,
            group_id=group_id,
            photo_path=photo_path,
            created_at=now,
            updated_at=now,
        )
        self._db.session.add(row)
        self._db.session.flush()
        return row.id

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
        row = self._db.session.get(ChildRow, child_id)
        if not row:
            return False
        row.first_name = first_name
        row.last_name = last_name
        row.birthdate = birthdate
        row.group_id = group_id
        row.photo_path = photo_path
        row.updated_at = now
        self._db.session.flush()
        return True

    def delete(self, child_id: str) -> bool:
        result = self._db.session.execute(delete(ChildRow).where(ChildRow.id == child_id))
        return result.rowcount > 0

    def exists_in_group(self, group_id: str) -> bool:
        return self._db.session.scalar(select(ChildRow.id).where(ChildRow.group_id == group_id).limit(1)) is not None

    def count(self) -> int:
        return int(self._db.session.scalar(select(func.count()).select_from(ChildRow)))
