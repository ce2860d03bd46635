from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import delete, func, select

from ..database.models import TeacherRow
from .model import Teacher
from .repository import TeacherRepository


def _to_teacher(row: TeacherRow) -> Teacher:
    return Teacher(
        teacher_id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        photo_path=row.photo_path,
    )


class SqlTeacherRepository(TeacherRepository):
    def __init__(self, db):
        self._db = db

    def list_all(self) -> Sequence[Teacher]:
        stmt = select(TeacherRow).order_by(TeacherRow.last_name, TeacherRow.first_name)
        return [_to_teacher(r) for r in self._db.session.scalars(stmt)]

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        row = self._db.session.get(TeacherRow, teacher_id)
        return _to_teacher(row) if row else None

    def get_by_email(self, email: str) -> Optional[Teacher]:
        row = self._db.session.scalar(select(TeacherRow).where(TeacherRow.email == email))
        return _to_teacher(row) if row else None

    def create(self, *, first_name: str, last_name: str, email: str, photo_path: Optional[str], now: datetime) -> str:
        row = TeacherRow(
            first_name=first_name,
            last_name=last_name,
            email=email,
            photo_path=photo_path,
            created_at=now,
            updated_at=now,
        )
        self._db.session.add(row)
        self._db.session.flush()
        return row.id

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
        row = self._db.session.get(TeacherRow, teacher_id)
        if not row:
            return False
        row.first_name = first_name
        row.last_name = last_name
        row.email = email
        row.photo_path = photo_path
        row.updated_at = now
        self._db.session.flush()
        return True

    def delete(self, teacher_id: str) -> bool:
        result = self._db.session.execute(delete(TeacherRow).where(TeacherRow.id == teacher_id))
        return result.rowcount > 0

    def count(self) -> int:
        return int(self._db.session.scalar(select(func.count()).select_from(TeacherRow)))
