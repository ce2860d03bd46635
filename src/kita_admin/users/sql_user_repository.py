from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import func, select

from ..core.enums import Role
from ..database.models import UserRow
from .model import User
from .repository import UserRepository


def _to_user(row: UserRow) -> User:
    return User(
        user_id=row.id,
        name=row.name,
        email=row.email,
        role=row.role,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlUserRepository(UserRepository):
    def __init__(self, db):
        self._db = db

    def get_by_id(self, user_id: str) -> Optional[User]:
        row = self._db.session.get(UserRow, user_id)
        return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        row = self._db.session.scalar(select(UserRow).where(UserRow.email == email))
        return _to_user(row) if row else None

    def create_user(self, *, name: str, email: str, role: Role, now: datetime) -> str:
        row = UserRow(name=name, email=email, role=role.value, created_at=now, updated_at=now)
        self._db.session.add(row)
        self._db.session.flush()
        return row.id

    def set_role(self, user_id: str, *, role: Role, now: datetime) -> bool:
        row = self._db.session.get(UserRow, user_id)
        if not row:
            return False
        row.role = role.value
        row.updated_at = now
        self._db.session.flush()
        return True

    def count_by_role(self, role: Role) -> int:
        return int(self._db.session.scalar(select(func.count()).select_from(UserRow).where(UserRow.role == role.value)))

    def delete_by_id(self, user_id: str) -> bool:
        row = self._db.session.get(UserRow, user_id)
        if not row:
            return False
        self._db.session.delete(row)
        self._db.session.flush()
        return True

