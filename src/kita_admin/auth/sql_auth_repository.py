from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select

from ..database.models import AccountRow, SessionRow
from .model import StoredSession
from .repository import AuthRepository


class SqlAuthRepository(AuthRepository):
    def __init__(self, db):
        self._db = db

    def create_account(self, *, user_id: str, provider_id: str, password_hash: str, now: datetime) -> str:
        row = AccountRow(
            user_id=user_id,
            account_id=user_id,
            provider_id=provider_id,
            password=password_hash,
            created_at=now,
            updated_at=now,
        )
        self._db.session.add(row)
        self._db.session.flush()
        return row.id

    def get_password_hash(self, *, user_id: str, provider_id: str) -> Optional[str]:
        return self._db.session.scalar(
            select(AccountRow.password).where(AccountRow.user_id == user_id, AccountRow.provider_id == provider_id)
        )

    def create_session(
        self,
        *,
        user_id: str,
        token: str,
        expires_at: datetime,
        ip_address: Optional[str],
        user_agent: Optional[str],
        now: datetime,
    ) -> str:
        row = SessionRow(
            user_id=user_id,
            token=token,
            expires_at=expires_at,
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=now,
            updated_at=now,
        )
        self._db.session.add(row)
        self._db.session.flush()
        return row.id

    def get_session(self, token: str) -> Optional[StoredSession]:
        row = self._db.session.scalar(select(SessionRow).where(SessionRow.token == token))
        if not row:
            return None
        return StoredSession(token=row.token, user_id=row.user_id, expires_at=row.expires_at)

    def delete_session(self, token: str) -> bool:
        result = self._db.session.execute(delete(SessionRow).where(SessionRow.token == token))
        return result.rowcount > 0

    def delete_sessions_for_user(self, user_id: str) -> int:
        result = self._db.session.execute(delete(SessionRow).where(SessionRow.user_id == user_id))
        return int(result.rowcount)

    def delete_accounts_for_user(self, user_id: str) -> int:
        result = self._db.session.execute(delete(AccountRow).where(AccountRow.user_id == user_id))
        return int(result.rowcount)
