from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import StoredSession


class AuthRepository(Protocol):
    """Credential accounts and login sessions."""

    def create_account(self, *, user_id: str, provider_id: str, password_hash: str, now: datetime) -> str:
        raise NotImplementedError

    def get_password_hash(self, *, user_id: str, provider_id: str) -> Optional[str]:
        raise NotImplementedError

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
        raise NotImplementedError

    def get_session(self, token: str) -> Optional[StoredSession]:
        raise NotImplementedError

    def delete_session(self, token: str) -> bool:
        raise NotImplementedError

    def delete_sessions_for_user(self, user_id: str) -> int:
        raise NotImplementedError

    def delete_accounts_for_user(self, user_id: str) -> int:
        raise NotImplementedError
