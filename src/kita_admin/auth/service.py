from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import clean, require_fields, require_min_length
from ..core.constants import CREDENTIAL_PROVIDER, DEFAULT_SESSION_DAYS, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DuplicateEmail
from ..database.transaction import TransactionFactory
from ..profiles.repository import ProfileRepository
from ..users.repository import UserRepository
from .model import SessionUser
from .repository import AuthRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use cases: sign up, sign in, resolve and revoke login sessions."""

    def __init__(
        self,
        users: UserRepository,
        auth: AuthRepository,
        profiles: ProfileRepository,
        *,
        tx: TransactionFactory,
        session_days: int = DEFAULT_SESSION_DAYS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._users = users
        self._auth = auth
        self._profiles = profiles
        self._tx = tx
        self._session_days = session_days
        self._clock = clock

    def sign_up(self, *, email: str, password: str, name: str) -> str:
        fields = require_fields("Benutzer", "E-Mail, Passwort und Name sind erforderlich", email=email, password=password, name=name)
        require_min_length(password, "Passwort", MIN_PASSWORD_LENGTH)
        email = fields["email"].lower()

        now = self._clock()
        with self._tx():
            if self._users.get_by_email(email):
                raise DuplicateEmail("E-Mail bereits vorhanden")

            # New accounts start as parents; that is their first role assignment.
            user_id = self._users.create_user(name=fields["name"], email=email, role=Role.PARENT, now=now)
            self._auth.create_account(
                user_id=user_id,
                provider_id=CREDENTIAL_PROVIDER,
                password_hash=generate_password_hash(password),
                now=now,
            )
            self._profiles.create_parent_profile(user_id, now=now)

        logger.info("Signed up user %s", user_id)
        return user_id

    def sign_in(
        self,
        *,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> SessionUser:
        user = self._users.get_by_email(clean(email).lower())
        if not user:
            raise AuthenticationError("Anmeldung fehlgeschlagen")

        password_hash = self._auth.get_password_hash(user_id=user.user_id, provider_id=CREDENTIAL_PROVIDER)
        if not password_hash or not check_password_hash(password_hash, password or ""):
            raise AuthenticationError("Anmeldung fehlgeschlagen")

        now = self._clock()
        token = secrets.token_urlsafe(32)
        with self._tx():
            self._auth.create_session(
                user_id=user.user_id,
                token=token,
                expires_at=now + timedelta(days=self._session_days),
                ip_address=ip_address,
                user_agent=user_agent,
                now=now,
            )

        logger.info("User %s signed in", user.user_id)
        return SessionUser(token=token, user_id=user.user_id, name=user.name, email=user.email, role=user.role)

    def resolve(self, token: Optional[str]) -> Optional[SessionUser]:
        if not token:
            return None

        stored = self._auth.get_session(token)
        if not stored:
            return None

        if stored.expires_at <= self._clock():
            with self._tx():
                self._auth.delete_session(token)
            return None

        user = self._users.get_by_id(stored.user_id)
        if not user:
            return None
        return SessionUser(token=token, user_id=user.user_id, name=user.name, email=user.email, role=user.role)

    def sign_out(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._tx():
            self._auth.delete_session(token)
