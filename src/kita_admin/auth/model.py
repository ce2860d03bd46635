from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from flask_login import UserMixin


@dataclass(frozen=True)
class SessionUser(UserMixin):
    """What a request handler gets to know about the signed-in user.

    Flask-Login stores ``get_id()`` in the cookie; here that is the session
    token, so revoking the session row logs the browser out.
    """

    token: str
    user_id: str
    name: str
    email: str
    role: str

    def get_id(self) -> str:
        return self.token


@dataclass(frozen=True)
class StoredSession:
    token: str
    user_id: str
    expires_at: datetime
