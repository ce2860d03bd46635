from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: User account.

    Note: plain data object, no DB access code here. ``role`` is kept as the
    stored string so an unknown value can still be routed by the guard.
    """

    user_id: str
    name: str
    email: str
    role: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
