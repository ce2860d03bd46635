"""Access guard for role areas.

The decision itself is a pure function of (session, allowed roles, route);
``role_required`` only reads the Flask-Login user once at the boundary and
hands it to the view as ``auth``.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Iterable, Optional

from flask import redirect
from flask_login import current_user

from ..core.enums import Role
from .model import SessionUser

LOGIN_ROUTE = "/admin/login"

_DASHBOARDS = {
    Role.ADMIN.value: "/admin",
    Role.PARENT.value: "/eltern",
    Role.EMPLOYEE.value: "/mitarbeiter",
}


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    redirect_to: Optional[str] = None


def dashboard_for_role(role: Optional[str]) -> str:
    return _DASHBOARDS.get(role or "", "/")


def decide_access(
    user: Optional[SessionUser],
    *,
    allowed_roles: Iterable[Role] = (),
    is_login_route: bool = False,
) -> AccessDecision:
    if is_login_route:
        if user is None:
            return AccessDecision(allowed=True)
        return AccessDecision(allowed=False, redirect_to=dashboard_for_role(user.role))

    if user is None:
        return AccessDecision(allowed=False, redirect_to=LOGIN_ROUTE)

    if user.role not in {r.value for r in allowed_roles}:
        return AccessDecision(allowed=False, redirect_to=dashboard_for_role(user.role))

    return AccessDecision(allowed=True)


def session_user() -> Optional[SessionUser]:
    """The signed-in user of this request, or None."""
    if current_user.is_authenticated:
        return current_user._get_current_object()
    return None


def role_required(*roles: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = session_user()
            decision = decide_access(user, allowed_roles=roles)
            if not decision.allowed:
                return redirect(decision.redirect_to)
            return view(*args, auth=user, **kwargs)

        return wrapper

    return decorator
