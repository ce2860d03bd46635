from __future__ import annotations

import pytest

from kita_admin.auth.guard import LOGIN_ROUTE, AccessDecision, dashboard_for_role, decide_access
from kita_admin.auth.model import SessionUser
from kita_admin.core.enums import Role


def _user(role: str) -> SessionUser:
    return SessionUser(token="t", user_id="u1", name="U", email="u@kita.test", role=role)


def test_login_route_without_session_is_allowed():
    decision = decide_access(None, is_login_route=True)
    assert decision.allowed
    assert decision.redirect_to is None


@pytest.mark.parametrize(
    "role,target",
    [("admin", "/admin"), ("parent", "/eltern"), ("employee", "/mitarbeiter"), ("janitor", "/")],
)
def test_login_route_with_session_redirects_to_role_dashboard(role, target):
    decision = decide_access(_user(role), is_login_route=True)
    assert not decision.allowed
    assert decision.redirect_to == target


def test_protected_area_without_session_redirects_to_login():
    decision = decide_access(None, allowed_roles=(Role.ADMIN,))
    assert decision == AccessDecision(allowed=False, redirect_to=LOGIN_ROUTE)


def test_wrong_role_is_sent_to_own_dashboard():
    decision = decide_access(_user("parent"), allowed_roles=(Role.ADMIN,))
    assert not decision.allowed
    assert decision.redirect_to == "/eltern"


def test_allowed_role_proceeds():
    decision = decide_access(_user("employee"), allowed_roles=(Role.EMPLOYEE,))
    assert decision.allowed


def test_unknown_role_dashboard_is_public_root():
    assert dashboard_for_role(None) == "/"
    assert dashboard_for_role("") == "/"
