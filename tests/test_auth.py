from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from kita_admin.auth.service import AuthService
from kita_admin.core.exceptions import AuthenticationError, DuplicateEmail, ValidationError
from kita_admin.database.transaction import transaction
from kita_admin.extensions import db


def test_sign_up_creates_parent_with_profile(container, ctx):
    user_id = container.auth_service.sign_up(email="Eva@Kita.test", password="secret-123", name="Eva")

    user = container.users_repo.get_by_id(user_id)
    assert (user.email, user.role) == ("eva@kita.test", "parent")
    assert container.profiles_repo.get_parent_profile(user_id) is not None


def test_sign_up_rejects_duplicates_and_short_passwords(container, ctx):
    container.auth_service.sign_up(email="eva@kita.test", password="secret-123", name="Eva")

    with pytest.raises(DuplicateEmail):
        container.auth_service.sign_up(email="eva@kita.test", password="secret-456", name="Eva 2")
    with pytest.raises(ValidationError):
        container.auth_service.sign_up(email="kurz@kita.test", password="short", name="Kurz")


def test_sign_in_resolve_and_sign_out(container, ctx):
    container.auth_service.sign_up(email="eva@kita.test", password="secret-123", name="Eva")

    with pytest.raises(AuthenticationError):
        container.auth_service.sign_in(email="eva@kita.test", password="wrong-password")
    with pytest.raises(AuthenticationError):
        container.auth_service.sign_in(email="nobody@kita.test", password="secret-123")

    session = container.auth_service.sign_in(email="eva@kita.test", password="secret-123")
    resolved = container.auth_service.resolve(session.token)
    assert resolved.user_id == session.user_id
    assert resolved.get_id() == session.token

    container.auth_service.sign_out(session.token)
    assert container.auth_service.resolve(session.token) is None


def test_expired_session_is_dropped(container, ctx):
    clock = {"now": datetime(2024, 6, 1, 8, 0)}
    auth = AuthService(
        container.users_repo,
        container.auth_repo,
        container.profiles_repo,
        tx=lambda: transaction(db.session),
        session_days=7,
        clock=lambda: clock["now"],
    )
    auth.sign_up(email="eva@kita.test", password="secret-123", name="Eva")
    session = auth.sign_in(email="eva@kita.test", password="secret-123")

    clock["now"] += timedelta(days=6)
    assert auth.resolve(session.token) is not None

    clock["now"] += timedelta(days=2)
    assert auth.resolve(session.token) is None
    assert container.auth_repo.get_session(session.token) is None


def test_sign_up_api(client):
    resp = client.post("/api/auth/sign-up/email", json={"email": "eva@kita.test", "password": "secret-123", "name": "Eva"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["user"]["email"] == "eva@kita.test"
    assert body["user"]["role"] == "parent"

    again = client.post("/api/auth/sign-up/email", json={"email": "eva@kita.test", "password": "secret-123", "name": "Eva"})
    assert again.status_code == 400
    assert "error" in again.get_json()
