from __future__ import annotations

from datetime import datetime

import pytest

from kita_admin.main import create_app

ADMIN_PASSWORD = "admin-pass-123"


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 6, 15, 10, 30, 0)


@pytest.fixture
def app(tmp_path, monkeypatch):
    # Each app gets its own in-memory SQLite engine, so tests never share rows.
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app({"UPLOAD_DIR": str(tmp_path / "uploads")})
    yield app


@pytest.fixture
def container(app):
    return app.extensions["kita_container"]


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app, container):
    """Create a user with a credential login and the given role; returns the user id."""

    def _make(email: str, role: str = "parent", *, name: str = "Test User", password: str = ADMIN_PASSWORD) -> str:
        with app.app_context():
            user_id = container.auth_service.sign_up(email=email, password=password, name=name)
            if role != "parent":
                container.lifecycle.set_role(user_id, role)
        return user_id

    return _make


@pytest.fixture
def login_as(client, make_user):
    """Sign the test client in as a fresh user with ``role``."""

    def _login(role: str = "admin", email: str | None = None) -> str:
        email = email or f"{role}@kita.test"
        user_id = make_user(email, role)
        resp = client.post("/admin/login", data={"email": email, "password": ADMIN_PASSWORD})
        assert resp.status_code == 302
        return user_id

    return _login
