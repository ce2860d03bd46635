from __future__ import annotations

import logging
from datetime import datetime

import mysql.connector
from sqlalchemy import inspect, select
from sqlalchemy.engine import make_url
from werkzeug.security import generate_password_hash

from ..core.constants import CREDENTIAL_PROVIDER
from ..core.enums import Role
from ..extensions import db
from .models import AccountRow, UserRow

logger = logging.getLogger(__name__)


def ensure_database_exists(uri: str) -> None:
    """Create the MySQL database named in ``uri`` if the server lacks it.

    Other backends are left alone.
    """
    url = make_url(uri)
    if not url.drivername.startswith("mysql"):
        return

    conn = mysql.connector.connect(
        host=url.host or "localhost",
        port=url.port or 3306,
        user=url.username or "root",
        password=url.password or "",
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{url.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def init_schema() -> None:
    """Create missing tables. Must run inside an app context."""
    db.create_all()


def list_tables() -> list[str]:
    return sorted(inspect(db.engine).get_table_names())


def ensure_admin(email: str, password: str, name: str = "Administrator") -> str:
    """Insert or reset an admin account with a credential password."""
    email = email.strip().lower()
    now = datetime.now()
    password_hash = generate_password_hash(password)

    user = db.session.scalar(select(UserRow).where(UserRow.email == email))
    if user:
        user.name = name
        user.role = Role.ADMIN.value
        user.updated_at = now
    else:
        user = UserRow(name=name, email=email, role=Role.ADMIN.value, created_at=now, updated_at=now)
        db.session.add(user)
        db.session.flush()

    account = db.session.scalar(
        select(AccountRow).where(AccountRow.user_id == user.id, AccountRow.provider_id == CREDENTIAL_PROVIDER)
    )
    if account:
        account.password = password_hash
        account.updated_at = now
    else:
        db.session.add(
            AccountRow(
                user_id=user.id,
                account_id=user.id,
                provider_id=CREDENTIAL_PROVIDER,
                password=password_hash,
                created_at=now,
                updated_at=now,
            )
        )

    db.session.commit()
    logger.info("Admin account %s ready", email)
    return user.id
