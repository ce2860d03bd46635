from __future__ import annotations

import importlib
import logging
import os

from dotenv import load_dotenv
from flask import Flask
from sqlalchemy.engine import make_url

from .announcements.controller import register as register_announcements
from .auth.controller import register as register_auth
from .children.controller import register as register_children
from .config import get_settings_module
from .container import build_container
from .core.constants import DEFAULT_SESSION_DAYS, MAX_UPLOAD_BYTES
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import ensure_database_exists, init_schema, list_tables
from .database.seeds import run_seed
from .extensions import db, login_manager
from .groups.controller import register as register_groups
from .meals.controller import register as register_meals
from .portal.controller import register as register_portal
from .profiles.controller import register as register_profiles
from .schedules.controller import register as register_schedules
from .teachers.controller import register as register_teachers
from .uploads.controller import register as register_uploads
from .users.controller import register as register_users

logger = logging.getLogger("kita_admin")

_SETTING_KEYS = (
    "SECRET_KEY",
    "SQLALCHEMY_DATABASE_URI",
    "SQLALCHEMY_TRACK_MODIFICATIONS",
    "DEBUG",
    "TESTING",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
    "SEED_PROFILE",
    "SESSION_DAYS",
    "ENABLE_TEST_API",
    "UPLOAD_DIR",
    "MAX_UPLOAD_BYTES",
    "MAX_CONTENT_LENGTH",
    "LOG_LEVEL",
)


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logger.setLevel(level)


def create_app(config_override: dict | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    for key in _SETTING_KEYS:
        if hasattr(settings, key):
            app.config[key] = getattr(settings, key)
    if config_override:
        app.config.update(config_override)

    if not app.config.get("UPLOAD_DIR"):
        app.config["UPLOAD_DIR"] = os.path.join(app.static_folder, "uploads")

    _configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    uri = app.config["SQLALCHEMY_DATABASE_URI"]
    logger.info("settings=%s db=%s", settings_module, make_url(uri).render_as_string(hide_password=True))

    db.init_app(app)
    login_manager.init_app(app)

    if app.config.get("AUTO_INIT_DB"):
        ensure_database_exists(uri)
        with app.app_context():
            init_schema()
            logger.info("schema ready (tables=%d)", len(list_tables()))
    if app.config.get("AUTO_SEED_DB"):
        with app.app_context():
            run_seed(app.config.get("SEED_PROFILE", "demo"))

    container = build_container(
        db=db,
        session_days=int(app.config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS)),
        upload_dir=app.config["UPLOAD_DIR"],
        max_upload_bytes=int(app.config.get("MAX_UPLOAD_BYTES", MAX_UPLOAD_BYTES)),
    )
    app.extensions["kita_container"] = container

    register_auth(app, container)
    register_dashboard(app, container)
    register_portal(app, container)
    register_users(app, container)
    register_profiles(app, container)
    register_groups(app, container)
    register_children(app, container)
    register_teachers(app, container)
    register_schedules(app, container)
    register_meals(app, container)
    register_announcements(app, container)
    register_uploads(app, container)

    return app
