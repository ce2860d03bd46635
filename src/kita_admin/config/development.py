import os

from .config import Config, database_uri

SECRET_KEY = Config.SECRET_KEY

SQLALCHEMY_DATABASE_URI = database_uri()
SQLALCHEMY_TRACK_MODIFICATIONS = False

DEBUG = True

# If enabled, app creates missing tables on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = Config.AUTO_SEED_DB
SEED_PROFILE = Config.SEED_PROFILE

SESSION_DAYS = Config.SESSION_DAYS
ENABLE_TEST_API = True
UPLOAD_DIR = None
MAX_UPLOAD_BYTES = Config.MAX_UPLOAD_BYTES
MAX_CONTENT_LENGTH = Config.MAX_CONTENT_LENGTH
LOG_LEVEL = "DEBUG"
