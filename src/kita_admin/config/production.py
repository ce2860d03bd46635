import os

from .config import Config, database_uri

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

SQLALCHEMY_DATABASE_URI = database_uri()
SQLALCHEMY_TRACK_MODIFICATIONS = False

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = False
SEED_PROFILE = Config.SEED_PROFILE

SESSION_DAYS = Config.SESSION_DAYS
# /api/test/* is never served in production
ENABLE_TEST_API = False
UPLOAD_DIR = os.getenv("UPLOAD_DIR") or None
MAX_UPLOAD_BYTES = Config.MAX_UPLOAD_BYTES
MAX_CONTENT_LENGTH = Config.MAX_CONTENT_LENGTH
LOG_LEVEL = Config.LOG_LEVEL
