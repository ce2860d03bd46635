SECRET_KEY = "test-secret"

SQLALCHEMY_DATABASE_URI = "sqlite://"
SQLALCHEMY_TRACK_MODIFICATIONS = False

DEBUG = False
TESTING = True

AUTO_INIT_DB = True
AUTO_SEED_DB = False
SEED_PROFILE = "testing"

SESSION_DAYS = 7
ENABLE_TEST_API = True
UPLOAD_DIR = None
MAX_UPLOAD_BYTES = 5 * 1024 * 1024
MAX_CONTENT_LENGTH = MAX_UPLOAD_BYTES + 64 * 1024
LOG_LEVEL = "WARNING"
