import os
import urllib.parse


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "kita-dev-secret"

    # DB settings
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "kita_db")

    # Dev helpers
    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
    AUTO_SEED_DB = bool(int(os.environ.get("AUTO_SEED_DB", "0")))
    SEED_PROFILE = os.environ.get("SEED_PROFILE", "demo")

    SESSION_DAYS = int(os.environ.get("SESSION_DAYS", "7"))
    MAX_UPLOAD_BYTES = 5 * 1024 * 1024
    # Multipart framing on top of one full-size image
    MAX_CONTENT_LENGTH = MAX_UPLOAD_BYTES + 64 * 1024
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def mysql_uri(*, user: str, password: str, host: str, port: int, database: str) -> str:
    # Password may contain '@' or ':'
    encoded_password = urllib.parse.quote_plus(password)
    return f"mysql+mysqlconnector://{user}:{encoded_password}@{host}:{port}/{database}"


def database_uri() -> str:
    return os.environ.get("DATABASE_URL") or mysql_uri(
        user=Config.DB_USER,
        password=Config.DB_PASSWORD,
        host=Config.DB_HOST,
        port=Config.DB_PORT,
        database=Config.DB_NAME,
    )
