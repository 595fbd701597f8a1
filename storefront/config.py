# storefront/config.py
import os
from dotenv import load_dotenv

BASE_DIR = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(BASE_DIR, ".env"))

INSTANCE_DIR = os.path.join(BASE_DIR, "instance")


def _env(key: str, default=None):
    v = os.getenv(key)
    return v if v not in (None, "", "None") else default


def _env_int(key: str, default: int) -> int:
    try:
        return int(_env(key, default))
    except (TypeError, ValueError):
        return default


def _env_list(key: str, default: str = "") -> list[str]:
    raw = _env(key, default) or ""
    return [part.strip() for part in raw.split(",") if part.strip()]


def _resolve_sqlite_uri(db_url: str | None) -> str:
    if not db_url:
        db_path = os.path.join(INSTANCE_DIR, "storefront.db")
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
        return "sqlite:///" + db_path.replace("\\", "/")

    if db_url.startswith("sqlite:///"):
        raw_path = db_url.replace("sqlite:///", "", 1)
        if not os.path.isabs(raw_path):
            raw_path = os.path.join(BASE_DIR, raw_path)
        db_path = os.path.normpath(raw_path)
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
        return "sqlite:///" + db_path.replace("\\", "/")

    # SQLAlchemy 2 rejects the postgres:// scheme
    if db_url.startswith("postgres://"):
        return db_url.replace("postgres://", "postgresql://", 1)

    return db_url


class Config:
    SECRET_KEY = _env("SECRET_KEY", "dev-please-change-me")
    LOG_LEVEL = _env("LOG_LEVEL", "INFO")

    SQLALCHEMY_DATABASE_URI = _resolve_sqlite_uri(_env("DATABASE_URL"))
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_AS_ASCII = False

    CORS_ORIGINS = _env_list(
        "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
    )

    # Single operator account
    ADMIN_USERNAME = _env("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD = _env("ADMIN_PASSWORD")
    ADMIN_PASSWORD_HASH = _env("ADMIN_PASSWORD_HASH")
    ADMIN_TOKEN_SALT = _env("ADMIN_TOKEN_SALT", "storefront-admin")
    ADMIN_TOKEN_MAX_AGE = _env_int("ADMIN_TOKEN_MAX_AGE", 12 * 60 * 60)

    TELEGRAM_BOT_TOKEN = _env("TELEGRAM_BOT_TOKEN")
    TELEGRAM_CHAT_ID = _env("TELEGRAM_CHAT_ID")
    TELEGRAM_API_BASE = _env("TELEGRAM_API_BASE", "https://api.telegram.org")
    TELEGRAM_TIMEOUT = _env_int("TELEGRAM_TIMEOUT", 8)

    DELIVERY_FEE = _env("DELIVERY_FEE", "25.00")
    CURRENCY_SYMBOL = _env("CURRENCY_SYMBOL", "₪")
