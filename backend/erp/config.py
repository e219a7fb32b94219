# backend/erp/config.py
from __future__ import annotations
import os
from urllib.parse import quote_plus


def resolve_database_uri(environ=None) -> str:
    """
    Pick the storage engine from the environment.

    - DB_HOST + DB_USER: MySQL (PyMySQL driver)
    - DATABASE_URL: used as-is (PostgreSQL in production)
    - otherwise: local SQLite file
    """
    env = os.environ if environ is None else environ

    if env.get("DB_HOST") and env.get("DB_USER"):
        user = quote_plus(env["DB_USER"])
        password = quote_plus(env.get("DB_PASSWORD", ""))
        host = env["DB_HOST"]
        port = env.get("DB_PORT", "3306")
        name = env.get("DB_NAME", "admin_dashboard")
        return f"mysql+pymysql://{user}:{password}@{host}:{port}/{name}"

    url = env.get("DATABASE_URL")
    if url:
        # Heroku-style URLs are not accepted by SQLAlchemy 2.x
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        return url

    return "sqlite:///erp.sqlite3"


def _split_origins(raw: str) -> set[str]:
    return {o.strip() for o in raw.split(",") if o.strip()}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Tokens are signed with their own key when one is configured
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRES_HOURS = int(os.environ.get("JWT_EXPIRES_HOURS", "24"))

    SQLALCHEMY_DATABASE_URI = resolve_database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    DEFAULT_PAGE_SIZE = int(os.environ.get("DEFAULT_PAGE_SIZE", "10"))
    MAX_PAGE_SIZE = int(os.environ.get("MAX_PAGE_SIZE", "100"))

    # Role given to self-registered users
    DEFAULT_ROLE = os.environ.get("DEFAULT_ROLE", "viewer")

    CORS_ORIGINS = _split_origins(os.environ.get(
        "CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000",
    ))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
