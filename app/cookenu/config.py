import os
from dataclasses import dataclass

from sqlalchemy.engine import URL


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    database_url: str
    port: int
    token_ttl_seconds: int
    log_level: str
    web_concurrency: int
    web_timeout: int


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getenv_int(name: str, default: int, *, minimum: int | None = None, maximum: int | None = None) -> int:
    raw = _getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer (got {raw!r}).")
    if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
        raise RuntimeError(f"{name} must be between {minimum} and {maximum} (got {value}).")
    return value


def _database_url() -> str:
    """
    DATABASE_URL wins. Otherwise compose one from the DB_* variables,
    and fall back to a local SQLite file when no host is configured.
    """
    url = _getenv("DATABASE_URL")
    if url:
        return url
    host = _getenv("DB_HOST")
    if not host:
        return "sqlite:///cookenu.db"
    port = _getenv("DB_PORT")
    return URL.create(
        drivername=_getenv("DB_DRIVER", "postgresql+psycopg"),
        username=_getenv("DB_USER") or None,
        password=_getenv("DB_PASSWORD") or None,
        host=host,
        port=int(port) if port else None,
        database=_getenv("DB_DATABASE") or None,
    ).render_as_string(hide_password=False)


def load_settings() -> Settings:
    return Settings(
        secret_key=_getenv("SECRET_KEY", "change-me"),
        env=_getenv("ENV", "development"),
        database_url=_database_url(),
        port=_getenv_int("PORT", 3003, minimum=1, maximum=65535),
        token_ttl_seconds=_getenv_int("TOKEN_TTL_SECONDS", 0),
        log_level=_getenv("LOG_LEVEL", "INFO").upper(),
        # Gunicorn sizing, only read by scripts/start.py.
        web_concurrency=_getenv_int("WEB_CONCURRENCY", 2, minimum=1, maximum=64),
        web_timeout=_getenv_int("WEB_TIMEOUT", 60, minimum=1, maximum=3600),
    )


def load_config() -> dict:
    s = load_settings()
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "DATABASE_URL": s.database_url,
        "PORT": s.port,
        "TOKEN_TTL_SECONDS": s.token_ttl_seconds,
        "LOG_LEVEL": s.log_level,
    }
