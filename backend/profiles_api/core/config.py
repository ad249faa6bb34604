from pydantic import BaseModel
from dotenv import load_dotenv
from sqlalchemy.engine import URL
import os

load_dotenv()


def _database_url() -> str:
    url = os.getenv("DATABASE_URL", "")
    if url:
        return url

    host = os.getenv("DATABASE_HOST", "")
    if not host:
        return "sqlite:///./profiles.db"

    port = os.getenv("DATABASE_PORT", "")
    return URL.create(
        drivername=os.getenv("DATABASE_DRIVER", "postgresql+psycopg2"),
        username=os.getenv("DATABASE_USERNAME") or None,
        password=os.getenv("DATABASE_PASSWORD") or None,
        host=host,
        port=int(port) if port else None,
        database=os.getenv("DATABASE_NAME") or None,
    ).render_as_string(hide_password=False)


def _bool_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _list_env(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name, "")
    items = [item.strip() for item in raw.split(",") if item.strip()]
    return items or default


class Settings(BaseModel):
    database_url: str = _database_url()
    db_isolation_level: str = os.getenv("DATABASE_ISOLATION_LEVEL", "READ COMMITTED")

    session_secret: str = os.getenv("SESSION_SECRET_KEY", "change-me")
    session_ttl_minutes: int = int(os.getenv("SESSION_TTL_MINUTES", "1440"))
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "session_id")
    session_cookie_secure: bool = _bool_env("SESSION_COOKIE_SECURE")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: list[str] = _list_env(
        "CORS_ORIGINS",
        ["http://localhost:3000", "http://127.0.0.1:3000"],
    )

settings = Settings()
