# core/config.py
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _async_url(url: str) -> str:
    """
    Plain postgres URLs (Render / Supabase style) are rewritten to the asyncpg driver
    """
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix):]
    return url


@dataclass(frozen=True)
class Settings:
    database_url: str
    port: int = 5130
    base_url: str = "http://localhost"
    log_level: str = "info"
    log_dir: Optional[str] = "logs"
    sql_echo: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        database_url = os.getenv("DATABASE_URL")
        if not database_url:
            raise RuntimeError("DATABASE_URL is not set in environment variables")

        return cls(
            database_url=_async_url(database_url),
            port=int(os.getenv("PORT", "5130")),
            base_url=os.getenv("URL", "http://localhost"),
            log_level=os.getenv("LOG_LEVEL", "info"),
            log_dir=os.getenv("LOG_DIR", "logs") or None,
            sql_echo=os.getenv("SQL_ECHO", "").lower() in ("1", "true", "yes"),
        )
