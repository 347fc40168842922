"""Application configuration.

Environment variables override all defaults. A ``.env`` file next to the
backend directory is loaded for local development.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from sqlalchemy.engine import URL

_BACKEND_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=_BACKEND_DIR / ".env", override=False)


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    # Store connection
    POSTGRES_DATABASE: str = os.getenv("POSTGRES_DATABASE", "invoicedesk")
    POSTGRES_HOST: str = os.getenv("POSTGRES_HOST", "localhost")
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "")
    POSTGRES_PORT: int = int(os.getenv("POSTGRES_PORT", "5432"))
    # Upper bound on concurrent connections; the pool never overflows it
    POSTGRES_MAX_POOL: int = int(os.getenv("POSTGRES_MAX_POOL", "10"))

    # Log every SQL statement (development only)
    SQL_ECHO: bool = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    CORS_ORIGINS: List[str] = _split_csv(
        os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000",
        )
    )

    # Fill empty tables with placeholder customers, invoices and revenue on startup
    SEED_PLACEHOLDER_DATA: bool = os.getenv("SEED_PLACEHOLDER_DATA", "false").lower() in ("1", "true", "yes")

    # Where the dashboard lands after a successful invoice write
    INVOICES_REDIRECT_PATH: str = os.getenv("INVOICES_REDIRECT_PATH", "/dashboard/invoices")

    @property
    def DATABASE_URL(self) -> str:
        explicit = os.getenv("DATABASE_URL", "").strip()
        if explicit:
            return explicit
        url = URL.create(
            "postgresql+asyncpg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD or None,
            host=self.POSTGRES_HOST,
            port=self.POSTGRES_PORT,
            database=self.POSTGRES_DATABASE,
        )
        return url.render_as_string(hide_password=False)


settings = Settings()
