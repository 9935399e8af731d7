"""Application settings and validation."""

import os
from pathlib import Path
from typing import List, Optional

BASE = Path(__file__).resolve().parent.parent


class Settings:
    ENV: str
    DATABASE_URL: str
    DB_ECHO: bool
    CORS_ORIGINS: List[str]
    ALLOW_DEV_CORS: bool
    LOG_LEVEL: str

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self._database_url: Optional[str] = os.getenv("DATABASE_URL") or None
        self.DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"
        self.CORS_ORIGINS = [
            o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:4200").split(",") if o.strip()
        ]
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true" if self.ENV == "dev" else "false").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self._validate()
        # Local runs fall back to a SQLite file; any other environment must name its store.
        self.DATABASE_URL = self._database_url or f"sqlite:///{BASE / 'app.db'}"

    def _validate(self):
        if self.ENV != "dev" and not self._database_url:
            raise RuntimeError("DATABASE_URL must be set in non-dev environments")

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()
