"""
Centralised application settings loaded from environment / .env file.

Uses pydantic-settings so every value can be overridden via env vars
or the .env file at the project root.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

PERSISTENCE_SCOPES = ("session", "durable")


class Settings(BaseSettings):
    # ── Project ──────────────────────────────────────────────────────
    PROJECT_NAME: str = "Timeclock"
    VERSION: str = "1.0.0"
    API_V1_PREFIX: str = "/api/v1"

    # ── Storage ──────────────────────────────────────────────────────
    # session: per-client memory, gone when the session ends
    # durable: SQL key-value table, survives restarts
    PERSISTENCE_SCOPE: str = "session"
    STORAGE_KEY: str = "userAttendanceData"
    DATABASE_URL: str = "sqlite:///./timeclock.db"

    # ── Roster ───────────────────────────────────────────────────────
    ROSTER_FILE: str | None = None

    # ── Kiosk session ────────────────────────────────────────────────
    SESSION_COOKIE_NAME: str = "timeclock_session"
    # Oldest sessions (and their session-scope data) are dropped past this
    SESSION_LIMIT: int = Field(default=1000, ge=1)

    # ── CORS ─────────────────────────────────────────────────────────
    CORS_ORIGINS: list[str] = [
        "http://localhost",
        "http://localhost:8000",
        "http://127.0.0.1",
        "http://127.0.0.1:8000",
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors(cls, v: object) -> list[str]:
        if isinstance(v, str) and not v.lstrip().startswith("["):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v  # type: ignore[return-value]

    @field_validator("PERSISTENCE_SCOPE")
    @classmethod
    def _scope(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in PERSISTENCE_SCOPES:
            raise ValueError(f"PERSISTENCE_SCOPE must be one of: {PERSISTENCE_SCOPES}")
        return v

    # ── Logging ──────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


settings = Settings()
