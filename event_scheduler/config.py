"""
Event Scheduler - Centralized configuration.

Loads all settings from .env (and the process environment). Every key has
a default, so an empty environment yields a working CSV-backed setup.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (one level up from event_scheduler/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)

_BACKENDS = {"csv", "sqlite", "memory"}


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Storage backend: "csv" | "sqlite" | "memory"
    STORAGE_BACKEND: str = "csv"

    # CSV store (only used when STORAGE_BACKEND=csv)
    EVENTS_FILE: str = "events.csv"
    RECURRING_FILE: str = "recurrent.csv"

    # SQLite store (only used when STORAGE_BACKEND=sqlite)
    DATABASE_PATH: str = "data/events.db"

    # Undo an in-memory change when its write-through fails
    ROLLBACK_ON_SAVE_FAILURE: bool = False

    # Reminders
    REMINDER_MINUTES: int = 15

    LOG_LEVEL: str = "INFO"

    @field_validator("STORAGE_BACKEND", mode="before")
    @classmethod
    def parse_backend(cls, v: str) -> str:
        backend = str(v).strip().lower()
        if backend not in _BACKENDS:
            raise ValueError(f"STORAGE_BACKEND must be one of {sorted(_BACKENDS)}, got {v!r}")
        return backend

    @field_validator("ROLLBACK_ON_SAVE_FAILURE", mode="before")
    @classmethod
    def parse_flag(cls, v: str | bool) -> bool:
        if isinstance(v, bool):
            return v
        return str(v).strip().lower() in {"1", "true", "yes", "on"}

    @field_validator("REMINDER_MINUTES", mode="before")
    @classmethod
    def parse_minutes(cls, v: str | int) -> int:
        return int(v)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def parse_level(cls, v: str) -> str:
        return str(v).strip().upper() or "INFO"


def _load_settings() -> Settings:
    """Load settings from environment."""
    return Settings(
        STORAGE_BACKEND=os.getenv("STORAGE_BACKEND", "csv"),
        EVENTS_FILE=os.getenv("EVENTS_FILE", "events.csv"),
        RECURRING_FILE=os.getenv("RECURRING_FILE", "recurrent.csv"),
        DATABASE_PATH=os.getenv("DATABASE_PATH", "data/events.db"),
        ROLLBACK_ON_SAVE_FAILURE=os.getenv("ROLLBACK_ON_SAVE_FAILURE", "false"),
        REMINDER_MINUTES=os.getenv("REMINDER_MINUTES", "15"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
    )


# Singleton, imported by other modules as:
#   from event_scheduler.config import settings
settings = _load_settings()
