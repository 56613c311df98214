from __future__ import annotations

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Local key-value storage (stands in for the browser's localStorage)
    STORAGE_BACKEND: Literal["file", "memory"] = "file"
    STORAGE_PATH: str = ".workout_planner/local_storage.json"

    # Plan policies
    DEFAULT_PLAN_NAME: str = "My Workout"
    CLEARED_PLAN_NAME: str = "New Workout"
    CLEAR_RESETS_PLAN_NAME: bool = True
    DEFAULT_SETS: int = 3
    DEFAULT_REPS: int = 10
    DEFAULT_WEIGHT: int = 20


_SECRET_KEYS = [
    "APP_ENV",
    "LOG_LEVEL",
    "STORAGE_BACKEND",
    "STORAGE_PATH",
    "CLEAR_RESETS_PLAN_NAME",
]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Allow Streamlit Cloud secrets to override or provide env values
    overrides: dict = {}
    try:
        import streamlit as _st  # type: ignore
        sec = getattr(_st, "secrets", None)
        if sec:
            for k in _SECRET_KEYS:
                if k in sec and sec[k] is not None and sec[k] != "":
                    overrides[k] = sec[k]
    except Exception:
        # No secrets.toml (or Streamlit not running): env and .env only
        pass
    return Settings(**overrides)  # type: ignore[call-arg]
