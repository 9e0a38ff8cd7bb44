"""
Environment-driven settings.

`.env` is loaded without overriding variables that are already set, so the
process environment always wins.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from opsboard.errors import ConfigError

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


@dataclass(frozen=True)
class Settings:
    supabase_url: str = ""
    supabase_key: str = ""
    activity_limit: int = 20
    project_limit: int = 10
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"

    def require_supabase(self) -> None:
        missing = [name for name, value in (("SUPABASE_URL", self.supabase_url), ("SUPABASE_KEY", self.supabase_key)) if not value]
        if missing:
            raise ConfigError(f"Missing required environment variable(s): {', '.join(missing)}")


def _get_env(name: str, default: Optional[str] = None) -> str:
    value = os.getenv(name, default)
    return (value or "").strip()


def _get_int(name: str, default: int) -> int:
    raw = _get_env(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def _get_list(name: str, default: List[str]) -> List[str]:
    raw = _get_env(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        supabase_url=_get_env("SUPABASE_URL"),
        supabase_key=_get_env("SUPABASE_KEY") or _get_env("SUPABASE_SERVICE_KEY"),
        activity_limit=_get_int("OPSBOARD_ACTIVITY_LIMIT", 20),
        project_limit=_get_int("OPSBOARD_PROJECT_LIMIT", 10),
        cors_origins=_get_list("OPSBOARD_CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
        log_level=_get_env("OPSBOARD_LOG_LEVEL", "INFO").upper() or "INFO",
    )
