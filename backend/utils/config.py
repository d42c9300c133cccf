"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Optional


_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str
    database_path: Path
    seed_demo_data: bool
    fixed_today: Optional[date]


def _parse_fixed_today(raw: Optional[str]) -> Optional[date]:
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise ValueError("HOTEL_FIXED_TODAY must follow YYYY-MM-DD format") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings once per process; tests clear the cache to rebuild."""
    return Settings(
        app_name=os.getenv("HOTEL_APP_NAME", "Hotel Booking Service"),
        app_version=os.getenv("HOTEL_APP_VERSION", "1.0.0"),
        log_level=os.getenv("HOTEL_LOG_LEVEL", "INFO"),
        database_path=Path(os.getenv("HOTEL_DATABASE_PATH", "data/hotel_booking.db")),
        seed_demo_data=os.getenv("HOTEL_SEED_DEMO_DATA", "true").lower() in _TRUTHY,
        fixed_today=_parse_fixed_today(os.getenv("HOTEL_FIXED_TODAY")),
    )
