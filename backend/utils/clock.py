"""Injectable sources of the current calendar date."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from backend.utils.config import Settings, get_settings


class Clock(Protocol):
    def today(self) -> date:
        ...


class SystemClock:
    """Reads the local calendar date at call time."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Always reports the same date."""

    def __init__(self, current: date) -> None:
        self._current = current

    def today(self) -> date:
        return self._current


def build_clock(settings: Optional[Settings] = None) -> Clock:
    resolved = settings or get_settings()
    if resolved.fixed_today is not None:
        return FixedClock(resolved.fixed_today)
    return SystemClock()
