"""Domain models for rooms, customers and bookings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Room:
    id: int
    description: str


@dataclass(frozen=True)
class Customer:
    id: int
    name: str
    email: str


@dataclass
class Booking:
    """A stay request or a persisted stay.

    The booking engine fills in ``room_id`` and ``is_active`` when it accepts
    the stay; the store fills in ``id`` when it persists it.
    """

    start_date: date
    end_date: date
    customer_id: int = 0
    room_id: int = 0
    is_active: bool = False
    id: int = 0

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, start_date: date, end_date: date) -> bool:
        """True when the inclusive ranges share at least one calendar date."""
        return not (end_date < self.start_date or start_date > self.end_date)
