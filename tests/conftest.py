from __future__ import annotations

from datetime import date

import pytest

from backend.domain.models import Booking, Room


TODAY = date(2026, 10, 19)


class RecordingRoomStore:
    def __init__(self, rooms: list[Room], calls: list[str]) -> None:
        self.rooms = rooms
        self._calls = calls

    def get_all(self) -> list[Room]:
        self._calls.append("rooms.get_all")
        return list(self.rooms)


class RecordingBookingStore:
    def __init__(self, bookings: list[Booking], calls: list[str]) -> None:
        self.bookings = bookings
        self.added: list[Booking] = []
        self._calls = calls

    def get_all(self) -> list[Booking]:
        self._calls.append("bookings.get_all")
        return list(self.bookings)

    def add(self, booking: Booking) -> None:
        self._calls.append("bookings.add")
        booking.id = len(self.bookings) + 1
        self.bookings.append(booking)
        self.added.append(booking)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def store_calls() -> list[str]:
    return []


@pytest.fixture
def room_store(store_calls) -> RecordingRoomStore:
    return RecordingRoomStore([], store_calls)


@pytest.fixture
def booking_store(store_calls) -> RecordingBookingStore:
    return RecordingBookingStore([], store_calls)
