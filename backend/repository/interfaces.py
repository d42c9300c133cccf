"""Narrow store contracts consumed by the booking engine."""

from __future__ import annotations

from typing import Protocol, Sequence

from backend.domain.models import Booking, Customer, Room


class RoomStore(Protocol):
    def get_all(self) -> Sequence[Room]:
        ...


class BookingStore(Protocol):
    def get_all(self) -> Sequence[Booking]:
        ...

    def add(self, booking: Booking) -> None:
        """Persist ``booking`` and write the generated id back onto it."""
        ...


class CustomerStore(Protocol):
    def get_all(self) -> Sequence[Customer]:
        ...
