"""Booking decision logic: stay validation, room search and occupancy."""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

from backend.domain.constraints import (
    as_calendar_date,
    validate_date_order,
    validate_stay,
)
from backend.domain.models import Booking
from backend.repository.interfaces import BookingStore, RoomStore
from backend.utils.clock import Clock, SystemClock
from backend.utils.logger import get_logger


logger = get_logger(__name__)

NO_ROOM_AVAILABLE = -1


class BookingManager:
    """Decides where a stay can go and which dates are sold out.

    The manager holds no state of its own. Every call reads the current rooms
    and bookings from the injected stores, so two callers racing for the same
    room can both pass the availability check before either write lands.
    Serializing those attempts is left to the store.
    """

    def __init__(
        self,
        booking_store: BookingStore,
        room_store: RoomStore,
        clock: Optional[Clock] = None,
    ) -> None:
        self._booking_store = booking_store
        self._room_store = room_store
        self._clock = clock or SystemClock()

    def validate_stay(self, start_date: date, end_date: date) -> None:
        validate_stay(start_date, end_date, self._clock.today())

    def create_booking(self, booking: Booking) -> bool:
        """Place ``booking`` in the first free room and persist it.

        Returns ``False`` without writing anything when every room is taken.
        """
        self.validate_stay(booking.start_date, booking.end_date)

        room_id = self.find_available_room(booking.start_date, booking.end_date)
        if room_id == NO_ROOM_AVAILABLE:
            logger.info(
                "No room available for %s to %s",
                booking.start_date,
                booking.end_date,
            )
            return False

        booking.start_date = as_calendar_date(booking.start_date)
        booking.end_date = as_calendar_date(booking.end_date)
        booking.room_id = room_id
        booking.is_active = True
        self._booking_store.add(booking)
        logger.info(
            "Booked room %s for %s to %s",
            room_id,
            booking.start_date,
            booking.end_date,
        )
        return True

    def find_available_room(self, start_date: date, end_date: date) -> int:
        """Return the id of the first room free for the whole stay, else -1."""
        self.validate_stay(start_date, end_date)
        start_date = as_calendar_date(start_date)
        end_date = as_calendar_date(end_date)

        active_bookings = [b for b in self._booking_store.get_all() if b.is_active]
        for room in self._room_store.get_all():
            room_bookings = [b for b in active_bookings if b.room_id == room.id]
            if not any(b.overlaps(start_date, end_date) for b in room_bookings):
                return room.id
        return NO_ROOM_AVAILABLE

    def get_fully_occupied_dates(self, start_date: date, end_date: date) -> List[date]:
        """List every date in the range on which active bookings fill all rooms.

        Occupancy counts bookings rather than distinct rooms, so two active
        bookings stacked on one room fill two slots.
        """
        validate_date_order(start_date, end_date)
        start_date = as_calendar_date(start_date)
        end_date = as_calendar_date(end_date)

        room_count = len(self._room_store.get_all())
        active_bookings = [b for b in self._booking_store.get_all() if b.is_active]
        if not active_bookings:
            return []

        fully_occupied: List[date] = []
        for offset in range((end_date - start_date).days + 1):
            day = start_date + timedelta(days=offset)
            occupied = sum(1 for b in active_bookings if b.covers(day))
            if occupied >= room_count:
                fully_occupied.append(day)

        logger.debug(
            "Found %s fully occupied dates between %s and %s",
            len(fully_occupied),
            start_date,
            end_date,
        )
        return fully_occupied
