from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from backend.domain.constraints import InvalidDateRangeError
from backend.domain.models import Booking, Room
from backend.services.booking_service import NO_ROOM_AVAILABLE, BookingManager
from backend.utils.clock import FixedClock


def _days(today: date, offset: int) -> date:
    return today + timedelta(days=offset)


def _manager(booking_store, room_store, today: date) -> BookingManager:
    return BookingManager(
        booking_store=booking_store,
        room_store=room_store,
        clock=FixedClock(today),
    )


def _active(booking_id: int, room_id: int, start: date, end: date) -> Booking:
    return Booking(
        id=booking_id,
        start_date=start,
        end_date=end,
        room_id=room_id,
        customer_id=1,
        is_active=True,
    )


# --- find_available_room ---

def test_first_room_returned_when_no_bookings(booking_store, room_store, today):
    room_store.rooms = [Room(1, "A"), Room(2, "B")]
    manager = _manager(booking_store, room_store, today)

    assert manager.find_available_room(_days(today, 1), _days(today, 3)) == 1


def test_no_room_when_only_room_is_booked(booking_store, room_store, today):
    room_store.rooms = [Room(1, "A")]
    booking_store.bookings = [_active(1, 1, _days(today, 1), _days(today, 5))]
    manager = _manager(booking_store, room_store, today)

    assert manager.find_available_room(_days(today, 2), _days(today, 4)) == NO_ROOM_AVAILABLE


def test_inactive_booking_is_ignored(booking_store, room_store, today):
    room_store.rooms = [Room(1, "A")]
    cancelled = _active(1, 1, _days(today, 1), _days(today, 10))
    cancelled.is_active = False
    booking_store.bookings = [cancelled]
    manager = _manager(booking_store, room_store, today)

    assert manager.find_available_room(_days(today, 2), _days(today, 4)) == 1


@pytest.mark.parametrize(
    ("request_start", "request_end", "existing_start", "existing_end", "available"),
    [
        (1, 5, 3, 7, False),   # overlaps the existing start
        (1, 5, 4, 6, False),   # overlaps in the middle
        (3, 7, 1, 5, False),   # overlaps the existing end
        (2, 6, 3, 5, False),   # contains the existing stay
        (3, 5, 2, 6, False),   # contained in the existing stay
        (1, 3, 3, 7, False),   # request ends on the existing start day
        (5, 7, 1, 5, False),   # request starts on the existing end day
        (1, 3, 5, 7, True),    # entirely before
        (5, 7, 1, 3, True),    # entirely after
        (1, 2, 3, 4, True),    # ends the day before
        (5, 6, 3, 4, True),    # starts the day after
    ],
)
def test_overlap_rules_for_single_booking(
    booking_store,
    room_store,
    today,
    request_start,
    request_end,
    existing_start,
    existing_end,
    available,
):
    base = _days(today, 10)
    room_store.rooms = [Room(1, "A")]
    booking_store.bookings = [
        _active(1, 1, base + timedelta(days=existing_start), base + timedelta(days=existing_end))
    ]
    manager = _manager(booking_store, room_store, today)

    result = manager.find_available_room(
        base + timedelta(days=request_start),
        base + timedelta(days=request_end),
    )

    assert result == (1 if available else NO_ROOM_AVAILABLE)


@pytest.mark.parametrize(("booked_rooms", "expected"), [(0, 1), (1, 2), (2, 3), (3, NO_ROOM_AVAILABLE)])
def test_rooms_are_considered_in_listing_order(booking_store, room_store, today, booked_rooms, expected):
    start, end = _days(today, 10), _days(today, 12)
    room_store.rooms = [Room(1, "A"), Room(2, "B"), Room(3, "C")]
    booking_store.bookings = [
        _active(room_id, room_id, start, end) for room_id in range(1, booked_rooms + 1)
    ]
    manager = _manager(booking_store, room_store, today)

    assert manager.find_available_room(start, end) == expected


def test_listing_order_wins_over_room_id(booking_store, room_store, today):
    room_store.rooms = [Room(7, "Suite"), Room(2, "Single")]
    manager = _manager(booking_store, room_store, today)

    assert manager.find_available_room(_days(today, 1), _days(today, 1)) == 7


def test_find_reads_bookings_before_rooms(booking_store, room_store, store_calls, today):
    room_store.rooms = [Room(1, "A")]
    manager = _manager(booking_store, room_store, today)

    manager.find_available_room(_days(today, 1), _days(today, 2))

    assert store_calls == ["bookings.get_all", "rooms.get_all"]


@pytest.mark.parametrize(
    ("start_offset", "end_offset"),
    [(0, 0), (0, 2), (-1, 1), (5, 3)],
)
def test_find_rejects_invalid_stay_without_store_access(
    booking_store,
    room_store,
    store_calls,
    today,
    start_offset,
    end_offset,
):
    manager = _manager(booking_store, room_store, today)

    with pytest.raises(InvalidDateRangeError):
        manager.find_available_room(_days(today, start_offset), _days(today, end_offset))
    assert store_calls == []


def test_long_stays_are_bookable(booking_store, room_store, today):
    room_store.rooms = [Room(1, "A")]
    manager = _manager(booking_store, room_store, today)

    for duration in (1, 7, 30, 365):
        start = _days(today, 10)
        assert manager.find_available_room(start, start + timedelta(days=duration - 1)) == 1


def test_store_failure_propagates(room_store, today):
    class BrokenBookingStore:
        def get_all(self):
            raise OSError("disk unavailable")

        def add(self, booking):
            raise AssertionError("must not be called")

    manager = _manager(BrokenBookingStore(), room_store, today)

    with pytest.raises(OSError, match="disk unavailable"):
        manager.find_available_room(_days(today, 1), _days(today, 2))


# --- create_booking ---

def test_create_booking_assigns_room_and_persists(booking_store, room_store, store_calls, today):
    room_store.rooms = [Room(1, "A"), Room(2, "B")]
    booking_store.bookings = [_active(1, 1, _days(today, 1), _days(today, 3))]
    manager = _manager(booking_store, room_store, today)
    booking = Booking(start_date=_days(today, 2), end_date=_days(today, 4), customer_id=5)

    assert manager.create_booking(booking) is True

    assert booking.room_id == 2
    assert booking.is_active is True
    assert booking.id == 2
    assert booking_store.added == [booking]
    assert store_calls.count("bookings.add") == 1
    assert store_calls[-1] == "bookings.add"


def test_create_booking_returns_false_without_writing(booking_store, room_store, store_calls, today):
    room_store.rooms = [Room(1, "A")]
    booking_store.bookings = [_active(1, 1, _days(today, 1), _days(today, 5))]
    manager = _manager(booking_store, room_store, today)
    booking = Booking(start_date=_days(today, 5), end_date=_days(today, 6), customer_id=5)

    assert manager.create_booking(booking) is False

    assert booking.room_id == 0
    assert booking.is_active is False
    assert booking.id == 0
    assert "bookings.add" not in store_calls


def test_create_booking_rejects_reversed_dates_without_store_access(
    booking_store,
    room_store,
    store_calls,
    today,
):
    room_store.rooms = [Room(1, "A")]
    manager = _manager(booking_store, room_store, today)
    booking = Booking(start_date=_days(today, 5), end_date=_days(today, 3), customer_id=1)

    with pytest.raises(InvalidDateRangeError):
        manager.create_booking(booking)
    assert store_calls == []
    assert booking.room_id == 0


def test_create_booking_rejects_stay_starting_today(booking_store, room_store, store_calls, today):
    room_store.rooms = [Room(1, "A")]
    manager = _manager(booking_store, room_store, today)

    with pytest.raises(InvalidDateRangeError):
        manager.create_booking(Booking(start_date=today, end_date=_days(today, 1)))
    assert store_calls == []


@pytest.mark.parametrize("request_start", [1, 3, 5, 6, 8])
def test_create_agrees_with_find(booking_store, room_store, store_calls, today, request_start):
    room_store.rooms = [Room(1, "A"), Room(2, "B")]
    booking_store.bookings = [
        _active(1, 1, _days(today, 3), _days(today, 5)),
        _active(2, 2, _days(today, 4), _days(today, 6)),
    ]
    manager = _manager(booking_store, room_store, today)
    start, end = _days(today, request_start), _days(today, request_start + 1)

    expected_room = manager.find_available_room(start, end)
    booking = Booking(start_date=start, end_date=end, customer_id=1)
    created = manager.create_booking(booking)

    assert created is (expected_room != NO_ROOM_AVAILABLE)
    if created:
        assert booking.room_id == expected_room
        assert booking.is_active is True
        assert booking_store.added == [booking]
    else:
        assert booking_store.added == []


# --- datetime inputs ---

def test_timestamped_booking_is_stored_as_calendar_dates(booking_store, room_store, today):
    room_store.rooms = [Room(1, "A")]
    manager = _manager(booking_store, room_store, today)
    booking = Booking(
        start_date=datetime(2026, 10, 21, 14, 0),
        end_date=datetime(2026, 10, 23, 11, 0),
        customer_id=1,
    )

    assert manager.create_booking(booking) is True

    assert type(booking.start_date) is date
    assert type(booking.end_date) is date
    assert booking.start_date == date(2026, 10, 21)
    assert booking.end_date == date(2026, 10, 23)
    assert manager.find_available_room(date(2026, 10, 22), date(2026, 10, 22)) == NO_ROOM_AVAILABLE
    assert manager.find_available_room(date(2026, 10, 24), date(2026, 10, 25)) == 1


def test_find_accepts_timestamps_on_boundary_days(booking_store, room_store, today):
    room_store.rooms = [Room(1, "A")]
    booking_store.bookings = [_active(1, 1, date(2026, 10, 21), date(2026, 10, 23))]
    manager = _manager(booking_store, room_store, today)

    # Noon on the last booked day still collides with the stay.
    assert manager.find_available_room(
        datetime(2026, 10, 23, 12, 0),
        datetime(2026, 10, 24, 10, 0),
    ) == NO_ROOM_AVAILABLE
    assert manager.find_available_room(
        datetime(2026, 10, 24, 0, 0),
        datetime(2026, 10, 24, 23, 59),
    ) == 1


def test_find_rejects_timestamp_later_today(booking_store, room_store, store_calls, today):
    manager = _manager(booking_store, room_store, today)

    with pytest.raises(InvalidDateRangeError):
        manager.find_available_room(
            datetime(today.year, today.month, today.day, 23, 0),
            _days(today, 2),
        )
    assert store_calls == []
