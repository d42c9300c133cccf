"""Domain-level validation rules for stay date ranges."""

from __future__ import annotations

from datetime import date, datetime


class BookingError(Exception):
    """Base exception for booking workflow failures."""


class InvalidDateRangeError(BookingError, ValueError):
    """Raised when a start/end date pair violates an operation's precondition."""


def as_calendar_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def validate_date_order(start_date: date, end_date: date) -> None:
    """Reject ranges whose start falls after their end."""
    if as_calendar_date(start_date) > as_calendar_date(end_date):
        raise InvalidDateRangeError("The start date cannot be later than the end date")


def validate_stay(start_date: date, end_date: date, today: date) -> None:
    """Reject stays that do not start strictly after ``today``."""
    if as_calendar_date(start_date) <= as_calendar_date(today):
        raise InvalidDateRangeError("The start date must be later than today")
    validate_date_order(start_date, end_date)
