"""HTTP controller layer for booking creation and availability queries."""

from __future__ import annotations

import sqlite3
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from backend.controllers.dependencies import get_booking_manager, get_booking_repository
from backend.domain.constraints import InvalidDateRangeError
from backend.domain.models import Booking
from backend.repository.data_repository import BookingRepository
from backend.services.booking_service import NO_ROOM_AVAILABLE, BookingManager
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


class CreateBookingRequest(BaseModel):
    """Input DTO; date ordering and the future-only rule live in the engine."""

    start_date: date
    end_date: date
    customer_id: int = Field(gt=0)


class BookingResponse(BaseModel):
    id: int
    start_date: date
    end_date: date
    customer_id: int
    room_id: int
    is_active: bool

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            start_date=booking.start_date,
            end_date=booking.end_date,
            customer_id=booking.customer_id,
            room_id=booking.room_id,
            is_active=booking.is_active,
        )


class AvailableRoomResponse(BaseModel):
    room_id: int = Field(gt=0)


class FullyOccupiedDatesResponse(BaseModel):
    dates: list[date]


class DateRangeQuery(BaseModel):
    start_date: date
    end_date: date


def _date_range(
    start_date: date = Query(...),
    end_date: date = Query(...),
) -> DateRangeQuery:
    return DateRangeQuery(start_date=start_date, end_date=end_date)


@router.get(
    "",
    response_model=list[BookingResponse],
    status_code=status.HTTP_200_OK,
)
async def list_bookings(
    repository: BookingRepository = Depends(get_booking_repository),
) -> list[BookingResponse]:
    return [BookingResponse.from_domain(item) for item in repository.get_all()]


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    payload: CreateBookingRequest,
    manager: BookingManager = Depends(get_booking_manager),
) -> BookingResponse:
    """Accept a stay in the first free room, or answer 409 when none is free."""
    booking = Booking(
        start_date=payload.start_date,
        end_date=payload.end_date,
        customer_id=payload.customer_id,
    )
    try:
        created = manager.create_booking(booking)
    except InvalidDateRangeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except sqlite3.IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Booking references an unknown customer",
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected booking failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create booking",
        ) from exc

    if not created:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="The booking could not be created. All rooms are occupied.",
        )
    return BookingResponse.from_domain(booking)


@router.get(
    "/available_room",
    response_model=AvailableRoomResponse,
    status_code=status.HTTP_200_OK,
)
async def find_available_room(
    query: DateRangeQuery = Depends(_date_range),
    manager: BookingManager = Depends(get_booking_manager),
) -> AvailableRoomResponse:
    try:
        room_id = manager.find_available_room(query.start_date, query.end_date)
    except InvalidDateRangeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected room search failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search for a room",
        ) from exc

    if room_id == NO_ROOM_AVAILABLE:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No room is available for the requested period",
        )
    return AvailableRoomResponse(room_id=room_id)


@router.get(
    "/fully_occupied_dates",
    response_model=FullyOccupiedDatesResponse,
    status_code=status.HTTP_200_OK,
)
async def fully_occupied_dates(
    query: DateRangeQuery = Depends(_date_range),
    manager: BookingManager = Depends(get_booking_manager),
) -> FullyOccupiedDatesResponse:
    try:
        dates = manager.get_fully_occupied_dates(query.start_date, query.end_date)
    except InvalidDateRangeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected occupancy query failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute fully occupied dates",
        ) from exc
    return FullyOccupiedDatesResponse(dates=dates)
