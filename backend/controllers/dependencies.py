"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, Request, status

from backend.repository.data_repository import (
    BookingRepository,
    CustomerRepository,
    RoomRepository,
)
from backend.services.booking_service import BookingManager


def _require_state(request: Request, name: str, label: str) -> Any:
    value = getattr(request.app.state, name, None)
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{label} is not initialized",
        )
    return value


def get_booking_manager(request: Request) -> BookingManager:
    service = getattr(request.app.state, "booking_manager", None)
    if service is None:
        booking_repository = getattr(request.app.state, "booking_repository", None)
        room_repository = getattr(request.app.state, "room_repository", None)
        if booking_repository is not None and room_repository is not None:
            service = BookingManager(
                booking_store=booking_repository,
                room_store=room_repository,
                clock=getattr(request.app.state, "clock", None),
            )
            request.app.state.booking_manager = service
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Booking manager is not initialized",
        )
    return service


def get_booking_repository(request: Request) -> BookingRepository:
    return _require_state(request, "booking_repository", "Booking repository")


def get_room_repository(request: Request) -> RoomRepository:
    return _require_state(request, "room_repository", "Room repository")


def get_customer_repository(request: Request) -> CustomerRepository:
    return _require_state(request, "customer_repository", "Customer repository")
