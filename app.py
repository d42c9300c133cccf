"""
app.py - FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires the stores and the booking manager, registers routers, and runs
startup initialization.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from backend.controllers.booking_controller import router as booking_router
from backend.controllers.catalog_controller import router as catalog_router
from backend.repository.data_repository import (
    BookingRepository,
    CustomerRepository,
    DataRepository,
    RoomRepository,
)
from backend.services.booking_service import BookingManager
from backend.utils.clock import Clock, build_clock
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    clock: Optional[Clock] = None,
) -> FastAPI:
    """
    Build and wire the FastAPI application.

    Every dependency is created here and placed on app.state, where the
    controller dependency providers look it up.
    """
    settings = settings or get_settings()
    clock = clock or build_clock(settings)

    # --- Repository (SQLite connection factory and narrow stores) ---
    repository = DataRepository(settings)
    room_repository = RoomRepository(repository)
    booking_repository = BookingRepository(repository)
    customer_repository = CustomerRepository(repository)

    # --- Services (business logic, no direct DB access) ---
    booking_manager = BookingManager(
        booking_store=booking_repository,
        room_store=room_repository,
        clock=clock,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Run startup initialization before accepting requests."""
        _startup(app)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # --- Routers ---
    app.include_router(booking_router)
    app.include_router(catalog_router)

    # --- Inject services into app.state for dependency resolution ---
    app.state.settings = settings
    app.state.clock = clock
    app.state.repository = repository
    app.state.room_repository = room_repository
    app.state.booking_repository = booking_repository
    app.state.customer_repository = customer_repository
    app.state.booking_manager = booking_manager

    return app


def _startup(app: FastAPI) -> None:
    """
    Idempotent startup sequence. Safe to re-run on server restarts.

    The schema must exist before seeding; seeding is skipped when rooms
    already exist or when HOTEL_SEED_DEMO_DATA is off.
    """
    settings: Settings = app.state.settings
    repository: DataRepository = app.state.repository
    clock: Clock = app.state.clock

    logger.info("Startup: initializing database schema")
    repository.initialize_database()

    if settings.seed_demo_data:
        logger.info("Startup: seeding demo rooms, customers and bookings")
        repository.seed_demo_data(clock.today())

    logger.info("Startup complete - system ready")


# Module-level app object for uvicorn
app = create_app()
