#!/usr/bin/env python3
"""Validate local booking service environment readiness."""

from __future__ import annotations

import importlib
import shutil
import sys
import tempfile
from dataclasses import replace
from datetime import date, timedelta
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.domain.models import Booking
from backend.repository.data_repository import (
    BookingRepository,
    DataRepository,
    RoomRepository,
)
from backend.services.booking_service import BookingManager
from backend.utils.clock import FixedClock
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True
    temp_dir = tempfile.mkdtemp(prefix="hotel-env-")

    # CHECK 1 - Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2 - Required packages importable with versions
    package_specs = [
        ("fastapi", "fastapi"),
        ("uvicorn", "uvicorn"),
        ("pydantic", "pydantic"),
        ("httpx", "httpx"),
        ("pytest", "pytest"),
    ]
    import_errors: list[str] = []
    for module_name, dist_name in package_specs:
        try:
            importlib.import_module(module_name)
            version(dist_name)
        except (ImportError, PackageNotFoundError) as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    try:
        today = date.today()
        validation_settings = replace(
            get_settings(),
            database_path=Path(temp_dir) / "hotel_validation.db",
        )
        repository = DataRepository(validation_settings)

        # CHECK 3 - Database initialization
        try:
            repository.initialize_database()
            ok, line = _print_result("Database initialization", True)
        except Exception as exc:
            ok, line = _print_result("Database initialization", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 4 - Demo seeding (2 rooms, 1 booking)
        room_repository = RoomRepository(repository)
        booking_repository = BookingRepository(repository)
        try:
            repository.seed_demo_data(today)
            rooms = room_repository.get_all()
            bookings = booking_repository.get_all()
            if len(rooms) != 2 or len(bookings) != 1:
                raise RuntimeError(
                    f"expected 2 rooms and 1 booking, got {len(rooms)} and {len(bookings)}"
                )
            ok, line = _print_result("Demo seed: 2 rooms, 1 booking", True)
        except Exception as exc:
            ok, line = _print_result("Demo seed", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 5 - Booking round trip through the manager
        try:
            manager = BookingManager(
                booking_store=booking_repository,
                room_store=room_repository,
                clock=FixedClock(today),
            )
            booking = Booking(
                start_date=today + timedelta(days=3),
                end_date=today + timedelta(days=4),
                customer_id=1,
            )
            if not manager.create_booking(booking):
                raise RuntimeError("expected room 2 to be free")
            if booking.room_id != 2 or booking.id <= 0:
                raise RuntimeError(f"unexpected booking state {booking}")
            occupied = manager.get_fully_occupied_dates(
                today + timedelta(days=3),
                today + timedelta(days=4),
            )
            if len(occupied) != 2:
                raise RuntimeError(f"expected 2 fully occupied dates, got {len(occupied)}")
            ok, line = _print_result(
                "Booking round trip",
                True,
                f": room={booking.room_id} id={booking.id}",
            )
        except Exception as exc:
            ok, line = _print_result("Booking round trip", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)

    print(SEPARATOR_LINE)
    print(" Hotel Booking Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
