"""Repository layer responsible for all database access."""

from __future__ import annotations

import sqlite3
from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional

from backend.domain.models import Booking, Customer, Room
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class DataRepository:
    """Owns the SQLite file: connections, schema and demo seed."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._db_path = Path(self._settings.database_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def database_path(self) -> Path:
        return self._db_path

    def connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._db_path)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON;")
        return connection

    def initialize_database(self) -> None:
        """Create all persistence artifacts before API startup."""
        try:
            with self.connect() as conn:
                cursor = conn.cursor()

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS Rooms (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        description TEXT NOT NULL
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS Customers (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        name TEXT NOT NULL,
                        email TEXT NOT NULL
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS Bookings (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        start_date TEXT NOT NULL,
                        end_date TEXT NOT NULL,
                        is_active INTEGER NOT NULL CHECK (is_active IN (0,1)),
                        customer_id INTEGER NOT NULL,
                        room_id INTEGER NOT NULL,
                        CHECK (start_date <= end_date),
                        FOREIGN KEY (customer_id) REFERENCES Customers(id),
                        FOREIGN KEY (room_id) REFERENCES Rooms(id)
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE INDEX IF NOT EXISTS idx_bookings_room_dates
                    ON Bookings(room_id, start_date, end_date);
                    """
                )
                conn.commit()
            logger.info("Database initialized at %s", self._db_path)
        except sqlite3.Error as exc:
            raise RuntimeError(f"Database initialization failed: {exc}") from exc

    def seed_demo_data(self, today: date) -> None:
        """Seed a small hotel only when the Rooms table is empty."""
        try:
            with self.connect() as conn:
                cursor = conn.cursor()

                cursor.execute("SELECT COUNT(*) AS count FROM Rooms;")
                if int(cursor.fetchone()["count"]) > 0:
                    logger.info("Demo data already present; skipping seed")
                    return

                cursor.executemany(
                    "INSERT INTO Customers (name, email) VALUES (?, ?);",
                    [
                        ("John Smith", "js@gmail.com"),
                        ("Jane Doe", "jd@gmail.com"),
                    ],
                )
                cursor.executemany(
                    "INSERT INTO Rooms (description) VALUES (?);",
                    [("A",), ("B",)],
                )
                cursor.execute(
                    """
                    INSERT INTO Bookings (start_date, end_date, is_active, customer_id, room_id)
                    VALUES (?, ?, 1, 2, 1);
                    """,
                    (
                        (today + timedelta(days=3)).isoformat(),
                        (today + timedelta(days=4)).isoformat(),
                    ),
                )
                conn.commit()
            logger.info("Demo seed completed")
        except sqlite3.Error as exc:
            raise RuntimeError(f"Demo data seeding failed: {exc}") from exc

    def create_room(self, description: str) -> int:
        with self.connect() as conn:
            cursor = conn.cursor()
            cursor.execute("INSERT INTO Rooms (description) VALUES (?);", (description,))
            conn.commit()
            return int(cursor.lastrowid)

    def create_customer(self, name: str, email: str) -> int:
        with self.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO Customers (name, email) VALUES (?, ?);",
                (name, email),
            )
            conn.commit()
            return int(cursor.lastrowid)


class RoomRepository:
    """Read-only room listing in storage order."""

    def __init__(self, repository: DataRepository) -> None:
        self._repository = repository

    def get_all(self) -> List[Room]:
        with self._repository.connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id, description FROM Rooms ORDER BY id ASC;")
            return [
                Room(id=int(row["id"]), description=str(row["description"]))
                for row in cursor.fetchall()
            ]


class CustomerRepository:
    def __init__(self, repository: DataRepository) -> None:
        self._repository = repository

    def get_all(self) -> List[Customer]:
        with self._repository.connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id, name, email FROM Customers ORDER BY id ASC;")
            return [
                Customer(
                    id=int(row["id"]),
                    name=str(row["name"]),
                    email=str(row["email"]),
                )
                for row in cursor.fetchall()
            ]


class BookingRepository:
    """Lists every booking and appends new ones."""

    def __init__(self, repository: DataRepository) -> None:
        self._repository = repository

    def get_all(self) -> List[Booking]:
        with self._repository.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, start_date, end_date, is_active, customer_id, room_id
                FROM Bookings
                ORDER BY id ASC;
                """
            )
            return [
                Booking(
                    id=int(row["id"]),
                    start_date=date.fromisoformat(row["start_date"]),
                    end_date=date.fromisoformat(row["end_date"]),
                    is_active=bool(row["is_active"]),
                    customer_id=int(row["customer_id"]),
                    room_id=int(row["room_id"]),
                )
                for row in cursor.fetchall()
            ]

    def add(self, booking: Booking) -> None:
        with self._repository.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO Bookings (start_date, end_date, is_active, customer_id, room_id)
                VALUES (?, ?, ?, ?, ?);
                """,
                (
                    booking.start_date.isoformat(),
                    booking.end_date.isoformat(),
                    1 if booking.is_active else 0,
                    booking.customer_id,
                    booking.room_id,
                ),
            )
            conn.commit()
            booking.id = int(cursor.lastrowid)
        logger.info("Persisted booking %s for room %s", booking.id, booking.room_id)
