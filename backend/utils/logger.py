"""Process-wide logging setup for the booking service."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from backend.utils.config import get_settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_HANDLER_NAME = "hotel-booking-stdout"


def _installed_handler(root: logging.Logger) -> Optional[logging.Handler]:
    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return handler
    return None


def configure_logging(level: Optional[str] = None) -> None:
    """Attach the stdout handler to the root logger once.

    Later calls only change the level, and only when one is passed, so
    repeated imports never stack duplicate handlers.
    """
    root = logging.getLogger()
    if _installed_handler(root) is not None:
        if level:
            root.setLevel(level.upper())
        return

    root.setLevel((level or get_settings().log_level).upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
