from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .models import TimeOfDay

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"


class ClockSource(Protocol):
    def now(self) -> TimeOfDay: ...


def _resolve_timezone(tz_name: str | None) -> ZoneInfo:
    name = tz_name or DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        logger.warning("Unknown timezone %r, falling back to %s", name, DEFAULT_TIMEZONE)
        return ZoneInfo(DEFAULT_TIMEZONE)


class SystemClock:
    """Wall clock reading the current time of day in one shared timezone."""

    def __init__(self, timezone: str | None = None) -> None:
        self.tz = _resolve_timezone(timezone)

    def now(self) -> TimeOfDay:
        current = datetime.now(self.tz)
        return TimeOfDay(hour=current.hour, minute=current.minute)


class FixedClock:
    """Clock frozen at a given time of day."""

    def __init__(self, at: TimeOfDay | str) -> None:
        self.at = TimeOfDay.parse(at) if isinstance(at, str) else at

    def now(self) -> TimeOfDay:
        return self.at
