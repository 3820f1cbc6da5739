from __future__ import annotations

from datetime import datetime, timedelta
from typing import Mapping
from zoneinfo import ZoneInfo

from app.domain.entities.client_config import WorkingHours

# Forward scan limit for next_opening_after.
MAX_DAYS_AHEAD = 14


def is_open(
    instant: datetime,
    duration_minutes: int,
    working_hours: Mapping[int, WorkingHours],
    timezone: ZoneInfo | None = None,
) -> bool:
    """Return True if [instant, instant + duration) fits inside that weekday's working hours."""
    local = instant.astimezone(timezone) if timezone is not None else instant
    hours = working_hours.get(local.isoweekday())
    if hours is None:
        return False

    start_minute = local.hour * 60 + local.minute
    end_minute = start_minute + duration_minutes
    return start_minute >= hours.open_minute and end_minute <= hours.close_minute


def next_opening_after(
    instant: datetime,
    working_hours: Mapping[int, WorkingHours],
    timezone: ZoneInfo,
) -> datetime | None:
    """
    Find the first working-hours opening strictly after `instant`.

    Scans today and up to MAX_DAYS_AHEAD following days. Returns None when no
    configured day is found in that window.
    """
    local = instant.astimezone(timezone)
    for offset in range(MAX_DAYS_AHEAD + 1):
        day = local.date() + timedelta(days=offset)
        hours = working_hours.get(day.isoweekday())
        if hours is None:
            continue
        opening = datetime.combine(day, hours.opens_at, tzinfo=timezone)
        if opening > local:
            return opening
    return None
