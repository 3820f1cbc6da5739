from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from app.application.ports.calendar import CalendarPort


class AvailabilityResolver:
    def __init__(self, calendar: CalendarPort) -> None:
        self._calendar = calendar
        self._logger = logging.getLogger(__name__)

    def resolve(self, calendar_ids: Sequence[str], start: datetime, end: datetime) -> str | None:
        """
        Return the first calendar (in priority order) with no busy interval in [start, end).

        A calendar the provider returned no data for counts as busy.
        """
        if not calendar_ids:
            return None

        busy_by_calendar = self._calendar.query_free_busy(calendar_ids, start, end)
        for calendar_id in calendar_ids:
            busy = busy_by_calendar.get(calendar_id)
            if busy is None:
                self._logger.warning(
                    "No free/busy data for calendar; treating as busy",
                    extra={"calendar_id": calendar_id},
                )
                continue
            if not busy:
                return calendar_id
        return None
