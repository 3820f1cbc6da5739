from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from app.application.ports.calendar import CalendarPort
from app.domain.entities.slot import BusyInterval


class MockCalendar(CalendarPort):
    """In-memory calendars. Calendars not registered via `calendar_ids` report no data."""

    def __init__(self, calendar_ids: Sequence[str] = ()) -> None:
        self._busy: dict[str, list[BusyInterval]] = {calendar_id: [] for calendar_id in calendar_ids}
        self.events: dict[str, dict[str, object]] = {}
        self.free_busy_calls = 0
        self._logger = logging.getLogger(__name__)

    def add_calendar(self, calendar_id: str) -> None:
        self._busy.setdefault(calendar_id, [])

    def add_busy(self, calendar_id: str, start: datetime, end: datetime) -> None:
        self._busy.setdefault(calendar_id, []).append(BusyInterval(start=start, end=end))

    def query_free_busy(
        self,
        calendar_ids: Sequence[str],
        start: datetime,
        end: datetime,
    ) -> dict[str, list[BusyInterval] | None]:
        self.free_busy_calls += 1
        result: dict[str, list[BusyInterval] | None] = {}
        for calendar_id in calendar_ids:
            if calendar_id not in self._busy:
                result[calendar_id] = None
                continue
            result[calendar_id] = [
                interval
                for interval in self._busy[calendar_id]
                if interval.start < end and start < interval.end
            ]
        return result

    def create_event(
        self,
        calendar_id: str,
        start: datetime,
        end: datetime,
        timezone: str,
        summary: str,
        description: str,
    ) -> str:
        event_id = f"mock_event_{len(self.events) + 1}"
        self.events[event_id] = {
            "calendar_id": calendar_id,
            "start": start,
            "end": end,
            "timezone": timezone,
            "summary": summary,
            "description": description,
        }
        self.add_busy(calendar_id, start, end)
        self._logger.info(
            "Mock calendar event created",
            extra={"calendar_id": calendar_id, "start": start.isoformat(), "end": end.isoformat()},
        )
        return event_id
