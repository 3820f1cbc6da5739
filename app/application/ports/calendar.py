from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Sequence

from app.domain.entities.slot import BusyInterval


class CalendarPort(ABC):
    @abstractmethod
    def query_free_busy(
        self,
        calendar_ids: Sequence[str],
        start: datetime,
        end: datetime,
    ) -> dict[str, list[BusyInterval] | None]:
        """
        Query busy intervals for all calendars in one call.

        Calendars the provider returned no data for map to None (or are absent).
        """
        raise NotImplementedError

    @abstractmethod
    def create_event(
        self,
        calendar_id: str,
        start: datetime,
        end: datetime,
        timezone: str,
        summary: str,
        description: str,
    ) -> str:
        """Create calendar event. Returns event_id."""
        raise NotImplementedError
