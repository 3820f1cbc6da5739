from __future__ import annotations

import logging
from datetime import datetime, timedelta

from app.application.use_cases.availability import AvailabilityResolver
from app.application.utils.working_hours import is_open, next_opening_after
from app.domain.entities.client_config import ClientConfig
from app.domain.entities.slot import Slot

ALTERNATIVES_COUNT = 3
# Upper bound on cursor positions tried per search, independent of how many slots are wanted.
MAX_CANDIDATE_EVALUATIONS = 60


class SlotFinder:
    """Slot acceptance and forward search for alternatives."""

    def __init__(self, resolver: AvailabilityResolver) -> None:
        self._resolver = resolver
        self._logger = logging.getLogger(__name__)

    def check_slot(self, client: ClientConfig, start: datetime) -> Slot | None:
        """Return a bookable Slot for `start`, or None if closed or no calendar is free."""
        tz = client.tz
        start = start.astimezone(tz)
        if not is_open(start, client.slot_minutes, client.working_hours, tz):
            return None

        end = start + timedelta(minutes=client.slot_minutes)
        calendar_id = self._resolver.resolve(client.calendar_ids, start, end)
        if calendar_id is None:
            return None
        return Slot(start=start, end=end, calendar_id=calendar_id)

    def find_alternatives(
        self,
        client: ClientConfig,
        from_instant: datetime,
        count: int = ALTERNATIVES_COUNT,
    ) -> list[Slot]:
        """
        Find up to `count` bookable slots strictly after `from_instant`, in chronological order.

        The cursor advances one slot length at a time and jumps straight to the next
        opening whenever it leaves working hours. At most MAX_CANDIDATE_EVALUATIONS
        positions are tried; whatever was found by then is returned.
        """
        tz = client.tz
        step = timedelta(minutes=client.slot_minutes)
        cursor = from_instant.astimezone(tz)
        found: list[Slot] = []
        evaluations = 0

        while len(found) < count and evaluations < MAX_CANDIDATE_EVALUATIONS:
            cursor = cursor + step
            if not is_open(cursor, client.slot_minutes, client.working_hours, tz):
                opening = next_opening_after(cursor, client.working_hours, tz)
                if opening is None:
                    break
                cursor = opening

            evaluations += 1
            slot = self.check_slot(client, cursor)
            if slot is not None:
                found.append(slot)

        self._logger.info(
            "Alternative search finished",
            extra={"routing_key": client.routing_key, "found": len(found), "evaluations": evaluations},
        )
        return found
