from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from types import MappingProxyType
from typing import Mapping
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class WorkingHours:
    opens_at: time
    closes_at: time

    @property
    def open_minute(self) -> int:
        return self.opens_at.hour * 60 + self.opens_at.minute

    @property
    def close_minute(self) -> int:
        return self.closes_at.hour * 60 + self.closes_at.minute


@dataclass(frozen=True)
class ClientConfig:
    routing_key: str  # WhatsApp phone_number_id
    name: str
    timezone: str
    slot_minutes: int
    working_hours: Mapping[int, WorkingHours] = field(default_factory=lambda: MappingProxyType({}))  # ISO weekday 1-7
    services: tuple[str, ...] = ()
    calendar_ids: tuple[str, ...] = ()  # priority order

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)
