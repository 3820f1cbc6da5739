"""
Shared fixtures. The reference clock is Monday 2026-06-01 09:00 Europe/Belgrade.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo

import pytest

from app.application.use_cases.availability import AvailabilityResolver
from app.application.use_cases.conversation import ConversationEngine
from app.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from app.application.use_cases.send_reply import SendReplyUseCase
from app.application.use_cases.slot_finder import SlotFinder
from app.application.utils.rate_limit import RateLimiter
from app.domain.entities.client_config import ClientConfig, WorkingHours
from app.infrastructure.calendar.mock_calendar import MockCalendar
from app.infrastructure.clients.json_registry import JsonClientRegistry
from app.infrastructure.store.memory_store import MemoryConversationStore
from app.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform

TZ = ZoneInfo("Europe/Belgrade")
ROUTING_KEY = "pnid_1"
CALENDAR_IDS = ("cal_a", "cal_b")
SERVICES = ("Šišanje", "Farbanje", "Manikir")


def at(day: int, hour: int, minute: int = 0) -> datetime:
    """Local Belgrade instant in June 2026 (June 1st is a Monday)."""
    return datetime(2026, 6, day, hour, minute, tzinfo=TZ)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def now() -> datetime:
    return at(1, 9)


@pytest.fixture
def client() -> ClientConfig:
    weekday_hours = WorkingHours(opens_at=time(9, 0), closes_at=time(17, 0))
    return ClientConfig(
        routing_key=ROUTING_KEY,
        name="Salon",
        timezone="Europe/Belgrade",
        slot_minutes=30,
        working_hours={weekday: weekday_hours for weekday in range(1, 6)},
        services=SERVICES,
        calendar_ids=CALENDAR_IDS,
    )


@pytest.fixture
def calendar() -> MockCalendar:
    return MockCalendar(CALENDAR_IDS)


@pytest.fixture
def slot_finder(calendar: MockCalendar) -> SlotFinder:
    return SlotFinder(AvailabilityResolver(calendar))


@pytest.fixture
def engine(slot_finder: SlotFinder, calendar: MockCalendar) -> ConversationEngine:
    return ConversationEngine(slot_finder=slot_finder, calendar=calendar)


@pytest.fixture
def store() -> MemoryConversationStore:
    return MemoryConversationStore()


@pytest.fixture
def platform() -> MockWhatsAppPlatform:
    return MockWhatsAppPlatform()


@pytest.fixture
def clock(now: datetime) -> FakeClock:
    return FakeClock(now)


@pytest.fixture
def use_case(
    client: ClientConfig,
    engine: ConversationEngine,
    store: MemoryConversationStore,
    platform: MockWhatsAppPlatform,
    clock: FakeClock,
) -> HandleIncomingMessageUseCase:
    return HandleIncomingMessageUseCase(
        registry=JsonClientRegistry([client]),
        store=store,
        engine=engine,
        send_reply=SendReplyUseCase(platform=platform),
        rate_limiter=RateLimiter(store, cooldown_seconds=2.0),
        clock=clock,
    )
