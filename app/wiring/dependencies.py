from functools import lru_cache
import logging

from app.application.ports.calendar import CalendarPort
from app.application.ports.client_registry import ClientRegistryPort
from app.application.ports.message_platform import MessagePlatformPort
from app.application.use_cases.availability import AvailabilityResolver
from app.application.use_cases.conversation import ConversationEngine
from app.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from app.application.use_cases.send_reply import SendReplyUseCase
from app.application.use_cases.slot_finder import SlotFinder
from app.application.utils.rate_limit import RateLimiter
from app.core.config import Settings, settings
from app.infrastructure.calendar.google_calendar import GoogleCalendar
from app.infrastructure.calendar.mock_calendar import MockCalendar
from app.infrastructure.clients.json_registry import JsonClientRegistry
from app.infrastructure.store.memory_store import MemoryConversationStore
from app.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform
from app.infrastructure.whatsapp.whatsapp_client import WhatsAppClient
from app.infrastructure.whatsapp.whatsapp_platform import WhatsAppPlatform


def get_settings() -> Settings:
    return settings


@lru_cache
def get_client_registry() -> ClientRegistryPort:
    return JsonClientRegistry.from_file(settings.CLIENTS_CONFIG_PATH)


@lru_cache
def get_conversation_store() -> MemoryConversationStore:
    return MemoryConversationStore()


@lru_cache
def get_calendar() -> CalendarPort:
    logger = logging.getLogger(__name__)
    if settings.is_dev and not settings.GOOGLE_APPLICATION_CREDENTIALS:
        logger.info("Using MockCalendar (no credentials, ENV=dev/local)")
        calendar_ids = [cid for client in get_client_registry().all() for cid in client.calendar_ids]
        return MockCalendar(calendar_ids)
    return GoogleCalendar(credentials_file=settings.GOOGLE_APPLICATION_CREDENTIALS)


@lru_cache
def get_message_platform() -> MessagePlatformPort:
    logger = logging.getLogger(__name__)
    logger.info("WA_ACCESS_TOKEN present=%s", bool(settings.WA_ACCESS_TOKEN))

    if not settings.WA_ACCESS_TOKEN:
        if settings.is_dev:
            logger.info("Using MockWhatsAppPlatform (token missing, ENV=dev/local)")
            return MockWhatsAppPlatform()
        raise ValueError("WA_ACCESS_TOKEN is required to send WhatsApp replies.")

    client = WhatsAppClient(
        access_token=settings.WA_ACCESS_TOKEN,
        base_url=settings.WA_GRAPH_BASE_URL,
        api_version=settings.WA_GRAPH_API_VERSION,
    )
    return WhatsAppPlatform(client=client)


@lru_cache
def get_handle_incoming_message_use_case() -> HandleIncomingMessageUseCase:
    calendar = get_calendar()
    store = get_conversation_store()
    return HandleIncomingMessageUseCase(
        registry=get_client_registry(),
        store=store,
        engine=ConversationEngine(
            slot_finder=SlotFinder(AvailabilityResolver(calendar)),
            calendar=calendar,
        ),
        send_reply=SendReplyUseCase(platform=get_message_platform()),
        rate_limiter=RateLimiter(store, cooldown_seconds=settings.RATE_LIMIT_SECONDS),
    )
