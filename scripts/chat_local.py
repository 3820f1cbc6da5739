#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP, no WhatsApp, no Google).

Usage:
  python3 scripts/chat_local.py [path/to/clients.json]

Drives HandleIncomingMessageUseCase with the mock calendar and prints every
outbound reply. Prefix a line with "#" to send it as a button choice id
(e.g. "#zakazi_termin").
"""
from __future__ import annotations

import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.application.use_cases.availability import AvailabilityResolver
from app.application.use_cases.conversation import ConversationEngine
from app.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from app.application.use_cases.send_reply import SendReplyUseCase
from app.application.use_cases.slot_finder import SlotFinder
from app.application.utils.rate_limit import RateLimiter
from app.domain.entities.message import InboundMessage
from app.infrastructure.calendar.mock_calendar import MockCalendar
from app.infrastructure.clients.json_registry import JsonClientRegistry
from app.infrastructure.store.memory_store import MemoryConversationStore
from app.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform


def _print_header(routing_key: str, sender_id: str) -> None:
    print("\nLocal Chat Harness")
    print("-" * 60)
    print(f"routing_key: {routing_key}  sender_id: {sender_id}")
    print("Type your message and press Enter. '#<id>' sends a button choice.")
    print("Commands: /new (new sender), /state, /events, /quit")
    print("-" * 60)


def main() -> None:
    config_path = sys.argv[1] if len(sys.argv) > 1 else ROOT / "config" / "clients.example.json"
    registry = JsonClientRegistry.from_file(config_path)
    client = registry.all()[0]

    calendar = MockCalendar(client.calendar_ids)
    store = MemoryConversationStore()
    platform = MockWhatsAppPlatform()
    use_case = HandleIncomingMessageUseCase(
        registry=registry,
        store=store,
        engine=ConversationEngine(slot_finder=SlotFinder(AvailabilityResolver(calendar)), calendar=calendar),
        send_reply=SendReplyUseCase(platform=platform),
        rate_limiter=RateLimiter(store, cooldown_seconds=0.0),
    )

    sender_id = "local_user_1"
    _print_header(client.routing_key, sender_id)

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue
        if user_text in ("/quit", "/exit"):
            print("Bye!")
            return
        if user_text == "/new":
            sender_id = f"local_user_{int(time.time())}"
            print(f"New sender_id: {sender_id}")
            continue
        if user_text == "/state":
            print(store.get_state((client.routing_key, sender_id)))
            continue
        if user_text == "/events":
            for event_id, event in calendar.events.items():
                print(f"{event_id}: {event['summary']} {event['start']} [{event['calendar_id']}]")
            continue

        choice_id = user_text[1:] if user_text.startswith("#") else None
        message = InboundMessage(
            routing_key=client.routing_key,
            sender_id=sender_id,
            text=None if choice_id else user_text,
            choice_id=choice_id,
            message_id=f"local_{int(time.time() * 1000)}",
            timestamp=int(time.time()),
            platform="local",
        )

        sent_before = len(platform.sent)
        use_case.handle(message)
        new_replies = platform.sent[sent_before:]
        if not new_replies:
            print("(no outbound message)")
        for _, _, reply in new_replies:
            print(f"(bot) {reply.text}")
            for button in reply.buttons:
                print(f"   [#{button.id}] {button.title}")


if __name__ == "__main__":
    main()
