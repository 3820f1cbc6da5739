from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from app.application.ports.client_registry import ClientRegistryPort
from app.application.ports.conversation_store import ConversationStorePort
from app.application.use_cases.conversation import ConversationEngine
from app.application.use_cases.send_reply import SendReplyUseCase
from app.application.utils.rate_limit import RateLimiter
from app.domain.entities.message import InboundMessage


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class HandleIncomingMessageUseCase:
    """Entry point for every inbound message: validate, rate-limit, advance the conversation, reply."""

    def __init__(
        self,
        registry: ClientRegistryPort,
        store: ConversationStorePort,
        engine: ConversationEngine,
        send_reply: SendReplyUseCase,
        rate_limiter: RateLimiter,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._registry = registry
        self._store = store
        self._engine = engine
        self._send_reply = send_reply
        self._rate_limiter = rate_limiter
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def handle(self, message: InboundMessage) -> None:
        try:
            self._handle(message)
        except Exception as e:
            # State is committed only after a successful step, so the user can simply retry.
            self._logger.exception(
                "Error handling message",
                extra={
                    "routing_key": message.routing_key,
                    "sender_id": message.sender_id,
                    "error": str(e),
                },
            )

    def _handle(self, message: InboundMessage) -> None:
        if not message.routing_key or not message.sender_id:
            self._logger.info("Message dropped", extra={"reason": "missing_routing_key_or_sender"})
            return

        client = self._registry.get(message.routing_key)
        if client is None:
            self._logger.info(
                "Message dropped",
                extra={"routing_key": message.routing_key, "reason": "unknown_client"},
            )
            return

        if not message.text and not message.choice_id:
            self._logger.info(
                "Message dropped",
                extra={"routing_key": message.routing_key, "sender_id": message.sender_id, "reason": "empty"},
            )
            return

        now = self._clock()
        if not self._rate_limiter.allow(message.sender_id, now.timestamp()):
            return

        key = message.conversation_key
        state = self._store.get_state(key)
        result = self._engine.step(client, state, message, now)

        if result.state.stage.is_stored:
            self._store.set_state(key, result.state)
        elif state is not None:
            self._store.delete_state(key)

        self._send_reply.execute(message.routing_key, message.sender_id, result.reply)
