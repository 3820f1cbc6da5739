from __future__ import annotations

import logging
from typing import Sequence

from app.application.ports.message_platform import MessagePlatformPort
from app.domain.entities.reply import Reply, ReplyButton


class MockWhatsAppPlatform(MessagePlatformPort):
    """Logs outbound messages and keeps them in `sent` as (routing_key, recipient_id, Reply)."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, Reply]] = []
        self._logger = logging.getLogger(__name__)

    def send_text(self, routing_key: str, recipient_id: str, text: str) -> None:
        self.sent.append((routing_key, recipient_id, Reply(text=text)))
        self._logger.info(
            "Mock send to WhatsApp", extra={"routing_key": routing_key, "sender_id": recipient_id, "text": text}
        )

    def send_buttons(
        self,
        routing_key: str,
        recipient_id: str,
        body: str,
        buttons: Sequence[ReplyButton],
    ) -> None:
        self.sent.append((routing_key, recipient_id, Reply(text=body, buttons=tuple(buttons))))
        self._logger.info(
            "Mock send buttons to WhatsApp",
            extra={"routing_key": routing_key, "sender_id": recipient_id, "text": body},
        )
