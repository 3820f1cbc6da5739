from __future__ import annotations

from typing import Sequence

from app.application.ports.message_platform import MessagePlatformPort
from app.domain.entities.reply import ReplyButton
from app.infrastructure.whatsapp.whatsapp_client import WhatsAppClient


class WhatsAppPlatform(MessagePlatformPort):
    def __init__(self, client: WhatsAppClient) -> None:
        self._client = client

    def send_text(self, routing_key: str, recipient_id: str, text: str) -> None:
        self._client.send_text(phone_number_id=routing_key, to=recipient_id, text=text)

    def send_buttons(
        self,
        routing_key: str,
        recipient_id: str,
        body: str,
        buttons: Sequence[ReplyButton],
    ) -> None:
        self._client.send_buttons(phone_number_id=routing_key, to=recipient_id, body=body, buttons=buttons)
