from __future__ import annotations

import logging

from app.application.ports.message_platform import MessagePlatformPort
from app.domain.entities.reply import Reply


class SendReplyUseCase:
    def __init__(self, platform: MessagePlatformPort) -> None:
        self._platform = platform
        self._logger = logging.getLogger(__name__)

    def execute(self, routing_key: str, recipient_id: str, reply: Reply) -> None:
        """Send a reply as buttons when it carries any, plain text otherwise."""
        if reply.buttons:
            self._platform.send_buttons(
                routing_key=routing_key,
                recipient_id=recipient_id,
                body=reply.text,
                buttons=reply.buttons,
            )
            return
        self._platform.send_text(routing_key=routing_key, recipient_id=recipient_id, text=reply.text)
