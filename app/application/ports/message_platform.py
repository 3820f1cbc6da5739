from abc import ABC, abstractmethod
from typing import Sequence

from app.domain.entities.reply import ReplyButton


class MessagePlatformPort(ABC):
    @abstractmethod
    def send_text(self, routing_key: str, recipient_id: str, text: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def send_buttons(
        self,
        routing_key: str,
        recipient_id: str,
        body: str,
        buttons: Sequence[ReplyButton],
    ) -> None:
        raise NotImplementedError
