from dataclasses import dataclass


@dataclass(frozen=True)
class InboundMessage:
    routing_key: str | None
    sender_id: str | None
    text: str | None = None
    choice_id: str | None = None
    message_id: str | None = None
    timestamp: int | None = None
    platform: str = "whatsapp"

    @property
    def conversation_key(self) -> tuple[str, str]:
        return (self.routing_key or "", self.sender_id or "")
