from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities.message import InboundMessage


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore")


class TextDTO(_Lenient):
    body: str | None = None


class ReplyChoiceDTO(_Lenient):
    id: str | None = None
    title: str | None = None


class InteractiveDTO(_Lenient):
    type: str | None = None
    button_reply: ReplyChoiceDTO | None = None
    list_reply: ReplyChoiceDTO | None = None


class TemplateButtonDTO(_Lenient):
    payload: str | None = None
    text: str | None = None


class MessageDTO(_Lenient):
    id: str | None = None
    sender: str | None = Field(default=None, alias="from")
    timestamp: int | str | None = None
    type: str | None = None
    text: TextDTO | None = None
    interactive: InteractiveDTO | None = None
    button: TemplateButtonDTO | None = None

    def choice(self) -> ReplyChoiceDTO | None:
        if self.interactive is not None:
            return self.interactive.button_reply or self.interactive.list_reply
        if self.button is not None:
            return ReplyChoiceDTO(id=self.button.payload, title=self.button.text)
        return None


class MetadataDTO(_Lenient):
    phone_number_id: str | None = None
    display_phone_number: str | None = None


class ValueDTO(_Lenient):
    metadata: MetadataDTO | None = None
    messages: list[MessageDTO] = Field(default_factory=list)


class ChangeDTO(_Lenient):
    field: str | None = None
    value: ValueDTO | None = None


class EntryDTO(_Lenient):
    id: str | None = None
    changes: list[ChangeDTO] = Field(default_factory=list)


class WebhookEventDTO(_Lenient):
    object: str | None = None
    entry: list[EntryDTO] = Field(default_factory=list)

    def extract_messages(self) -> list[InboundMessage]:
        """Flatten every delivered message; missing fields stay None for the use case to judge."""
        messages: list[InboundMessage] = []
        for entry in self.entry:
            for change in entry.changes:
                value = change.value
                if value is None:
                    continue
                routing_key = value.metadata.phone_number_id if value.metadata else None
                for msg in value.messages:
                    choice = msg.choice()
                    text = msg.text.body if msg.text else None
                    messages.append(
                        InboundMessage(
                            routing_key=routing_key,
                            sender_id=msg.sender,
                            text=text,
                            choice_id=choice.id if choice else None,
                            message_id=msg.id,
                            timestamp=int(msg.timestamp) if str(msg.timestamp).isdigit() else None,
                        )
                    )
        return messages
