from abc import ABC, abstractmethod

from app.domain.entities.conversation_state import ConversationState


ConversationKey = tuple[str, str]  # (routing_key, sender_id)


class ConversationStorePort(ABC):
    @abstractmethod
    def get_state(self, key: ConversationKey) -> ConversationState | None:
        raise NotImplementedError

    @abstractmethod
    def set_state(self, key: ConversationKey, state: ConversationState) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_state(self, key: ConversationKey) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_last_accepted_at(self, sender_id: str) -> float | None:
        """Timestamp of the last message accepted from this sender, if any."""
        raise NotImplementedError

    @abstractmethod
    def set_last_accepted_at(self, sender_id: str, timestamp: float) -> None:
        raise NotImplementedError
