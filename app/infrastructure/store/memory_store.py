from __future__ import annotations

import threading

from app.application.ports.conversation_store import ConversationKey, ConversationStorePort
from app.domain.entities.conversation_state import ConversationState


class MemoryConversationStore(ConversationStorePort):
    """Process-resident store; everything is lost on restart."""

    def __init__(self) -> None:
        self._states: dict[ConversationKey, ConversationState] = {}
        self._last_accepted_at: dict[str, float] = {}
        self._lock = threading.Lock()

    def get_state(self, key: ConversationKey) -> ConversationState | None:
        with self._lock:
            return self._states.get(key)

    def set_state(self, key: ConversationKey, state: ConversationState) -> None:
        with self._lock:
            self._states[key] = state

    def delete_state(self, key: ConversationKey) -> None:
        with self._lock:
            self._states.pop(key, None)

    def get_last_accepted_at(self, sender_id: str) -> float | None:
        with self._lock:
            return self._last_accepted_at.get(sender_id)

    def set_last_accepted_at(self, sender_id: str, timestamp: float) -> None:
        with self._lock:
            self._last_accepted_at[sender_id] = timestamp

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)
