from __future__ import annotations

import logging
import threading

from app.application.ports.conversation_store import ConversationStorePort

DEFAULT_COOLDOWN_SECONDS = 2.0


class RateLimiter:
    """Per-sender cooldown. Only accepted messages reset the window."""

    def __init__(self, store: ConversationStorePort, cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS) -> None:
        self._store = store
        self._cooldown_seconds = cooldown_seconds
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def allow(self, sender_id: str, now_ts: float) -> bool:
        with self._lock:
            last_ts = self._store.get_last_accepted_at(sender_id)
            if last_ts is not None and now_ts - last_ts < self._cooldown_seconds:
                self._logger.info("Rate limited", extra={"sender_id": sender_id, "reason": "cooldown"})
                return False
            self._store.set_last_accepted_at(sender_id, now_ts)
            return True
