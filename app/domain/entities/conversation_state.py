from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Stage(str, Enum):
    NONE = "none"
    AWAITING_DATETIME = "awaiting_datetime"
    AWAITING_NAME = "awaiting_name"
    AWAITING_SERVICE = "awaiting_service"
    COMPLETED = "completed"

    @property
    def is_stored(self) -> bool:
        """Only the in-flight stages keep an entry in the store."""
        return self not in (Stage.NONE, Stage.COMPLETED)


@dataclass(frozen=True)
class ConversationState:
    stage: Stage = Stage.NONE
    pending_calendar_id: str | None = None
    pending_start: datetime | None = None
    pending_end: datetime | None = None
    pending_name: str | None = None
