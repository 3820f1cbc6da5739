from __future__ import annotations

from app.domain.entities.conversation_state import ConversationState, Stage
from app.domain.entities.slot import Slot


def start_booking() -> ConversationState:
    return ConversationState(stage=Stage.AWAITING_DATETIME)


def with_slot(slot: Slot) -> ConversationState:
    """Slot accepted: keep it and ask for the customer's name."""
    return ConversationState(
        stage=Stage.AWAITING_NAME,
        pending_calendar_id=slot.calendar_id,
        pending_start=slot.start,
        pending_end=slot.end,
    )


def with_name(state: ConversationState, name: str) -> ConversationState:
    return ConversationState(
        stage=Stage.AWAITING_SERVICE,
        pending_calendar_id=state.pending_calendar_id,
        pending_start=state.pending_start,
        pending_end=state.pending_end,
        pending_name=name,
    )


def pending_slot(state: ConversationState) -> Slot | None:
    if state.pending_start is None or state.pending_end is None or not state.pending_calendar_id:
        return None
    return Slot(start=state.pending_start, end=state.pending_end, calendar_id=state.pending_calendar_id)


def completed() -> ConversationState:
    return ConversationState(stage=Stage.COMPLETED)
