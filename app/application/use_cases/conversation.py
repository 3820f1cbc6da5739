from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from app.application.ports.calendar import CalendarPort
from app.application.use_cases.slot_finder import ALTERNATIVES_COUNT, SlotFinder
from app.application.utils import replies
from app.application.utils.date_parser import parse_datetime
from app.application.utils.greeting import build_greeting, build_not_available
from app.application.utils.message_rules import (
    is_booking_request,
    is_cancel_request,
    is_check_request,
    match_service,
)
from app.application.utils.state_helpers import (
    completed,
    pending_slot,
    start_booking,
    with_name,
    with_slot,
)
from app.domain.entities.booking import BookingRequest
from app.domain.entities.client_config import ClientConfig
from app.domain.entities.conversation_state import ConversationState, Stage
from app.domain.entities.message import InboundMessage
from app.domain.entities.reply import Reply

MIN_NAME_LENGTH = 2


@dataclass(frozen=True)
class StepResult:
    state: ConversationState
    reply: Reply
    event_id: str | None = None


StageHandler = Callable[[ClientConfig, ConversationState, InboundMessage, datetime], StepResult]


class ConversationEngine:
    """
    One handler per stage. Each handler returns the next state and the reply;
    nothing is persisted here.
    """

    def __init__(self, slot_finder: SlotFinder, calendar: CalendarPort) -> None:
        self._slot_finder = slot_finder
        self._calendar = calendar
        self._logger = logging.getLogger(__name__)
        self._handlers: dict[Stage, StageHandler] = {
            Stage.NONE: self._handle_none,
            Stage.AWAITING_DATETIME: self._handle_awaiting_datetime,
            Stage.AWAITING_NAME: self._handle_awaiting_name,
            Stage.AWAITING_SERVICE: self._handle_awaiting_service,
            Stage.COMPLETED: self._handle_none,
        }

    def step(
        self,
        client: ClientConfig,
        state: ConversationState | None,
        message: InboundMessage,
        now: datetime,
    ) -> StepResult:
        current = state or ConversationState()
        handler = self._handlers[current.stage]
        result = handler(client, current, message, now)
        if result.state.stage != current.stage:
            self._logger.info(
                "Stage transition",
                extra={
                    "routing_key": message.routing_key,
                    "sender_id": message.sender_id,
                    "stage": f"{current.stage.value}->{result.state.stage.value}",
                },
            )
        return result

    def _handle_none(
        self,
        client: ClientConfig,
        state: ConversationState,
        message: InboundMessage,
        now: datetime,
    ) -> StepResult:
        if is_cancel_request(message.text, message.choice_id) or is_check_request(message.text, message.choice_id):
            return StepResult(state=ConversationState(), reply=build_not_available())
        if is_booking_request(message.text, message.choice_id):
            return StepResult(state=start_booking(), reply=Reply(text=replies.ASK_DATETIME))
        return StepResult(state=ConversationState(), reply=build_greeting())

    def _handle_awaiting_datetime(
        self,
        client: ClientConfig,
        state: ConversationState,
        message: InboundMessage,
        now: datetime,
    ) -> StepResult:
        requested = self._requested_start(client, message, now)
        if requested is None:
            return StepResult(state=state, reply=Reply(text=replies.CLARIFY_DATETIME))

        slot = self._slot_finder.check_slot(client, requested)
        if slot is not None:
            return StepResult(state=with_slot(slot), reply=replies.build_ask_name(slot.start))

        alternatives = self._slot_finder.find_alternatives(client, requested, ALTERNATIVES_COUNT)
        if not alternatives:
            return StepResult(state=state, reply=Reply(text=replies.NO_NEARBY_SLOTS))
        return StepResult(state=state, reply=replies.build_alternatives(alternatives))

    def _handle_awaiting_name(
        self,
        client: ClientConfig,
        state: ConversationState,
        message: InboundMessage,
        now: datetime,
    ) -> StepResult:
        name = (message.text or "").strip()
        if len(name) < MIN_NAME_LENGTH:
            return StepResult(state=state, reply=Reply(text=replies.NAME_TOO_SHORT))
        return StepResult(
            state=with_name(state, name),
            reply=replies.build_service_list(client.services, name=name),
        )

    def _handle_awaiting_service(
        self,
        client: ClientConfig,
        state: ConversationState,
        message: InboundMessage,
        now: datetime,
    ) -> StepResult:
        service = match_service(message.text, client.services)
        if service is None:
            return StepResult(state=state, reply=replies.build_service_list(client.services))

        slot = pending_slot(state)
        if slot is None or not state.pending_name:
            # Incomplete state cannot be booked; start over from the date question.
            self._logger.warning(
                "Incomplete booking state",
                extra={"routing_key": message.routing_key, "sender_id": message.sender_id},
            )
            return StepResult(state=start_booking(), reply=Reply(text=replies.ASK_DATETIME))

        request = BookingRequest(
            customer_name=state.pending_name,
            service=service,
            slot=slot,
            sender_id=message.sender_id or "",
        )
        event_id = self._calendar.create_event(
            calendar_id=slot.calendar_id,
            start=slot.start,
            end=slot.end,
            timezone=client.timezone,
            summary=request.summary,
            description=request.description,
        )
        self._logger.info(
            "Booking created",
            extra={"routing_key": message.routing_key, "sender_id": message.sender_id, "calendar_id": slot.calendar_id},
        )
        return StepResult(
            state=completed(),
            reply=replies.build_confirmation(request.customer_name, service, slot.start.astimezone(client.tz)),
            event_id=event_id,
        )

    def _requested_start(self, client: ClientConfig, message: InboundMessage, now: datetime) -> datetime | None:
        """Datetime from a tapped alternative button, else parsed from free text."""
        tz = client.tz
        if message.choice_id and message.choice_id.startswith(replies.SLOT_CHOICE_PREFIX):
            try:
                chosen = datetime.fromisoformat(message.choice_id[len(replies.SLOT_CHOICE_PREFIX):])
            except ValueError:
                chosen = None
            if chosen is not None and chosen.tzinfo is not None and chosen >= now:
                return chosen.astimezone(tz)
        if not message.text:
            return None
        return parse_datetime(message.text, tz, now=now)
