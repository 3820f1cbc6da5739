"""
Tests for the per-conversation state machine, exercised without transport I/O.
"""

from __future__ import annotations

from app.application.utils import replies
from app.application.utils.greeting import GREETING_BODY
from app.application.utils.message_rules import BOOK_CHOICE_ID, CANCEL_CHOICE_ID, CHECK_CHOICE_ID
from app.domain.entities.conversation_state import ConversationState, Stage
from app.domain.entities.message import InboundMessage
from tests.conftest import CALENDAR_IDS, ROUTING_KEY, SERVICES, at


def _msg(text=None, choice_id=None):
    return InboundMessage(routing_key=ROUTING_KEY, sender_id="38160111", text=text, choice_id=choice_id)


def _awaiting_service(name="Ana"):
    return ConversationState(
        stage=Stage.AWAITING_SERVICE,
        pending_calendar_id="cal_a",
        pending_start=at(2, 14),
        pending_end=at(2, 14, 30),
        pending_name=name,
    )


def test_unknown_input_sends_greeting_menu(engine, client, now):
    result = engine.step(client, None, _msg("zdravo"), now)
    assert result.state.stage == Stage.NONE
    assert result.reply.text == GREETING_BODY
    assert [button.id for button in result.reply.buttons] == [BOOK_CHOICE_ID, CANCEL_CHOICE_ID, CHECK_CHOICE_ID]


def test_book_choice_starts_booking(engine, client, now):
    result = engine.step(client, None, _msg(choice_id=BOOK_CHOICE_ID), now)
    assert result.state.stage == Stage.AWAITING_DATETIME
    assert result.reply.text == replies.ASK_DATETIME


def test_book_phrase_starts_booking(engine, client, now):
    result = engine.step(client, None, _msg("Želim da zakažem termin"), now)
    assert result.state.stage == Stage.AWAITING_DATETIME


def test_cancel_and_check_are_not_available_yet(engine, client, now):
    for message in (_msg(choice_id=CANCEL_CHOICE_ID), _msg(choice_id=CHECK_CHOICE_ID), _msg("otkaži termin")):
        result = engine.step(client, None, message, now)
        assert result.state.stage == Stage.NONE
        assert result.reply.text == replies.NOT_AVAILABLE_YET
        assert [b.id for b in result.reply.buttons] == [BOOK_CHOICE_ID, CANCEL_CHOICE_ID, CHECK_CHOICE_ID]


def test_unparseable_datetime_asks_again(engine, client, now):
    state = ConversationState(stage=Stage.AWAITING_DATETIME)
    result = engine.step(client, state, _msg("kad god"), now)
    assert result.state == state
    assert result.reply.text == replies.CLARIFY_DATETIME


def test_free_slot_moves_to_name(engine, client, now):
    """'sutra u 14' on Monday 09:00 books Tuesday 14:00."""
    result = engine.step(client, ConversationState(stage=Stage.AWAITING_DATETIME), _msg("sutra u 14"), now)
    assert result.state.stage == Stage.AWAITING_NAME
    assert result.state.pending_start == at(2, 14)
    assert result.state.pending_end == at(2, 14, 30)
    assert result.state.pending_calendar_id == "cal_a"
    assert "utorak 02.06. u 14:00" in result.reply.text


def test_busy_slot_lists_three_alternatives(engine, client, calendar, now):
    for calendar_id in CALENDAR_IDS:
        calendar.add_busy(calendar_id, at(2, 14), at(2, 14, 30))
    state = ConversationState(stage=Stage.AWAITING_DATETIME)

    result = engine.step(client, state, _msg("sutra u 14"), now)

    assert result.state == state
    assert len(result.reply.buttons) == 3
    assert result.reply.buttons[0].id == f"{replies.SLOT_CHOICE_PREFIX}{at(2, 14, 30).isoformat()}"
    assert "1) utorak 02.06. u 14:30" in result.reply.text


def test_outside_working_hours_offers_alternatives(engine, client, now):
    """A free calendar alone is not enough: closed hours still need alternatives."""
    state = ConversationState(stage=Stage.AWAITING_DATETIME)
    result = engine.step(client, state, _msg("sutra u 20"), now)
    assert result.state == state
    assert result.reply.buttons[0].id == f"{replies.SLOT_CHOICE_PREFIX}{at(3, 9).isoformat()}"


def test_no_alternatives_asks_for_another_time(engine, client, calendar, now):
    for calendar_id in CALENDAR_IDS:
        calendar.add_busy(calendar_id, at(1, 0), at(30, 0))
    state = ConversationState(stage=Stage.AWAITING_DATETIME)
    result = engine.step(client, state, _msg("sutra u 14"), now)
    assert result.state == state
    assert result.reply.text == replies.NO_NEARBY_SLOTS


def test_tapping_an_alternative_accepts_it(engine, client, now):
    choice = f"{replies.SLOT_CHOICE_PREFIX}{at(2, 15).isoformat()}"
    result = engine.step(client, ConversationState(stage=Stage.AWAITING_DATETIME), _msg(choice_id=choice), now)
    assert result.state.stage == Stage.AWAITING_NAME
    assert result.state.pending_start == at(2, 15)


def test_tapped_alternative_is_rechecked(engine, client, calendar, now):
    """A slot taken since it was offered is not accepted."""
    for calendar_id in CALENDAR_IDS:
        calendar.add_busy(calendar_id, at(2, 15), at(2, 15, 30))
    choice = f"{replies.SLOT_CHOICE_PREFIX}{at(2, 15).isoformat()}"
    result = engine.step(client, ConversationState(stage=Stage.AWAITING_DATETIME), _msg(choice_id=choice), now)
    assert result.state.stage == Stage.AWAITING_DATETIME


def test_one_character_name_is_rejected(engine, client, now):
    state = ConversationState(stage=Stage.AWAITING_NAME, pending_calendar_id="cal_a",
                              pending_start=at(2, 14), pending_end=at(2, 14, 30))
    result = engine.step(client, state, _msg("A"), now)
    assert result.state == state
    assert result.state.stage == Stage.AWAITING_NAME
    assert result.reply.text == replies.NAME_TOO_SHORT


def test_name_is_trimmed_and_services_listed(engine, client, now):
    state = ConversationState(stage=Stage.AWAITING_NAME, pending_calendar_id="cal_a",
                              pending_start=at(2, 14), pending_end=at(2, 14, 30))
    result = engine.step(client, state, _msg("  Ana Petrović  "), now)
    assert result.state.stage == Stage.AWAITING_SERVICE
    assert result.state.pending_name == "Ana Petrović"
    assert result.state.pending_start == at(2, 14)
    for service in SERVICES:
        assert service in result.reply.text


def test_unknown_service_relists_services(engine, client, calendar, now):
    state = _awaiting_service()
    first = engine.step(client, state, _msg("masaža"), now)
    second = engine.step(client, state, _msg("pedikir"), now)
    assert first.state == state
    assert first.reply == second.reply
    for service in SERVICES:
        assert service in first.reply.text
    assert calendar.events == {}


def test_matching_service_creates_event(engine, client, calendar, now):
    """Service names match case- and diacritic-insensitively."""
    result = engine.step(client, _awaiting_service(), _msg("SISANJE"), now)

    assert result.state.stage == Stage.COMPLETED
    assert result.event_id in calendar.events
    event = calendar.events[result.event_id]
    assert event["calendar_id"] == "cal_a"
    assert event["start"] == at(2, 14)
    assert event["end"] == at(2, 14, 30)
    assert event["timezone"] == "Europe/Belgrade"
    assert event["summary"] == "Šišanje - Ana"
    assert "38160111" in event["description"]
    assert "Usluga: Šišanje" in result.reply.text


def test_service_by_list_number(engine, client, calendar, now):
    result = engine.step(client, _awaiting_service(), _msg("2"), now)
    assert result.state.stage == Stage.COMPLETED
    assert calendar.events[result.event_id]["summary"] == "Farbanje - Ana"


def test_full_flow_passes_through_every_stage(engine, client, calendar, now):
    state = None
    stages = []
    for message in (_msg(choice_id=BOOK_CHOICE_ID), _msg("sutra u 14"), _msg("Ana"), _msg("Manikir")):
        result = engine.step(client, state, message, now)
        state = result.state
        stages.append(state.stage)
    assert stages == [Stage.AWAITING_DATETIME, Stage.AWAITING_NAME, Stage.AWAITING_SERVICE, Stage.COMPLETED]
    assert len(calendar.events) == 1
