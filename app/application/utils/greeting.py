from __future__ import annotations

from app.application.utils.message_rules import BOOK_CHOICE_ID, CANCEL_CHOICE_ID, CHECK_CHOICE_ID
from app.application.utils.replies import NOT_AVAILABLE_YET
from app.domain.entities.reply import Reply, ReplyButton

GREETING_BODY = "Dobar dan! Hvala što ste se javili. Izaberite opciju ispod:"

MENU_BUTTONS = (
    ReplyButton(id=BOOK_CHOICE_ID, title="Zakaži termin"),
    ReplyButton(id=CANCEL_CHOICE_ID, title="Otkaži termin"),
    ReplyButton(id=CHECK_CHOICE_ID, title="Proveri termin"),
)


def build_greeting() -> Reply:
    return Reply(text=GREETING_BODY, buttons=MENU_BUTTONS)


def build_not_available() -> Reply:
    return Reply(text=NOT_AVAILABLE_YET, buttons=MENU_BUTTONS)
