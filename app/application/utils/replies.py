from __future__ import annotations

from datetime import datetime
from typing import Sequence

from app.domain.entities.reply import Reply, ReplyButton
from app.domain.entities.slot import Slot

WEEKDAY_NAMES = ("ponedeljak", "utorak", "sreda", "četvrtak", "petak", "subota", "nedelja")
WEEKDAY_SHORT = ("pon", "uto", "sre", "čet", "pet", "sub", "ned")

SLOT_CHOICE_PREFIX = "slot:"

ASK_DATETIME = (
    "Kada vam odgovara termin? Napišite dan i vreme, "
    'npr. "sutra u 14" ili "petak u 10:30".'
)
NOT_AVAILABLE_YET = 'Ova opcija još nije dostupna. Za novi termin izaberite "Zakaži termin".'
CLARIFY_DATETIME = (
    "Nismo razumeli datum i vreme, ili je traženo vreme već prošlo. "
    'Pokušajte ponovo, npr. "sutra u 14" ili "ponedeljak u 9:30".'
)
NO_NEARBY_SLOTS = (
    "Nažalost, nema slobodnih termina u blizini traženog vremena. "
    "Molimo predložite drugo vreme."
)
NAME_TOO_SHORT = "Molimo unesite vaše ime (najmanje 2 slova)."


def format_slot(start: datetime) -> str:
    """Long form, e.g. 'utorak 14.05. u 14:00'."""
    return f"{WEEKDAY_NAMES[start.weekday()]} {start:%d.%m.} u {start:%H:%M}"


def format_slot_short(start: datetime) -> str:
    """Button title form (max 20 chars), e.g. 'uto 14.05. 14:00'."""
    return f"{WEEKDAY_SHORT[start.weekday()]} {start:%d.%m.} {start:%H:%M}"


def build_alternatives(slots: Sequence[Slot]) -> Reply:
    lines = ["Traženi termin nije slobodan. Slobodni termini:"]
    for index, slot in enumerate(slots, start=1):
        lines.append(f"{index}) {format_slot(slot.start)}")
    lines.append("Izaberite jedan od ponuđenih ili napišite drugo vreme.")
    buttons = tuple(
        ReplyButton(id=f"{SLOT_CHOICE_PREFIX}{slot.start.isoformat()}", title=format_slot_short(slot.start))
        for slot in slots[:3]
    )
    return Reply(text="\n".join(lines), buttons=buttons)


def build_ask_name(start: datetime) -> Reply:
    return Reply(text=f"Termin {format_slot(start)} je slobodan. Kako se zovete?")


def build_service_list(services: Sequence[str], name: str | None = None) -> Reply:
    header = f"Hvala, {name}! Koju uslugu želite?" if name else "Molimo izaberite jednu od ponuđenih usluga:"
    lines = [header]
    for index, service in enumerate(services, start=1):
        lines.append(f"{index}) {service}")
    lines.append("Napišite naziv ili broj usluge.")
    return Reply(text="\n".join(lines))


def build_confirmation(name: str, service: str, start: datetime) -> Reply:
    return Reply(
        text=(
            "Vaš termin je zakazan ✅\n"
            f"Usluga: {service}\n"
            f"Vreme: {format_slot(start)}\n"
            f"Ime: {name}\n"
            "Vidimo se!"
        )
    )
