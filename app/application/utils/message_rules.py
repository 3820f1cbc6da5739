from __future__ import annotations

import re
from typing import Sequence

# Explicit fold table for Serbian Latin letters with diacritics.
_FOLD = str.maketrans(
    {
        "č": "c",
        "ć": "c",
        "š": "s",
        "ž": "z",
        "đ": "d",
    }
)

BOOK_CHOICE_ID = "zakazi_termin"
CANCEL_CHOICE_ID = "otkazi_termin"
CHECK_CHOICE_ID = "proveri_termin"

BOOKING_KEYWORDS = ("zakaz", "rezerv", "novi termin")
CANCEL_KEYWORDS = ("otkaz", "otkazi")
CHECK_KEYWORDS = ("proveri", "provera", "moj termin")


def normalize_text(text: str) -> str:
    normalized = text.lower().translate(_FOLD)
    normalized = re.sub(r"\s+", " ", normalized).strip()
    return normalized


def is_booking_request(text: str | None, choice_id: str | None) -> bool:
    if choice_id == BOOK_CHOICE_ID:
        return True
    if not text:
        return False
    normalized = normalize_text(text)
    if any(keyword in normalized for keyword in CANCEL_KEYWORDS):
        return False
    return any(keyword in normalized for keyword in BOOKING_KEYWORDS)


def is_cancel_request(text: str | None, choice_id: str | None) -> bool:
    if choice_id == CANCEL_CHOICE_ID:
        return True
    return bool(text) and any(keyword in normalize_text(text) for keyword in CANCEL_KEYWORDS)


def is_check_request(text: str | None, choice_id: str | None) -> bool:
    if choice_id == CHECK_CHOICE_ID:
        return True
    return bool(text) and any(keyword in normalize_text(text) for keyword in CHECK_KEYWORDS)


def match_service(text: str | None, services: Sequence[str]) -> str | None:
    """Match user text to a configured service by normalized name or list number."""
    if not text:
        return None
    normalized = normalize_text(text).strip(" .)")
    if normalized.isdigit():
        index = int(normalized) - 1
        if 0 <= index < len(services):
            return services[index]
        return None
    for service in services:
        if normalize_text(service) == normalized:
            return service
    return None
