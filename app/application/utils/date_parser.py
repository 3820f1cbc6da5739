from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from app.application.utils.message_rules import normalize_text

TODAY_KEYWORDS = ("danas",)
DAY_AFTER_TOMORROW_KEYWORDS = ("prekosutra",)
TOMORROW_KEYWORDS = ("sutra",)

# Full weekday stems match any inflection ("petak", "petka"); abbreviations match whole tokens only.
WEEKDAY_STEMS = {
    "ponedelj": 0,
    "ponedjelj": 0,
    "utor": 1,
    "sred": 2,
    "srijed": 2,
    "cetvrt": 3,
    "petak": 4,
    "petk": 4,
    "subot": 5,
    "nedelj": 6,
    "nedjelj": 6,
}
WEEKDAY_ABBREVIATIONS = {
    "pon": 0,
    "uto": 1,
    "sre": 2,
    "cet": 3,
    "pet": 4,
    "sub": 5,
    "ned": 6,
}

NEXT_WEEK_PATTERN = re.compile(
    r"\b(?:sledec\w*|sljedec\w*|iduc\w*|naredn\w*)\s+(?:nedelj\w*|nedjelj\w*|sedmic\w*)"
)
TIME_PATTERN = re.compile(r"(?<![\d.:])(\d{1,2})(?:[:.](\d{2}))?\s*h?(?![\d:])")
DATE_LIKE_SUFFIX = re.compile(r"\.\d{1,2}\.")
DATE_WITH_YEAR = re.compile(r"\.\d{1,2}\.\d")


def parse_datetime(text: str, timezone: ZoneInfo, now: datetime | None = None) -> datetime | None:
    """Parse a free-form date/time expression. Returns an aware datetime or None."""
    if now is None:
        now = datetime.now(timezone)
    now = now.astimezone(timezone)

    normalized = normalize_text(text or "")
    if not normalized:
        return None

    parsed_time = parse_time(normalized)
    if parsed_time is None:
        return None

    anchor = parse_day_anchor(normalized, now.date())
    if anchor is None:
        return None

    hour, minute = parsed_time
    result = datetime(anchor.year, anchor.month, anchor.day, hour, minute, tzinfo=timezone)
    if result < now:
        return None
    return result


def parse_time(normalized: str) -> tuple[int, int] | None:
    """
    Extract the first valid clock time token. Returns (hour, minute) or None.

    A "H.MM." token reads as a calendar date when another clock time is present
    or when a year follows it ("14.05.2026"); otherwise it is a time that ends
    the sentence ("sutra u 14.30.").
    """
    date_like_fallback = None
    for match in TIME_PATTERN.finditer(normalized):
        hour = int(match.group(1))
        minute = int(match.group(2)) if match.group(2) else 0
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            continue

        if match.group(2):
            separator = match.start(2) - 1
            if DATE_LIKE_SUFFIX.match(normalized, separator):
                if date_like_fallback is None and not DATE_WITH_YEAR.match(normalized, separator):
                    date_like_fallback = (hour, minute)
                continue
        elif DATE_LIKE_SUFFIX.match(normalized, match.end()):
            continue
        return (hour, minute)
    return date_like_fallback


def parse_day_anchor(normalized: str, today: date) -> date | None:
    """Resolve the calendar day the text refers to, or None if no anchor is present."""
    tokens = re.findall(r"[a-z]+", normalized)

    if any(token in TODAY_KEYWORDS for token in tokens):
        return today
    if any(token in DAY_AFTER_TOMORROW_KEYWORDS for token in tokens):
        return today + timedelta(days=2)
    if any(token in TOMORROW_KEYWORDS for token in tokens):
        return today + timedelta(days=1)

    next_week = NEXT_WEEK_PATTERN.search(normalized) is not None
    # The qualifier contains "nedelje", which must not be read as Sunday.
    weekday = find_weekday(re.findall(r"[a-z]+", NEXT_WEEK_PATTERN.sub(" ", normalized)))
    if weekday is None:
        return None

    days_ahead = (weekday - today.weekday()) % 7
    if next_week:
        days_ahead += 7
    return today + timedelta(days=days_ahead)


def find_weekday(tokens: list[str]) -> int | None:
    for token in tokens:
        if token in WEEKDAY_ABBREVIATIONS:
            return WEEKDAY_ABBREVIATIONS[token]
        for stem, weekday in WEEKDAY_STEMS.items():
            if token.startswith(stem):
                return weekday
    return None
