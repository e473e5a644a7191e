"""Input vocabulary of the bot: keyboard labels, typed keywords and ticket categories."""

from datetime import datetime
from enum import Enum
from typing import Optional

DATE_MARKER = "📅"
TIME_MARKER = "⏰"
DATE_FORMAT = "%d.%m.%Y"

ADULT_WORDS = ("взрос", "adult")
CHILD_WORDS = ("детск", "child", "kids")
ADULT_GLYPH = "👤"
CHILD_GLYPH = "👶"


class Intent(str, Enum):
    """Intent values double as command names in usage stats."""

    START = "start"
    INFO = "info"
    HOURS = "hours"
    CONTACTS = "contacts"
    BACK = "back"
    BACK_TO_SESSIONS = "back_to_sessions"
    BACK_TO_START = "back_to_start"
    TICKETS = "tickets"
    LOAD = "load"
    SELECT_DATE = "select_date"
    SELECT_SESSION = "select_session"
    SELECT_TICKET_CATEGORY = "select_ticket_category"
    OTHER = "other"


KEYWORDS = {
    "/start": Intent.START,
    "начать": Intent.START,
    "🚀 начать": Intent.START,
    "информация": Intent.INFO,
    "ℹ️ информация": Intent.INFO,
    "время работы": Intent.HOURS,
    "⏰ время работы": Intent.HOURS,
    "контакты": Intent.CONTACTS,
    "📞 контакты": Intent.CONTACTS,
    "назад": Intent.BACK,
    "🔙 назад": Intent.BACK,
    "🔙 к сеансам": Intent.BACK_TO_SESSIONS,
    "🔙 в начало": Intent.BACK_TO_START,
    "билеты": Intent.TICKETS,
    "🎟 купить билеты": Intent.TICKETS,
    "загруженность": Intent.LOAD,
    "📊 загруженность": Intent.LOAD,
}


def normalize(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def is_ticket_category_message(text: Optional[str]) -> bool:
    lower = normalize(text)
    if not lower:
        return False
    if lower in (ADULT_GLYPH, CHILD_GLYPH):
        return True
    return any(word in lower for word in ADULT_WORDS + CHILD_WORDS)


def ticket_category(text: Optional[str]) -> str:
    """Return "adult" or "child"; anything that is not adult counts as child."""
    lower = normalize(text)
    if lower == ADULT_GLYPH or any(word in lower for word in ADULT_WORDS):
        return "adult"
    return "child"


def classify(text: Optional[str]) -> Intent:
    lower = normalize(text)
    if is_ticket_category_message(lower):
        return Intent.SELECT_TICKET_CATEGORY
    if lower in KEYWORDS:
        return KEYWORDS[lower]
    if lower.startswith(DATE_MARKER):
        return Intent.SELECT_DATE
    if lower.startswith(TIME_MARKER):
        return Intent.SELECT_SESSION
    return Intent.OTHER


def strip_marker(text: Optional[str], marker: str) -> str:
    return (text or "").strip().replace(marker, "", 1).strip()


def parse_date(token: str) -> Optional[str]:
    """Validate a dd.mm.yyyy token; returns it normalized or None."""
    try:
        return datetime.strptime(token.strip(), DATE_FORMAT).strftime(DATE_FORMAT)
    except ValueError:
        return None


def command_name(text: Optional[str]) -> str:
    """Stats label for a typed message.

    Markers are checked before the ticket category here, so "⏰ Детский сеанс"
    counts as a session pick even though `classify` routes it as a category.
    """
    lower = normalize(text)
    if not lower:
        return "unknown"
    if lower in KEYWORDS:
        return KEYWORDS[lower].value
    if lower.startswith(DATE_MARKER):
        return Intent.SELECT_DATE.value
    if lower.startswith(TIME_MARKER):
        return Intent.SELECT_SESSION.value
    if is_ticket_category_message(lower):
        return Intent.SELECT_TICKET_CATEGORY.value
    return Intent.OTHER.value
