"""Formatting helpers for numbers, currency, dates and answer values."""

from __future__ import annotations

import base64
import binascii
import json
import re
from datetime import date, datetime
from typing import Any

NOT_SPECIFIED = "לא צוין"
EMPTY_ANSWER = "---"
SIGNATURE_PLACEHOLDER = "__________________"
RLM = "\u200f"
NBSP = "\u00a0"
SHEKEL = "ש״ח"

YES = "כן"
NO = "לא"

HEBREW_LETTERS = (
    "א", "ב", "ג", "ד", "ה", "ו", "ז", "ח", "ט", "י", "כ",
    "ל", "מ", "נ", "ס", "ע", "פ", "צ", "ק", "ר", "ש", "ת",
)

HEBREW_MONTHS = (
    "ינואר", "פברואר", "מרץ", "אפריל", "מאי", "יוני",
    "יולי", "אוגוסט", "ספטמבר", "אוקטובר", "נובמבר", "דצמבר",
)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")
_DMY_DATE = re.compile(r"^(\d{1,2})[/.](\d{1,2})[/.](\d{4})$")
_DATA_URL = re.compile(r"^data:[\w/+.-]+;base64,(.+)$", re.DOTALL)

_YES_TOKENS = {"yes", "true", "כן"}
_NO_TOKENS = {"no", "false", "לא"}


def format_number(value: int | float) -> str:
    """Group thousands with commas; whole floats print without decimals."""
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.2f}".rstrip("0").rstrip(".")
    return f"{int(value):,}"


def parse_date(value: Any) -> date | None:
    """Parse ISO (``YYYY-MM-DD...``) or ``DD/MM/YYYY`` values; ``None`` if malformed."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if _ISO_DATE.match(text):
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None

    match = _DMY_DATE.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None
    return None


def format_date(value: Any) -> str:
    """Format a date as ``DD/MM/YYYY``.

    Malformed input is returned unchanged rather than raising; empty input
    yields an empty string.
    """
    if value is None or value == "":
        return ""
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return parsed.strftime("%d/%m/%Y")


def format_long_date(value: date) -> str:
    """Format a date in words, e.g. ``5 במרץ 2025``."""
    return f"{value.day} ב{HEBREW_MONTHS[value.month - 1]} {value.year}"


def hebrew_label(index: int) -> str:
    """Return the Hebrew letter for a zero-based index; numbers after ת."""
    if 0 <= index < len(HEBREW_LETTERS):
        return HEBREW_LETTERS[index]
    return str(index + 1)


def join_hebrew_list(items: list[str]) -> str:
    """Join items as a Hebrew list: ``a, b וc``."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return f"{', '.join(items[:-1])} ו{items[-1]}"


def is_yes(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return isinstance(value, str) and value.strip().lower() in _YES_TOKENS


def yes_no(value: Any) -> str:
    """Render a yes/no answer; unknown or absent answers are "not specified"."""
    if isinstance(value, bool):
        return YES if value else NO
    if isinstance(value, str):
        token = value.strip().lower()
        if token in _YES_TOKENS:
            return YES
        if token in _NO_TOKENS:
            return NO
    return NOT_SPECIFIED


def or_not_specified(value: Any) -> str:
    if value is None:
        return NOT_SPECIFIED
    text = str(value).strip()
    return text or NOT_SPECIFIED


def format_value(value: Any) -> str:
    """Render any intake answer for the backup Q&A document."""
    if value is None or value == "":
        return EMPTY_ANSWER
    if isinstance(value, bool):
        return YES if value else NO
    if isinstance(value, str):
        if _ISO_DATE.match(value):
            return format_date(value)
        return value
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, (date, datetime)):
        return format_date(value)
    if isinstance(value, (list, tuple)):
        if not value:
            return EMPTY_ANSWER
        return "\n".join(f"{index}. {format_value(item)}" for index, item in enumerate(value, start=1))
    if isinstance(value, dict):
        return json.dumps(value, indent=2, ensure_ascii=False, default=str)
    return str(value)


def decode_image(data: bytes | str) -> bytes:
    """Decode raw bytes, base64 text or a ``data:`` URL into image bytes.

    Raises:
        ValueError: If a string payload is not valid base64.
    """
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)

    payload = data.strip()
    match = _DATA_URL.match(payload)
    if match:
        payload = match.group(1)
    try:
        return base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Image payload is not valid base64") from exc


def is_minor(birth_date: Any, today: date) -> bool:
    """True when the child is under 18 on ``today``; unknown birth dates count as minors."""
    born = parse_date(birth_date)
    if born is None:
        return True
    age = today.year - born.year - ((today.month, today.day) < (born.month, born.day))
    return age < 18
