"""Type-aware cell formatting shared by the on-screen grid and every export.

Both entry points run the same normalisation and the same type dispatch; the
only difference is that ``format_for_display`` wraps status labels in a
coloured ``Badge`` while ``format_for_export`` returns the bare label.
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime, tzinfo
from typing import Any, Callable, Dict, Mapping, Optional, Union

from dateutil import parser as date_parser
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from fleet_console.models.grid import Badge, FieldType

MISSING = "-"
MAX_TEXT_LENGTH = 50
_ELLIPSIS = "..."

_WHITESPACE_RE = re.compile(r"\s+")
_ISO_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_INT_RE = re.compile(r"^[+-]?\d+$")
_DISTANCE_HINTS = ("mileage", "km", "odometer")

# Canonical status taxonomy. Entities extend it through EntityGrid.status_colors.
STATUS_COLORS: Dict[str, str] = {
    "completed": "green",
    "complete": "green",
    "valid": "green",
    "active": "green",
    "approved": "green",
    "received": "green",
    "fixed": "green",
    "ok": "green",
    "pending": "orange",
    "maintenance": "orange",
    "booked": "orange",
    "due": "orange",
    "expiring": "yellow",
    "expiring_soon": "yellow",
    "in_progress": "blue",
    "in progress": "blue",
    "scheduled": "blue",
    "dispatched": "purple",
    "cancelled": "red",
    "canceled": "red",
    "expired": "red",
    "invalid": "red",
    "rejected": "red",
    "repair": "red",
    "inactive": "gray",
}
DEFAULT_STATUS_COLOR = "gray"


def status_color(label: str, extra: Optional[Mapping[str, str]] = None) -> str:
    key = (label or "").strip().lower()
    if extra and key in extra:
        return extra[key]
    return STATUS_COLORS.get(key, DEFAULT_STATUS_COLOR)


def status_label(text: str) -> str:
    """First character upper-cased, the remainder lower-cased."""
    if not text:
        return text
    return text[0].upper() + text[1:].lower()


def normalize(value: Any) -> Optional[str]:
    """Collapse a raw value to a clean string, or None when it should render as '-'."""
    if value is None:
        return None
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and not math.isfinite(value):
        return None

    # control characters cannot be stored in a worksheet; drop them for every channel
    text = ILLEGAL_CHARACTERS_RE.sub("", str(value))
    text = _WHITESPACE_RE.sub(" ", text).strip()
    return text or None


def _truncate(text: str) -> str:
    if len(text) > MAX_TEXT_LENGTH:
        return text[: MAX_TEXT_LENGTH - len(_ELLIPSIS)] + _ELLIPSIS
    return text


def _parse_number(text: str) -> Optional[Union[int, float]]:
    if _INT_RE.match(text):
        return int(text)
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def _group_digits(number: Union[int, float]) -> str:
    if isinstance(number, int):
        return f"{number:,}"
    number = round(number, 3)
    if number.is_integer():
        # int() also folds -0.0 into 0
        return f"{int(number):,}"
    return f"{number:,.3f}".rstrip("0").rstrip(".")


def _is_distance_key(key: str) -> bool:
    k = (key or "").lower()
    return any(hint in k for hint in _DISTANCE_HINTS)


def _format_number(key: str, text: str, raw: Any, tz: Optional[tzinfo]) -> str:
    number = _parse_number(text)
    if number is None:
        return text
    grouped = _group_digits(number)
    if _is_distance_key(key):
        return f"{grouped} km"
    return grouped


def _format_currency(key: str, text: str, raw: Any, tz: Optional[tzinfo]) -> str:
    number = _parse_number(text)
    if number is None:
        return text
    # + 0.0 turns a rounded -0.0 into 0.0
    return f"{round(number, 2) + 0.0:,.2f}"


def _format_date(key: str, text: str, raw: Any, tz: Optional[tzinfo]) -> str:
    if isinstance(raw, datetime):
        parsed, date_only = raw, False
    elif isinstance(raw, date):
        parsed, date_only = datetime(raw.year, raw.month, raw.day), True
    else:
        date_only = bool(_ISO_DATE_ONLY_RE.match(text))
        try:
            parsed = date_parser.isoparse(text)
        except (ValueError, OverflowError):
            try:
                parsed = date_parser.parse(text)
            except (ValueError, OverflowError):
                return text

    try:
        if parsed.tzinfo is not None and tz is not None and not date_only:
            parsed = parsed.astimezone(tz)

        day = f"{parsed.day:02d}-{parsed.strftime('%b')}-{parsed.year}"
        if date_only:
            return day
        return f"{day} {parsed.strftime('%I:%M %p')}"
    except (ValueError, OverflowError):
        return text


def _format_status(key: str, text: str, raw: Any, tz: Optional[tzinfo]) -> str:
    return status_label(text)


def _format_text(key: str, text: str, raw: Any, tz: Optional[tzinfo]) -> str:
    return _truncate(text)


_DISPATCH: Dict[FieldType, Callable[[str, str, Any, Optional[tzinfo]], str]] = {
    FieldType.TEXT: _format_text,
    FieldType.NUMBER: _format_number,
    FieldType.CURRENCY: _format_currency,
    FieldType.DATE: _format_date,
    FieldType.STATUS: _format_status,
}


def _coerce_type(field_type: Union[FieldType, str, None]) -> FieldType:
    if isinstance(field_type, FieldType):
        return field_type
    try:
        return FieldType(field_type)
    except ValueError:
        return FieldType.TEXT


def format_for_export(
    key: str,
    value: Any,
    field_type: Union[FieldType, str, None],
    *,
    tz: Optional[tzinfo] = None,
) -> str:
    """Plain-text cell value. Never raises and never returns a non-string."""
    text = normalize(value)
    if text is None:
        return MISSING
    return _DISPATCH[_coerce_type(field_type)](key, text, value, tz)


def format_for_display(
    key: str,
    value: Any,
    field_type: Union[FieldType, str, None],
    *,
    tz: Optional[tzinfo] = None,
    status_colors: Optional[Mapping[str, str]] = None,
) -> Union[str, Badge]:
    """Cell value for the on-screen table; status values become a Badge."""
    ftype = _coerce_type(field_type)
    text = format_for_export(key, value, ftype, tz=tz)
    if ftype is FieldType.STATUS and text != MISSING:
        return Badge(label=text, color=status_color(text, status_colors))
    return text
