from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Optional

from dateutil import parser as date_parser

EXPIRED = "expired"
EXPIRING_SOON = "expiring_soon"
VALID = "valid"
EXPIRY_BUCKETS = (VALID, EXPIRED, EXPIRING_SOON)

DEFAULT_WINDOW_DAYS = 30


def _as_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError):
        return None


def classify_expiry(
    reference_date: Any,
    target_date: Any,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> Optional[str]:
    """
    Bucket an expiry date relative to a reference "today".

    - target < today                          => expired
    - today <= target <= today + window_days  => expiring_soon
    - target > today + window_days            => valid

    Comparison is by calendar day. Returns None if either date is unparseable.
    """
    today = _as_date(reference_date)
    target = _as_date(target_date)
    if today is None or target is None:
        return None

    if target < today:
        return EXPIRED
    if target <= today + timedelta(days=window_days):
        return EXPIRING_SOON
    return VALID
