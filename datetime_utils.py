from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Union


UTC = timezone.utc

DateLike = Union[date, datetime, str]


def utc_now() -> datetime:
    return datetime.now(UTC)


def parse_iso_date(value: Optional[DateLike]) -> Optional[date]:
    """Return the calendar date of an ISO 8601 date or datetime value.

    ``"2024-03-01"``, ``"2024-03-01T10:00:00Z"`` and ``"2024-03-01 10:00:00.123+03:00"``
    all map to ``date(2024, 3, 1)``; the wall-clock date written in the string is kept,
    no timezone conversion is applied. Unparseable input returns ``None``.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    # fractional seconds with other than 3 or 6 digits
    if "T" in text or " " in text:
        head = text[:10]
        try:
            return date.fromisoformat(head)
        except ValueError:
            return None
    return None


def to_iso_date(value: Optional[DateLike]) -> Optional[str]:
    """Serialize to a date-only ``YYYY-MM-DD`` string."""

    parsed = parse_iso_date(value)
    if parsed is None:
        return None
    return parsed.isoformat()


__all__ = [
    "UTC",
    "DateLike",
    "parse_iso_date",
    "to_iso_date",
    "utc_now",
]
