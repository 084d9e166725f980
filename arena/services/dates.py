"""Parsing of booking dates supplied by callers."""

from __future__ import annotations

import datetime as dt

from dateutil.parser import isoparser

from arena.domain.errors import MalformedDateInput

_ISO = isoparser()


def parse_booking_date(value: str | dt.date) -> dt.date:
    """Return the calendar date for an ISO ``YYYY-MM-DD`` string or date object.

    Raises :class:`MalformedDateInput` for anything else, including strings
    carrying a time component.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise MalformedDateInput(value)
    raw = value.strip()
    try:
        parsed = _ISO.parse_isodate(raw)
    except (ValueError, OverflowError) as exc:
        raise MalformedDateInput(value) from exc
    # Reduced, basic, ordinal and week forms parse too; only YYYY-MM-DD is accepted.
    if parsed.isoformat() != raw:
        raise MalformedDateInput(value)
    return parsed


def today() -> dt.date:
    return dt.date.today()
