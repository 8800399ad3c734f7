"""Calendar-day guards. The engine only ever works on canonical ``date`` values."""

from __future__ import annotations

from datetime import date, datetime

from readiness_engine.exceptions import InvalidReferenceDateError


def ensure_calendar_day(value: object) -> date:
    """Return *value* if it is a plain calendar day, else raise.

    ``datetime`` is a subclass of ``date`` but carries a time of day, so it
    is rejected: day-window membership must never depend on elapsed seconds.
    """
    if isinstance(value, datetime) or not isinstance(value, date):
        raise InvalidReferenceDateError(value)
    return value
