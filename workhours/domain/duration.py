"""Clock-time parsing and shift duration arithmetic."""
from __future__ import annotations

from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from workhours.exceptions import ValidationError

HOURS_QUANTUM = Decimal("0.01")
_SECONDS_PER_HOUR = Decimal(3600)


def round_hours(value: Decimal) -> Decimal:
    return value.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def parse_date(value: Any, *, field: str = "date") -> date:
    """Coerce ``value`` (a date or an ISO ``YYYY-MM-DD`` string) to a ``date``."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text_value = str(value or "").strip()
    if not text_value:
        raise ValidationError(f"The {field} is required")
    try:
        if "T" in text_value:
            return datetime.fromisoformat(text_value).date()
        return date.fromisoformat(text_value)
    except ValueError as exc:
        raise ValidationError(f"Invalid {field}: {text_value!r}") from exc


def parse_time(value: Any, *, field: str = "time") -> time:
    """Coerce ``value`` (a time or an ``HH:MM[:SS]`` string) to a ``time``."""

    if isinstance(value, datetime):
        value = value.timetz()
    if isinstance(value, time):
        if value.tzinfo is not None:
            raise ValidationError(f"Invalid {field}: {value.isoformat()!r}")
        return value
    text_value = str(value or "").strip()
    if not text_value:
        raise ValidationError(f"The {field} is required")
    try:
        parsed = time.fromisoformat(text_value)
    except ValueError as exc:
        raise ValidationError(f"Invalid {field}: {text_value!r}") from exc
    # Shifts are recorded in naive local time.
    if parsed.tzinfo is not None:
        raise ValidationError(f"Invalid {field}: {text_value!r}")
    return parsed


def duration(entry_date: Any, start_time: Any, end_time: Any) -> Decimal:
    """Return the hours worked between two clock times on ``entry_date``.

    An end earlier than the start is an overnight shift and wraps by 24 hours;
    equal times give zero. The result is rounded half-up to two decimals.
    """

    day = parse_date(entry_date)
    start = datetime.combine(day, parse_time(start_time, field="start time"))
    end = datetime.combine(day, parse_time(end_time, field="end time"))

    raw_hours = Decimal(str((end - start).total_seconds())) / _SECONDS_PER_HOUR
    if raw_hours < 0:
        raw_hours += 24
    return round_hours(raw_hours)


__all__ = ["duration", "parse_date", "parse_time", "round_hours"]
