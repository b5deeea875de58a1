# barbershop/core.py

import re
from datetime import date, datetime, time
from typing import Tuple

from .errors import InvalidInput

HHMM_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def overlaps(start_a, end_a, start_b, end_b) -> bool:
    # half-open intervals: touching endpoints do not overlap
    return start_a < end_b and start_b < end_a


def parse_hhmm(value: str) -> int:
    """'HH:MM' -> minutes since midnight."""
    match = HHMM_RE.match(value or "")
    if match is None:
        raise InvalidInput(f"Time must be HH:MM (24h), got {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def format_hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def at_minutes(day: date, minutes: int) -> datetime:
    return datetime.combine(day, time(minutes // 60, minutes % 60))


def to_local_naive(value: datetime) -> datetime:
    # Everything is stored as naive local time
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def parse_iso_datetime(value: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        raise InvalidInput(f"Invalid ISO-8601 datetime: {value!r}")
    return to_local_naive(parsed)


def parse_iso_date(value) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"Date must be YYYY-MM-DD, got {value!r}")


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    return datetime.combine(day, time.min), datetime.combine(day, time.max)
