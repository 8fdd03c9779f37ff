"""Date window normalization."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timezone

from .exceptions import InvalidDateError

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def normalize_timestamp(value: str | date, end_of_day: bool = False) -> str:
    """Return ``value`` as a UTC timestamp in ``TIMESTAMP_FORMAT``.

    Plain dates resolve to the start of the day, or to its last second when
    ``end_of_day`` is set so that the window includes the whole end date.
    Naive timestamps are taken as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.max if end_of_day else time.min)
    else:
        text = value.strip()
        try:
            if _DATE_ONLY.match(text):
                day = date.fromisoformat(text)
                parsed = datetime.combine(day, time.max if end_of_day else time.min)
            else:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as exc:
            raise InvalidDateError(f"Invalid date: {value!r}") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def normalize_window(start: str | date, end: str | date) -> tuple[str, str]:
    """Normalize both bounds of a commit window."""
    since = normalize_timestamp(start)
    until = normalize_timestamp(end, end_of_day=True)
    if since > until:
        raise InvalidDateError(f"Window start {since} is after its end {until}")
    return since, until
