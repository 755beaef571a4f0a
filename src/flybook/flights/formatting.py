"""Display formatting for flight times and durations."""

from datetime import datetime
from typing import Any, Optional

NOT_AVAILABLE = "N/A"


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date-time string; None when it is not one."""
    if not value or not isinstance(value, str):
        return None
    s = value.strip()
    # A bare time ("10:30") or bare date has no date-time separator
    if "T" not in s:
        return None
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


def format_clock_time(timestamp: Any) -> str:
    """Return the local ``HH:MM`` time of an ISO timestamp, or ``"N/A"``.

    Offset-aware timestamps are converted to the local timezone; naive ones
    are shown as given.
    """
    dt = _parse_timestamp(timestamp)
    if dt is None:
        return NOT_AVAILABLE
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt.strftime("%H:%M")


def format_duration(departure: Any, arrival: Any) -> str:
    """Return ``"<H>h <M>m"`` for ``arrival - departure``, or ``"N/A"``.

    Components are whole hours and remaining whole minutes, floored.
    Arrival before departure is passed through with both components
    negated, e.g. ``"-1h -30m"``. The magnitude is floored, not the signed
    difference, so -90 minutes is not ``"-2h -30m"``.
    """
    start = _parse_timestamp(departure)
    end = _parse_timestamp(arrival)
    if start is None or end is None:
        return NOT_AVAILABLE
    try:
        seconds = (end - start).total_seconds()
    except TypeError:
        # naive vs offset-aware
        return NOT_AVAILABLE

    sign = -1 if seconds < 0 else 1
    total_minutes = int(abs(seconds) // 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{sign * hours}h {sign * minutes}m"
