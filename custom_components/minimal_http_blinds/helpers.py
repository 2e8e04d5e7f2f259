"""Pure helpers for labelling positions and formatting device responses."""

from __future__ import annotations

import re
from datetime import datetime

from homeassistant.util import dt as dt_util

from .const import POSITION_CLOSED, POSITION_OPEN
from .exceptions import BlindsParseError

_LEADING_INT = re.compile(r"[+-]?\d+")
_NEWLINES = re.compile(r"\r\n|\r|\n")

NOT_AVAILABLE = "n/a"


def describe_position(value: int | None) -> str:
    """Return a human readable label for a position."""
    if value is None:
        return "unknown"
    if value == POSITION_OPEN:
        return "open"
    if value == POSITION_CLOSED:
        return "closed"
    if value == 50:
        return "half open"
    return f"{value}%"


def strip_newlines(body: str | None) -> str:
    return _NEWLINES.sub("", body) if body else ""


def parse_integer(body: str | None) -> int:
    """Parse the leading integer of a plain-text response body.

    Trailing garbage is ignored ("48\\n" and "48%" both give 48); a body that
    does not start with digits raises BlindsParseError.
    """
    match = _LEADING_INT.match((body or "").strip())
    if match is None:
        raise BlindsParseError(strip_newlines(body))
    return int(match.group(0))


def parse_position(body: str | None) -> int:
    position = parse_integer(body)
    if not POSITION_CLOSED <= position <= POSITION_OPEN:
        raise BlindsParseError(f"position out of range: {position}")
    return position


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}s"


def format_relative_time(instant: datetime, now: datetime) -> str:
    """Describe the distance between two instants, e.g. "5 minutes ago"."""
    delta = (now - instant).total_seconds()
    seconds = abs(delta)
    minutes = round(seconds / 60)
    hours = round(seconds / 3600)
    days = round(seconds / 86400)

    if seconds < 45:
        text = "a few seconds"
    elif seconds < 90:
        text = "a minute"
    elif minutes < 45:
        text = _plural(minutes, "minute")
    elif minutes < 90:
        text = "an hour"
    elif hours < 22:
        text = _plural(hours, "hour")
    elif hours < 36:
        text = "a day"
    elif days < 26:
        text = _plural(days, "day")
    elif days < 45:
        text = "a month"
    elif days < 320:
        text = _plural(round(days / 30.4), "month")
    elif days < 548:
        text = "a year"
    else:
        text = _plural(round(days / 365), "year")

    return f"{text} ago" if delta >= 0 else f"in {text}"


def format_last_update(instant: datetime | None, now: datetime) -> str:
    """Return "HH:MM - <time ago>" in local time, or "n/a" when never updated."""
    if instant is None:
        return NOT_AVAILABLE
    return f"{dt_util.as_local(instant):%H:%M} - {format_relative_time(instant, now)}"
