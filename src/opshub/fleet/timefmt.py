"""Relative and calendar labels for workflow timestamps.

Rounding policy: the minute tier counts whole elapsed minutes, so anything
under a full minute reads "Now" / "In moments". The hour and day tiers round
half away from zero. A label only moves to the coarser unit once the full
threshold of the current one is crossed (60 minutes is "1 hr ago").
"""

from __future__ import annotations

import math
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo

from opshub.fleet.models import as_utc

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _round_half_up(value: float) -> int:
    # Only called with non-negative magnitudes.
    return math.floor(value + 0.5)


def _magnitude(minutes: int) -> tuple[str, int]:
    """Pick the coarsest unit for a whole-minute magnitude."""
    if minutes < 1:
        return "moment", 0
    if minutes < 60:
        return "min", minutes
    hours = _round_half_up(minutes / 60)
    if hours < 24:
        return "hr", hours
    return "d", _round_half_up(hours / 24)


def relative_label(now: datetime, target: datetime) -> str:
    """Describe *target* relative to *now*, e.g. "5 min ago" or "In 2 hr".

    Naive values on either side are read as UTC.
    """
    delta_seconds = (as_utc(now) - as_utc(target)).total_seconds()
    minutes = int(abs(delta_seconds) // 60)
    unit, amount = _magnitude(minutes)

    if delta_seconds < 0:
        if unit == "moment":
            return "In moments"
        if unit == "d":
            return f"In {amount}d"
        return f"In {amount} {unit}"

    if unit == "moment":
        return "Now"
    if unit == "d":
        return f"{amount}d ago"
    return f"{amount} {unit} ago"


def calendar_label(target: datetime, tz: tzinfo | str | None = None) -> str:
    """Absolute label such as "Oct 18, 3:05 PM", in *tz* or the timestamp's own zone."""
    if isinstance(tz, str):
        tz = ZoneInfo(tz)
    target = as_utc(target)
    local = target.astimezone(tz) if tz is not None else target
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{_MONTHS[local.month - 1]} {local.day}, {hour}:{local.minute:02d} {meridiem}"
