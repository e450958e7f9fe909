"""Turning human-entered event dates into calendar time windows.

Event dates are typed by organisers, so they arrive in whatever shape was
convenient ("Monday, June 10, 2024", "2024-06-10", ...).  Parsing is lenient
(pandas/dateutil) and runs in two stages: the raw ``"<date> <time>"`` string
first, then the same string with every comma removed from the date.  Naive
results are read in the platform timezone and carried as UTC instants at
whole-second resolution, which is exactly what the compact calendar format
can express.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

import numpy as np
import pandas as pd

from .errors import DateParseError

LOGGER = logging.getLogger(__name__)

DEFAULT_DURATION_HOURS = 2.0
MS_PER_HOUR = 3_600_000
COMPACT_FORMAT = "%Y%m%dT%H%M%SZ"


@dataclass(frozen=True)
class EventWindow:
    """Start and end of an event as UTC timestamps."""

    start: pd.Timestamp
    end: pd.Timestamp

    @property
    def dates_param(self) -> str:
        return f"{format_compact_utc(self.start)}/{format_compact_utc(self.end)}"


def normalize_duration_hours(value: Any) -> float:
    """Return ``value`` as a positive, finite number of hours.

    Anything else (missing, zero, negative, NaN, non-numeric, booleans)
    yields :data:`DEFAULT_DURATION_HOURS`.  Numeric strings are accepted.
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_DURATION_HOURS
    try:
        hours = float(value)
    except (TypeError, ValueError):
        LOGGER.debug("Non-numeric duration %r, using default", value)
        return DEFAULT_DURATION_HOURS
    if not np.isfinite(hours) or hours <= 0:
        LOGGER.debug("Unusable duration %r, using default", value)
        return DEFAULT_DURATION_HOURS
    return hours


def _parse_local(text: str) -> Optional[pd.Timestamp]:
    ts = pd.to_datetime(text, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts


def resolve_start(date: str, time: str, tz: str) -> pd.Timestamp:
    """Resolve ``date`` and ``time`` to a UTC instant.

    Raises
    ------
    DateParseError
        If neither the raw nor the comma-stripped form parses.
    """
    if not date.strip():
        raise DateParseError("Event date is empty")

    ts = _parse_local(f"{date} {time}")
    if ts is None:
        stripped = date.replace(",", "")
        if stripped != date:
            ts = _parse_local(f"{stripped} {time}")
    if ts is None:
        raise DateParseError(f"Invalid event date/time: {date!r} {time!r}")

    if ts.tzinfo is None:
        # Repeated wall times take the DST reading; skipped ones move forward
        ts = ts.tz_localize(tz, ambiguous=True, nonexistent="shift_forward")
    return ts.tz_convert("UTC").floor("s")


def compute_event_window(
    date: str, time: str, duration_hours: Any, tz: str
) -> EventWindow:
    """Return the event window starting at ``date``/``time``.

    The end is ``duration_hours`` after the start, or two hours when the
    duration is missing or unusable.
    """
    start = resolve_start(date, time, tz)
    hours = normalize_duration_hours(duration_hours)
    end = start + pd.Timedelta(milliseconds=hours * MS_PER_HOUR)
    return EventWindow(start=start, end=end.floor("s"))


def format_compact_utc(ts: pd.Timestamp | datetime) -> str:
    """Render ``ts`` as ``YYYYMMDDTHHMMSSZ``; naive values are taken as UTC."""
    stamp = pd.Timestamp(ts)
    if stamp.tzinfo is None:
        stamp = stamp.tz_localize("UTC")
    return stamp.tz_convert("UTC").strftime(COMPACT_FORMAT)


def parse_compact_utc(text: str) -> pd.Timestamp:
    """Inverse of :func:`format_compact_utc`."""
    return pd.Timestamp(datetime.strptime(text, COMPACT_FORMAT).replace(tzinfo=timezone.utc))
