"""Calendar export for event registrants.

This subpackage turns an event record and a registrant's email into a
Google Calendar deep link.  Date handling lives in ``timestamps``, the input
model in ``models`` and URL assembly in ``links``.
"""

from __future__ import annotations

from .errors import CalendarLinkError, DateParseError, EncodingFailure
from .links import CalendarLinkOutcome, create_google_calendar_link, resolve_calendar_link
from .models import CalendarEvent

__all__ = [
    "CalendarEvent",
    "CalendarLinkError",
    "CalendarLinkOutcome",
    "DateParseError",
    "EncodingFailure",
    "create_google_calendar_link",
    "resolve_calendar_link",
]
