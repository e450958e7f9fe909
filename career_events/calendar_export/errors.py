"""Exceptions raised while building calendar links.

None of these escape :func:`career_events.calendar_export.links.create_google_calendar_link`;
they are captured on the returned outcome instead.
"""

from __future__ import annotations


class CalendarLinkError(Exception):
    """Base class for calendar link failures."""


class DateParseError(CalendarLinkError, ValueError):
    """The event date and time could not be read as an instant."""


class EncodingFailure(CalendarLinkError):
    """Any other failure while validating the event or assembling the URL."""


__all__ = ["CalendarLinkError", "DateParseError", "EncodingFailure"]
