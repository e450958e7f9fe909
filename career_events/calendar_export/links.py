"""Google Calendar "add event" links for registrants.

:func:`create_google_calendar_link` never raises: when the event cannot be
turned into a link (unreadable date, malformed record, ...) it returns the
bare Google Calendar root so the registrant still lands somewhere useful.
:func:`resolve_calendar_link` returns the same URL together with the error
that caused a fallback, for callers and tests that need the distinction.

Query parameters, in order::

    action=TEMPLATE
    text=<title>
    dates=<start>/<end>        compact UTC, e.g. 20240610T150000Z
    details=<description body>
    location=<location>
    add=<registrant email>
    ctz=<platform timezone>
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union
from urllib.parse import quote_plus, urlencode

from career_events import settings

from .errors import CalendarLinkError, DateParseError, EncodingFailure
from .models import CalendarEvent
from .timestamps import compute_event_window

LOGGER = logging.getLogger(__name__)

DESCRIPTION_PLACEHOLDER = "Join us for this amazing event!"
ATTRIBUTION_FOOTER = "Registered via Career Events Platform"

EventInput = Union[CalendarEvent, Mapping[str, Any]]


@dataclass(frozen=True)
class CalendarLinkOutcome:
    url: str
    error: Optional[CalendarLinkError] = None

    @property
    def is_fallback(self) -> bool:
        return self.error is not None


def build_event_details(event: CalendarEvent) -> str:
    """Return the plain-text body shown in the calendar entry."""
    body = (
        f"Event: {event.title}\n"
        f"Speaker: {event.speaker_name}\n"
        f"{event.speaker_role}\n"
        "\n"
        f"📍 Location: {event.location}\n"
        f"Price: {event.price}\n"
        "\n"
        f"{event.description or DESCRIPTION_PLACEHOLDER}\n"
        "\n"
        "---\n"
        f"{ATTRIBUTION_FOOTER}"
    )
    return body.strip()


def _quote_form(
    value: str, safe: str = "", encoding: Optional[str] = None, errors: Optional[str] = None
) -> str:
    """Form-encode like a browser's ``URLSearchParams``: ``*`` kept, ``~`` escaped."""
    return quote_plus(value, safe="*", encoding=encoding, errors=errors).replace("~", "%7E")


def _build_link(event: EventInput, registrant_email: Any, tz: str) -> str:
    model = event if isinstance(event, CalendarEvent) else CalendarEvent.model_validate(event)
    if not isinstance(registrant_email, str):
        raise TypeError(f"registrant email must be a string, got {type(registrant_email).__name__}")

    window = compute_event_window(model.date, model.time, model.duration_hours, tz)
    params = {
        "action": "TEMPLATE",
        "text": model.title,
        "dates": window.dates_param,
        "details": build_event_details(model),
        "location": model.location,
        "add": registrant_email,
        "ctz": tz,
    }
    return f"{settings.GOOGLE_CALENDAR_RENDER_URL}?{urlencode(params, quote_via=_quote_form)}"


def _fallback(error: CalendarLinkError) -> CalendarLinkOutcome:
    LOGGER.warning("Error creating calendar link: %s", error)
    return CalendarLinkOutcome(url=settings.GOOGLE_CALENDAR_ROOT_URL, error=error)


def resolve_calendar_link(
    event: EventInput,
    registrant_email: str,
    timezone: Optional[str] = None,
) -> CalendarLinkOutcome:
    """Build the calendar link for ``event``, capturing any failure.

    Args:
        event: A :class:`CalendarEvent` or a raw event record.
        registrant_email: Address added as a guest of the calendar entry.
        timezone: IANA zone for naive event times and the ``ctz`` parameter;
            defaults to :func:`career_events.settings.get_calendar_timezone`.
    """
    tz = timezone or settings.get_calendar_timezone()
    try:
        url = _build_link(event, registrant_email, tz)
    except DateParseError as exc:
        return _fallback(exc)
    except Exception as exc:
        failure = EncodingFailure(f"{type(exc).__name__}: {exc}")
        failure.__cause__ = exc
        return _fallback(failure)
    return CalendarLinkOutcome(url=url)


def create_google_calendar_link(
    event: EventInput,
    registrant_email: str,
    timezone: Optional[str] = None,
) -> str:
    """Return the calendar link for ``event``, or the calendar root on failure."""
    return resolve_calendar_link(event, registrant_email, timezone).url


__all__ = [
    "CalendarLinkOutcome",
    "build_event_details",
    "create_google_calendar_link",
    "resolve_calendar_link",
]
