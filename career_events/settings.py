"""Runtime configuration read from environment variables.

Values are looked up on every call so tests and long-running hosts can change
the environment without reloading the module.

Environment variables used:

* ``CALENDAR_TIMEZONE`` – IANA zone used for event times and the ``ctz``
  calendar parameter; defaults to ``Africa/Nairobi``
* ``RECENT_CAMPAIGN_LIMIT`` – how many recently sent campaigns feed the
  overall newsletter rates; defaults to 5
"""

from __future__ import annotations

import logging
import os

LOGGER = logging.getLogger(__name__)

DEFAULT_CALENDAR_TIMEZONE = "Africa/Nairobi"
DEFAULT_RECENT_CAMPAIGN_LIMIT = 5

GOOGLE_CALENDAR_ROOT_URL = "https://calendar.google.com/calendar/"
GOOGLE_CALENDAR_RENDER_URL = "https://calendar.google.com/calendar/render"


def get_calendar_timezone() -> str:
    """Return the platform timezone identifier."""
    value = os.environ.get("CALENDAR_TIMEZONE", "").strip()
    return value or DEFAULT_CALENDAR_TIMEZONE


def get_recent_campaign_limit() -> int:
    """Return the number of recent campaigns used for overall rates.

    Controlled via environment variable ``RECENT_CAMPAIGN_LIMIT``.
    Defaults to 5 when missing, invalid or not positive.
    """
    raw = os.environ.get("RECENT_CAMPAIGN_LIMIT", str(DEFAULT_RECENT_CAMPAIGN_LIMIT))
    try:
        limit = int(raw)
    except ValueError:
        LOGGER.warning("Ignoring invalid RECENT_CAMPAIGN_LIMIT=%r", raw)
        return DEFAULT_RECENT_CAMPAIGN_LIMIT
    if limit <= 0:
        LOGGER.warning("Ignoring non-positive RECENT_CAMPAIGN_LIMIT=%r", raw)
        return DEFAULT_RECENT_CAMPAIGN_LIMIT
    return limit
