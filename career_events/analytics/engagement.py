"""Open and click rates from the newsletter event log.

This module exposes :func:`compute_engagement_rates`, which partitions a
scoped bag of events into ``sent``/``opened``/``clicked`` counts and turns
them into percentages of the sent count.  The log is taken as recorded:
events of any other type are ignored, and rates are *not* clipped, so
duplicate ``opened`` rows can push a rate above 100.  Scoping the log to a
campaign or to the most recent campaigns is done beforehand, see
:mod:`career_events.analytics.scope`.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union

import pandas as pd
import polars as pl

from .frame_bridge import records_to_frame, sort_for_determinism, to_pd, to_pl

LOGGER = logging.getLogger(__name__)

SENT = "sent"
OPENED = "opened"
CLICKED = "clicked"
TRACKED_EVENT_TYPES = (SENT, OPENED, CLICKED)

EVENT_COLUMNS = ["campaign_id", "event_type"]


@dataclass(frozen=True)
class EngagementEvent:
    """A single recorded newsletter interaction."""

    event_type: str
    campaign_id: Any = None


@dataclass(frozen=True)
class EventCounts:
    sent: int = 0
    opened: int = 0
    clicked: int = 0


@dataclass(frozen=True)
class RateResult:
    """Open and click rates in percent of the sent count."""

    open_rate_percent: float = 0.0
    click_rate_percent: float = 0.0


EventLog = Union[pd.DataFrame, Iterable[Any]]


def _event_type_of(event: Any) -> Any:
    if isinstance(event, Mapping):
        return event.get("event_type")
    return getattr(event, "event_type", None)


def _text_or_none(value: Any) -> Any:
    return value if isinstance(value, str) else None


def campaign_key(value: Any) -> str:
    """Text form of a campaign id; integral floats lose their ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalise_campaign_column(df: pd.DataFrame) -> pd.DataFrame:
    """Rename a legacy ``campaign`` column to ``campaign_id``."""
    if "campaign_id" not in df.columns and "campaign" in df.columns:
        df = df.rename(columns={"campaign": "campaign_id"})
    return df


def events_to_frame(events: EventLog) -> pd.DataFrame:
    """Return ``events`` as a DataFrame with ``campaign_id``/``event_type``."""
    if isinstance(events, pd.DataFrame):
        df = normalise_campaign_column(events)
        for col in EVENT_COLUMNS:
            if col not in df.columns:
                df = df.assign(**{col: None})
        return df
    return records_to_frame(events, EVENT_COLUMNS)


def count_event_types(events: EventLog) -> EventCounts:
    """Count ``sent``, ``opened`` and ``clicked`` events.

    Matching is exact and case-sensitive.  Rows with any other type, or with
    no type at all, are counted in none of the three.
    """
    if isinstance(events, pd.DataFrame):
        if "event_type" not in events.columns:
            return EventCounts()
        types = events["event_type"].map(_text_or_none)
        tally = {k: int((types == k).sum()) for k in TRACKED_EVENT_TYPES}
    else:
        seen = Counter(t for t in map(_event_type_of, events) if _text_or_none(t))
        tally = {k: seen.get(k, 0) for k in TRACKED_EVENT_TYPES}
    return EventCounts(
        sent=tally[SENT], opened=tally[OPENED], clicked=tally[CLICKED]
    )


def rates_from_counts(counts: EventCounts) -> RateResult:
    """Turn counts into percentages; both are ``0`` when nothing was sent."""
    if counts.sent <= 0:
        return RateResult(0.0, 0.0)
    return RateResult(
        open_rate_percent=(counts.opened / counts.sent) * 100,
        click_rate_percent=(counts.clicked / counts.sent) * 100,
    )


def compute_engagement_rates(events: EventLog) -> RateResult:
    """Compute open and click rates for an already scoped event log.

    Parameters
    ----------
    events:
        A DataFrame with an ``event_type`` column, or an iterable of
        :class:`EngagementEvent`, mappings or objects exposing
        ``event_type``.  The caller is responsible for restricting it to the
        wanted campaigns.
    """
    counts = count_event_types(events)
    if counts.sent and (counts.opened > counts.sent or counts.clicked > counts.sent):
        LOGGER.debug(
            "More engagement than sends (sent=%d opened=%d clicked=%d)",
            counts.sent,
            counts.opened,
            counts.clicked,
        )
    return rates_from_counts(counts)


def compute_campaign_rates(events: EventLog) -> pd.DataFrame:
    """Compute counts and rates per campaign.

    Returns a DataFrame indexed by ``campaign_id`` with the columns
    ``N_sent``, ``N_opened``, ``N_clicked``, ``open_rate_percent`` and
    ``click_rate_percent``, ordered by campaign id.  Rows without a campaign
    id are dropped.
    """
    cols = {
        "N_sent": int,
        "N_opened": int,
        "N_clicked": int,
        "open_rate_percent": float,
        "click_rate_percent": float,
    }
    df = events_to_frame(events)
    df = df.loc[df["campaign_id"].notna(), EVENT_COLUMNS]
    if df.empty:
        empty = pd.DataFrame(columns=list(cols)).astype(cols)
        empty.index.name = "campaign_id"
        return empty

    # Mixed id types (e.g. 7 and "7") are the same campaign
    df = df.assign(
        campaign_id=df["campaign_id"].map(campaign_key),
        event_type=df["event_type"].map(_text_or_none),
    )

    et = pl.col("event_type").cast(pl.Utf8)
    counts = to_pl(df).group_by("campaign_id").agg(
        (et == SENT).sum().cast(pl.Int64).alias("N_sent"),
        (et == OPENED).sum().cast(pl.Int64).alias("N_opened"),
        (et == CLICKED).sum().cast(pl.Int64).alias("N_clicked"),
    )

    def _rate(col: str) -> pl.Expr:
        return (
            pl.when(pl.col("N_sent") > 0)
            .then(pl.col(col) / pl.col("N_sent") * 100)
            .otherwise(0.0)
        )

    rates = counts.with_columns(
        _rate("N_opened").alias("open_rate_percent"),
        _rate("N_clicked").alias("click_rate_percent"),
    )
    rates = sort_for_determinism(rates, ["campaign_id"])
    return to_pd(rates).set_index("campaign_id").astype(cols)
