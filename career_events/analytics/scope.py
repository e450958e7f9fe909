"""Selecting which campaigns' events feed the engagement rates.

Three scopes exist:

* :class:`SingleCampaign` – every event of one campaign;
* :class:`RecentSent` – events of the ``limit`` campaigns sent most
  recently.  Campaigns are ordered by ``sent_at`` descending, ties broken by
  ``id`` ascending, and campaigns with no ``sent_at`` come last;
* :class:`AllCampaigns` – the whole log, unfiltered.

Campaign ids are opaque; they are compared by their string form so ``7`` and
``"7"`` refer to the same campaign.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

import pandas as pd

from .engagement import (
    EventLog,
    RateResult,
    campaign_key,
    compute_engagement_rates,
    events_to_frame,
)
from .frame_bridge import assert_schema, sort_for_determinism

LOGGER = logging.getLogger(__name__)

CAMPAIGN_COLUMNS = ["id", "status", "sent_at"]
SENT_STATUS = "sent"


@dataclass(frozen=True)
class SingleCampaign:
    campaign_id: Any


@dataclass(frozen=True)
class RecentSent:
    limit: int = 5

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit <= 0:
            raise ValueError(f"limit must be a positive integer, got {self.limit!r}")


@dataclass(frozen=True)
class AllCampaigns:
    pass


AggregationScope = Union[SingleCampaign, RecentSent, AllCampaigns]


def select_recent_campaign_ids(campaigns: pd.DataFrame, limit: int) -> list[Any]:
    """Return ids of the ``limit`` most recently sent campaigns.

    Parameters
    ----------
    campaigns:
        Campaign table with at least ``id``, ``status`` and ``sent_at``.
        Only rows whose status is ``"sent"`` are considered.
    limit:
        Maximum number of ids to return.
    """
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit!r}")
    if campaigns.empty:
        return []
    assert_schema(campaigns, CAMPAIGN_COLUMNS)

    sent = campaigns.loc[campaigns["status"] == SENT_STATUS, ["id", "sent_at"]]
    sent = sent.assign(
        sent_at=pd.to_datetime(sent["sent_at"], errors="coerce", utc=True)
    )
    ordered = sort_for_determinism(sent, ["sent_at", "id"], descending=[True, False])
    return ordered["id"].head(limit).tolist()


def filter_events_to_scope(
    events: EventLog,
    scope: AggregationScope,
    campaigns: Optional[pd.DataFrame] = None,
) -> pd.DataFrame:
    """Restrict the event log to ``scope``.

    ``campaigns`` is only consulted for :class:`RecentSent`, where it is
    required.
    """
    df = events_to_frame(events)
    if isinstance(scope, AllCampaigns):
        return df
    if isinstance(scope, SingleCampaign):
        wanted = {campaign_key(scope.campaign_id)}
    elif isinstance(scope, RecentSent):
        if campaigns is None:
            raise ValueError("RecentSent scope needs the campaigns table")
        ids = select_recent_campaign_ids(campaigns, scope.limit)
        if not ids:
            LOGGER.info("No sent campaigns; recent scope is empty")
            return df.iloc[0:0]
        wanted = {campaign_key(i) for i in ids}
    else:
        raise TypeError(f"Unsupported scope: {scope!r}")

    mask = df["campaign_id"].notna() & df["campaign_id"].map(campaign_key).isin(wanted)
    return df.loc[mask]


def compute_scoped_rates(
    events: EventLog,
    scope: AggregationScope,
    campaigns: Optional[pd.DataFrame] = None,
) -> RateResult:
    """Filter ``events`` to ``scope`` and compute its rates."""
    return compute_engagement_rates(filter_events_to_scope(events, scope, campaigns))
