"""Summary figures for the newsletter widget.

Combines the active subscriber count, the sent campaign count and the scoped
engagement rates.  With a ``campaign_id`` the rates cover that campaign;
otherwise they cover the most recently sent campaigns (see
:func:`career_events.settings.get_recent_campaign_limit`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import pandas as pd

from career_events import settings

from .engagement import EventLog
from .scope import AggregationScope, RecentSent, SingleCampaign, compute_scoped_rates

ACTIVE_STATUS = "active"
SENT_STATUS = "sent"


@dataclass(frozen=True)
class NewsletterStats:
    total_subscribers: int = 0
    open_rate: float = 0.0
    click_rate: float = 0.0
    total_campaigns: int = 0

    def as_display(self) -> Dict[str, str]:
        """Return the figures as label → text, in widget order."""
        return {
            "Subscribers": f"{self.total_subscribers:,}",
            "Open Rate": format_rate(self.open_rate),
            "Click Rate": format_rate(self.click_rate),
            "Campaigns Sent": str(self.total_campaigns),
        }


def format_rate(value: float) -> str:
    return f"{value:.1f}%"


def _count_status(df: Optional[pd.DataFrame], status: str) -> int:
    if df is None or df.empty or "status" not in df.columns:
        return 0
    return int((df["status"] == status).sum())


def build_newsletter_stats(
    subscribers: Optional[pd.DataFrame],
    campaigns: Optional[pd.DataFrame],
    events: EventLog,
    campaign_id: Any = None,
    limit: Optional[int] = None,
) -> NewsletterStats:
    """Build the newsletter summary from already-fetched tables.

    Parameters
    ----------
    subscribers:
        Subscriber table with a ``status`` column; ``None`` counts as empty.
    campaigns:
        Campaign table with ``id``, ``status`` and ``sent_at``.
    events:
        The engagement event log (any shape accepted by
        :func:`~career_events.analytics.engagement.compute_engagement_rates`).
    campaign_id:
        Restrict rates to one campaign.
    limit:
        Number of recent campaigns when ``campaign_id`` is not given.
    """
    scope: AggregationScope
    if campaign_id is not None:
        scope = SingleCampaign(campaign_id)
    else:
        scope = RecentSent(limit if limit is not None else settings.get_recent_campaign_limit())

    table = campaigns if campaigns is not None else pd.DataFrame()
    rates = compute_scoped_rates(events, scope, table)
    return NewsletterStats(
        total_subscribers=_count_status(subscribers, ACTIVE_STATUS),
        open_rate=rates.open_rate_percent,
        click_rate=rates.click_rate_percent,
        total_campaigns=_count_status(campaigns, SENT_STATUS),
    )
