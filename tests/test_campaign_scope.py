import sys
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from career_events.analytics.engagement import RateResult
from career_events.analytics.scope import (
    AllCampaigns,
    RecentSent,
    SingleCampaign,
    compute_scoped_rates,
    filter_events_to_scope,
    select_recent_campaign_ids,
)


def _campaigns() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "id": [1, 2, 3, 4, 5],
            "status": ["sent", "sent", "sent", "sent", "draft"],
            "sent_at": ["2024-05-01 09:00", "2024-06-01 09:00", "2024-06-01 09:00", None, "2024-07-01 09:00"],
        }
    )


def test_recent_ids_ordered_by_send_time_then_id() -> None:
    assert select_recent_campaign_ids(_campaigns(), 3) == [2, 3, 1]


def test_recent_ids_puts_unsent_timestamps_last_and_skips_drafts() -> None:
    assert select_recent_campaign_ids(_campaigns(), 10) == [2, 3, 1, 4]


def test_recent_ids_tie_break_does_not_depend_on_row_order() -> None:
    shuffled = _campaigns().iloc[[2, 4, 0, 3, 1]]
    assert select_recent_campaign_ids(shuffled, 2) == [2, 3]


def test_recent_ids_empty_table() -> None:
    assert select_recent_campaign_ids(pd.DataFrame(), 5) == []


def test_recent_ids_missing_columns() -> None:
    with pytest.raises(ValueError):
        select_recent_campaign_ids(pd.DataFrame({"id": [1]}), 5)


@pytest.mark.parametrize("limit", [0, -1, True, 2.5])
def test_recent_scope_requires_positive_integer(limit: object) -> None:
    with pytest.raises(ValueError):
        RecentSent(limit)  # type: ignore[arg-type]


def test_single_campaign_scope_matches_by_text_form() -> None:
    events = pd.DataFrame(
        {
            "campaign_id": [7, 7, 8, None],
            "event_type": ["sent", "opened", "sent", "sent"],
        }
    )
    out = filter_events_to_scope(events, SingleCampaign("7"))
    assert len(out) == 2
    assert set(out["event_type"]) == {"sent", "opened"}


def test_all_campaigns_scope_keeps_everything() -> None:
    events = [{"campaign_id": 1, "event_type": "sent"}, {"campaign_id": 2, "event_type": "opened"}]
    assert len(filter_events_to_scope(events, AllCampaigns())) == 2


def test_recent_scope_requires_campaign_table() -> None:
    with pytest.raises(ValueError):
        filter_events_to_scope([], RecentSent(5))


def test_recent_scope_with_no_sent_campaigns_is_empty() -> None:
    campaigns = pd.DataFrame({"id": [1], "status": ["draft"], "sent_at": [None]})
    events = [{"campaign_id": 1, "event_type": "sent"}]
    out = filter_events_to_scope(events, RecentSent(5), campaigns)
    assert out.empty
    assert compute_scoped_rates(events, RecentSent(5), campaigns) == RateResult(0.0, 0.0)


def test_recent_scope_excludes_older_campaigns() -> None:
    campaigns = pd.DataFrame(
        {
            "id": ["c1", "c2", "c3", "c4", "c5", "c6"],
            "status": ["sent"] * 6,
            "sent_at": pd.date_range("2024-01-01", periods=6, freq="D"),
        }
    )
    # c1 is the oldest and drops out of the five most recent
    events = pd.DataFrame(
        {
            "campaign_id": ["c1"] * 4 + ["c6", "c6", "c2", "c2"],
            "event_type": ["sent", "sent", "sent", "sent", "sent", "opened", "sent", "clicked"],
        }
    )

    rates = compute_scoped_rates(events, RecentSent(5), campaigns)

    assert rates.open_rate_percent == 50.0
    assert rates.click_rate_percent == 50.0


def test_single_campaign_rates() -> None:
    events = pd.DataFrame(
        {
            "campaign_id": ["a", "a", "a", "a", "b"],
            "event_type": ["sent", "sent", "sent", "sent", "sent"],
        }
    )
    events.loc[len(events)] = ["a", "opened"]
    rates = compute_scoped_rates(events, SingleCampaign("a"))
    assert rates == RateResult(25.0, 0.0)
