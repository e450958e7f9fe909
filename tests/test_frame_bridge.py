import sys
from pathlib import Path

import pandas as pd
import polars as pl
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from career_events.analytics.frame_bridge import (
    assert_schema,
    records_to_frame,
    sort_for_determinism,
    to_pd,
    to_pl,
)


def test_conversions_handle_none_and_empty() -> None:
    assert to_pl(None).is_empty()
    assert to_pl(pd.DataFrame()).is_empty()
    assert to_pd(None).empty


def test_round_trip_keeps_values() -> None:
    df = pd.DataFrame({"campaign_id": ["a", "b"], "N_sent": [1, 2]})
    back = to_pd(to_pl(df))
    assert back["campaign_id"].tolist() == ["a", "b"]
    assert back["N_sent"].tolist() == [1, 2]


def test_records_to_frame_fills_missing_fields() -> None:
    class Row:
        event_type = "sent"

    df = records_to_frame([{"event_type": "opened", "extra": 1}, Row()], ["campaign_id", "event_type"])
    assert list(df.columns) == ["campaign_id", "event_type"]
    assert df["event_type"].tolist() == ["opened", "sent"]
    assert df["campaign_id"].isna().all()


def test_assert_schema_reports_missing_columns() -> None:
    with pytest.raises(ValueError, match="sent_at"):
        assert_schema(pd.DataFrame({"id": [1], "status": ["sent"]}), ["id", "status", "sent_at"])


def test_sort_descending_with_nulls_last_pandas_and_polars() -> None:
    data = {"sent_at": [1.0, None, 3.0, 3.0], "id": [4, 1, 3, 2]}

    pdf = sort_for_determinism(pd.DataFrame(data), ["sent_at", "id"], descending=[True, False])
    pldf = sort_for_determinism(pl.DataFrame(data), ["sent_at", "id"], descending=[True, False])

    assert pdf["id"].tolist() == [2, 3, 4, 1]
    assert pldf["id"].to_list() == [2, 3, 4, 1]


def test_sort_ignores_unknown_keys() -> None:
    df = pd.DataFrame({"id": [2, 1]})
    assert sort_for_determinism(df, ["missing", "id"])["id"].tolist() == [1, 2]
