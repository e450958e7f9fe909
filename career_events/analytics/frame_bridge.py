"""Bridges between pandas and Polars for the engagement analytics.

Callers hand event logs and campaign tables over as pandas DataFrames (or
plain records).  Group-bys run in Polars; results go back out as pandas so
the public API stays pandas-only.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import pandas as pd
import polars as pl


def to_pl(df_pd: pd.DataFrame | pl.DataFrame | None) -> pl.DataFrame:
    """Convert pandas to Polars; ``None`` and column-less frames become empty."""
    if df_pd is None:
        return pl.DataFrame()
    if isinstance(df_pd, pl.DataFrame):
        return df_pd
    if len(df_pd.columns) == 0:
        return pl.DataFrame()
    return pl.from_pandas(df_pd, include_index=False)


def to_pd(df_pl: pl.DataFrame | pd.DataFrame | None) -> pd.DataFrame:
    """Convert Polars to pandas at the public boundary."""
    if df_pl is None:
        return pd.DataFrame()
    if isinstance(df_pl, pd.DataFrame):
        return df_pl
    return df_pl.to_pandas()


def records_to_frame(records: Iterable[Any], cols: Sequence[str]) -> pd.DataFrame:
    """Build a DataFrame with ``cols`` from mappings or attribute objects.

    Missing keys/attributes become ``None`` rather than errors, so loosely
    shaped rows from the data layer still load.
    """
    rows = []
    for record in records:
        if isinstance(record, Mapping):
            rows.append({c: record.get(c) for c in cols})
        else:
            rows.append({c: getattr(record, c, None) for c in cols})
    return pd.DataFrame(rows, columns=list(cols))


def assert_schema(df: pl.DataFrame | pd.DataFrame, cols: Iterable[str]) -> None:
    """Raise ``ValueError`` when any of ``cols`` is missing from ``df``."""
    present = set(df.columns)
    missing = [c for c in cols if c not in present]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def sort_for_determinism(
    df: pl.DataFrame | pd.DataFrame,
    keys: list[str],
    descending: list[bool] | None = None,
) -> pl.DataFrame | pd.DataFrame:
    """Apply a stable multi-key sort; nulls always go last.

    ``descending`` pairs up with ``keys`` and defaults to ascending for every
    key.  Keys absent from ``df`` are skipped.
    """
    if not keys:
        return df
    flags = descending if descending is not None else [False] * len(keys)
    pairs = [(k, d) for k, d in zip(keys, flags) if k in df.columns]
    if not pairs:
        return df
    valid = [k for k, _ in pairs]
    desc = [d for _, d in pairs]
    if isinstance(df, pd.DataFrame):
        return df.sort_values(
            valid,
            ascending=[not d for d in desc],
            kind="stable",
            na_position="last",
        )
    return df.sort(valid, descending=desc, nulls_last=True, maintain_order=True)
