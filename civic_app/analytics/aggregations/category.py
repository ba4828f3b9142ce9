"""Category-based aggregations."""

from __future__ import annotations

import pandas as pd

from civic_app.core.config import UNKNOWN_CATEGORY


def aggregate_by_category(df: pd.DataFrame) -> pd.DataFrame:
    """Histogram of issues per category value as found in the data.

    Categories are not validated against the known list; a missing category
    is counted under ``"unknown"``. Rows are ordered by count for display
    only.
    """
    if df.empty or "category" not in df.columns:
        return pd.DataFrame({"category": pd.Series(dtype=str), "count": pd.Series(dtype=int)})
    categories = df["category"].fillna(UNKNOWN_CATEGORY).astype(str)
    agg = (
        categories.value_counts()
        .rename_axis("category")
        .reset_index(name="count")
        .sort_values(by=["count", "category"], ascending=[False, True])
        .reset_index(drop=True)
    )
    agg["count"] = agg["count"].astype(int)
    return agg


def category_status_matrix(df: pd.DataFrame) -> pd.DataFrame:
    """Issue counts per category (rows) and status (columns), for stacked charts."""
    if df.empty:
        return pd.DataFrame()
    out = df.copy()
    out["category"] = out["category"].fillna(UNKNOWN_CATEGORY)
    out["status"] = out["status"].fillna("unknown")
    return (
        out.groupby(["category", "status"], dropna=False)
        .size()
        .rename("count")
        .reset_index()
        .sort_values(by=["category", "status"])
        .reset_index(drop=True)
    )
