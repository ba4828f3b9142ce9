"""Reusable table helpers for Streamlit rendering."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from civic_app.analytics.metrics.activity import normalize_timestamp
from civic_app.core.config import SETTINGS
from civic_app.core.policy_config import get_columns


def add_days_open(df: pd.DataFrame, now) -> pd.DataFrame:
    """Age in fractional days, measured to ``resolved_at`` for resolved issues."""
    if df.empty or "created_at" not in df.columns:
        return df
    out = df.copy()
    created = pd.to_datetime(out["created_at"], utc=True, errors="coerce")
    if "resolved_at" in out.columns:
        resolved = pd.to_datetime(out["resolved_at"], utc=True, errors="coerce")
    else:
        resolved = pd.Series(pd.NaT, index=out.index, dtype="datetime64[ns, UTC]")
    end = resolved.fillna(normalize_timestamp(now))
    out["days_open"] = ((end - created).dt.total_seconds() / 86400.0).round(1)
    return out


def prepare_issue_table(
    df: pd.DataFrame,
    *,
    set_name: str = "issue_list",
    extra_columns: list[str] | None = None,
) -> tuple[pd.DataFrame, list[str], dict[str, object]]:
    if df.empty:
        return df, [], {}

    canonical = get_columns(set_name) or []
    display_cols: list[str] = [col for col in canonical if col in df.columns]
    if extra_columns:
        for col in extra_columns:
            if col in df.columns and col not in display_cols:
                display_cols.append(col)
    if not display_cols:
        display_cols = list(df.columns)

    cfg: dict[str, object] = {}
    if "id" in display_cols:
        cfg["id"] = st.column_config.TextColumn("ID", width="small")
    if "issue_id" in display_cols:
        cfg["issue_id"] = st.column_config.TextColumn("ID", width="small")
    for col in ("created_at", "resolved_at", "sla_deadline", "reported_at"):
        if col in display_cols:
            cfg[col] = st.column_config.DatetimeColumn(col.replace("_", " ").title(), format="YYYY-MM-DD HH:mm")
    if "days_open" in display_cols:
        cfg["days_open"] = st.column_config.NumberColumn("Days Open", format="%.1f")
    return df.head(SETTINGS.max_table_rows), display_cols, cfg
