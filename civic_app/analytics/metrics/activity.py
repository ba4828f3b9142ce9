"""Recent-activity series over issue creation dates."""

from __future__ import annotations

from datetime import datetime

import pandas as pd
import pytz

# First whole day inside the nanosecond Timestamp range
EARLIEST_CUTOFF = pd.Timestamp("1677-09-22", tz=pytz.UTC)


def normalize_timestamp(value) -> pd.Timestamp | None:
    """Normalize a timestamp-like value into UTC.

    Naive values are taken to be UTC. Returns None when the input cannot be
    parsed.
    """
    if value is None or value == "":
        return None
    ts = pd.to_datetime(value, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    try:
        if getattr(ts, "tzinfo", None) is None:
            return ts.tz_localize(pytz.UTC)
        return ts.tz_convert(pytz.UTC)
    except (TypeError, ValueError):
        return None


def window_cutoff(now: datetime, window_days: int) -> pd.Timestamp:
    """Earliest creation instant still inside the trailing window (inclusive).

    Windows reaching past the earliest representable date are clamped to it.
    """
    ts = normalize_timestamp(now)
    if ts is None:
        raise ValueError(f"Cannot interpret {now!r} as a timestamp")
    try:
        cutoff = ts - pd.Timedelta(days=window_days)
    except (OverflowError, ValueError):
        return EARLIEST_CUTOFF
    return max(cutoff, EARLIEST_CUTOFF)


def recent_activity(df: pd.DataFrame, now: datetime, window_days: int) -> pd.DataFrame:
    """Count issues per UTC creation date within the trailing window.

    Returns a ``date`` (``YYYY-MM-DD`` string) / ``count`` frame sorted
    ascending by date. Dates without issues are not emitted; see
    ``fill_activity_gaps`` for a dense series.
    """
    empty = pd.DataFrame({"date": pd.Series(dtype=str), "count": pd.Series(dtype=int)})
    if df.empty or "created_at" not in df.columns:
        return empty
    cutoff = window_cutoff(now, window_days)
    created = pd.to_datetime(df["created_at"], utc=True, errors="coerce")
    in_window = created[created.notna() & (created >= cutoff)]
    if in_window.empty:
        return empty
    dates = in_window.dt.strftime("%Y-%m-%d")
    counts = dates.value_counts().sort_index()
    return pd.DataFrame({"date": counts.index.astype(str), "count": counts.to_numpy(dtype=int)})


def fill_activity_gaps(activity: pd.DataFrame, now: datetime, window_days: int) -> pd.DataFrame:
    """Densify an activity series with zero-count days across the window, for charts."""
    start = window_cutoff(now, window_days).normalize()
    end = window_cutoff(now, 0).normalize()
    all_dates = pd.date_range(start, end, freq="D").strftime("%Y-%m-%d")
    dense = pd.DataFrame({"date": all_dates})
    dense = dense.merge(activity, on="date", how="left")
    dense["count"] = dense["count"].fillna(0).astype(int)
    return dense
