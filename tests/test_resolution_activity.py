from datetime import UTC, datetime

import pandas as pd

from civic_app.analytics.aggregations.category import aggregate_by_category, category_status_matrix
from civic_app.analytics.aggregations.status import count_statuses
from civic_app.analytics.metrics.activity import fill_activity_gaps, normalize_timestamp, recent_activity
from civic_app.analytics.metrics.resolution import (
    add_resolution_metrics,
    average_resolution_days,
    round_half_up,
)


def _frame():
    return pd.DataFrame(
        {
            "id": ["1", "2", "3", "4"],
            "status": ["resolved", "resolved", "open", "resolved"],
            "category": ["pothole", "garbage", "pothole", None],
            "created_at": pd.to_datetime(
                ["2025-01-01T00:00:00Z", "2025-01-01T00:00:00Z", "2025-01-10T09:00:00Z", None], utc=True
            ),
            "resolved_at": pd.to_datetime(
                ["2025-01-01T06:00:00Z", "2025-01-04T00:00:00Z", None, "2025-01-05T00:00:00Z"], utc=True
            ),
        }
    )


def test_round_half_up():
    assert round_half_up(1.75) == 1.8
    assert round_half_up(0.25) == 0.3
    assert round_half_up(2.349) == 2.3
    assert round_half_up(float("nan")) == 0.0


def test_resolution_days_fractional():
    out = add_resolution_metrics(_frame())
    assert out.loc[0, "resolution_days"] == 0.25
    assert out.loc[1, "resolution_days"] == 3.0
    assert pd.isna(out.loc[2, "resolution_days"])
    # missing created_at never qualifies
    assert not out.loc[3, "resolution_qualifies"]
    assert average_resolution_days(out) == (0.25 + 3.0) / 2


def test_average_resolution_days_empty():
    assert average_resolution_days(pd.DataFrame()) == 0.0


def test_count_statuses():
    counts = count_statuses(_frame())
    assert counts == {"total": 4, "open": 1, "in_progress": 0, "resolved": 3, "other": 0}


def test_aggregate_by_category_orders_by_count():
    out = aggregate_by_category(_frame())
    assert list(out["category"]) == ["pothole", "garbage", "unknown"]
    assert list(out["count"]) == [2, 1, 1]


def test_category_status_matrix():
    out = category_status_matrix(_frame())
    row = out[(out["category"] == "pothole") & (out["status"] == "open")]
    assert int(row["count"].iloc[0]) == 1


def test_recent_activity_and_gap_fill():
    now = datetime(2025, 1, 11, tzinfo=UTC)
    activity = recent_activity(_frame(), now, window_days=5)
    assert activity.to_dict("records") == [{"date": "2025-01-10", "count": 1}]
    dense = fill_activity_gaps(activity, now, window_days=5)
    assert list(dense["date"]) == [
        "2025-01-06",
        "2025-01-07",
        "2025-01-08",
        "2025-01-09",
        "2025-01-10",
        "2025-01-11",
    ]
    assert int(dense["count"].sum()) == 1


def test_normalize_timestamp():
    assert normalize_timestamp(None) is None
    assert normalize_timestamp("garbage") is None
    ts = normalize_timestamp("2025-01-01T05:30:00+05:30")
    assert ts == pd.Timestamp("2025-01-01T00:00:00Z")
    assert str(ts.tz) == "UTC"
