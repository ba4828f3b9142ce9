"""Chart builders (Altair) for the dashboard."""

from __future__ import annotations

import altair as alt
import pandas as pd

from civic_app.core.config import CATEGORY_LABELS, STATUS_DISPLAY_ORDER
from civic_app.core.status import status_label

STATUS_COLORS = {
    "Open": "#1f77b4",
    "In Progress": "#ff7f0e",
    "Resolved": "#2ca02c",
    "Closed": "#7f7f7f",
    "Unknown": "#d62728",
}


def _category_label(value: str) -> str:
    return CATEGORY_LABELS.get(value, str(value).replace("_", " ").title())


def activity_trend(activity: pd.DataFrame):
    """Line chart of issues reported per day, with weekend shading.

    Expects a dense ``date`` / ``count`` frame (see ``fill_activity_gaps``).
    """
    if activity is None or activity.empty:
        return None
    chart_df = activity.copy()
    chart_df["date"] = pd.to_datetime(chart_df["date"])
    chart_df["count"] = chart_df["count"].astype(int)

    base_line = (
        alt.Chart(chart_df)
        .mark_line(color="#1f77b4")
        .encode(
            x=alt.X("date:T", title="Date"),
            y=alt.Y("count:Q", title="Issues Reported"),
        )
    )
    points = (
        alt.Chart(chart_df)
        .mark_circle(color="#1f77b4", opacity=0.75, size=60)
        .encode(
            x="date:T",
            y="count:Q",
            tooltip=[
                alt.Tooltip("date:T", title="Date"),
                alt.Tooltip("count:Q", title="Reported"),
            ],
        )
    )

    shading = alt.Chart(pd.DataFrame()).mark_rect()
    unique_dates = chart_df[["date"]].drop_duplicates()
    unique_dates = unique_dates.assign(weekday=unique_dates["date"].dt.weekday)
    weekend = unique_dates[unique_dates["weekday"].isin([5, 6])].copy()
    if not weekend.empty:
        weekend = weekend.assign(date_end=weekend["date"] + pd.Timedelta(days=1))
        shading = alt.Chart(weekend).mark_rect(color="#f2f2f2").encode(x="date:T", x2="date_end:T")

    return (shading + base_line + points).properties(height=300)


def category_bar(category_status: pd.DataFrame):
    """Stacked bar of issue counts per category, split by status."""
    if category_status is None or category_status.empty:
        return None
    tmp = category_status.copy()
    tmp["category_label"] = tmp["category"].apply(_category_label)
    tmp["status_label"] = tmp["status"].apply(status_label)
    order = [status_label(s) for s in STATUS_DISPLAY_ORDER] + ["Unknown"]
    return (
        alt.Chart(tmp)
        .mark_bar()
        .encode(
            x=alt.X("count:Q", title="Issues"),
            y=alt.Y("category_label:N", title="Category", sort="-x"),
            color=alt.Color(
                "status_label:N",
                title="Status",
                sort=order,
                scale=alt.Scale(domain=order, range=[STATUS_COLORS[s] for s in order]),
            ),
            tooltip=[
                alt.Tooltip("category_label:N", title="Category"),
                alt.Tooltip("status_label:N", title="Status"),
                alt.Tooltip("count:Q", title="Issues"),
            ],
        )
        .properties(height=280)
    )
