"""Dashboard page: headline metrics, category and activity charts, SLA alerts."""

from __future__ import annotations

from datetime import datetime

import pandas as pd
import pytz
import streamlit as st

from civic_app.analytics.metrics.sla import alerts_to_dataframe
from civic_app.app import get_store, register_page
from civic_app.core.config import DEFAULT_SLA_WARN_HOURS, DEFAULT_WINDOW_DAYS
from civic_app.core.errors import InvalidInputError
from civic_app.features.dashboard.context import build_context
from civic_app.visual.charts import activity_trend, category_bar
from civic_app.visual.tables import prepare_issue_table


@register_page("Dashboard")
def dashboard_page():
    st.title("OurStreet - Issue Tracking Dashboard")
    st.caption("Civic issue reporting, tracking, and resolution for your neighbourhood.")
    if st.session_state.get("user") is None:
        st.warning("Sign in on the Setup / Login page first.")
        return

    col_window, col_warn = st.columns(2)
    window_days = int(
        col_window.number_input("Activity window (days)", min_value=1, max_value=365, value=DEFAULT_WINDOW_DAYS)
    )
    warn_hours = float(
        col_warn.number_input("SLA warning (hours)", min_value=1, max_value=720, value=int(DEFAULT_SLA_WARN_HOURS))
    )

    now = datetime.now(tz=pytz.UTC)
    try:
        ctx = build_context(get_store().get_all(), now, window_days, warn_hours=warn_hours)
    except InvalidInputError as exc:
        st.error(f"Failed to compute dashboard statistics: {exc}")
        return

    stats = ctx.stats
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Issues", stats.total_issues)
    c2.metric("Open", stats.open_issues)
    c3.metric("In Progress", stats.in_progress_issues)
    c4.metric("Resolved", stats.resolved_issues)
    c5, c6, c7 = st.columns(3)
    c5.metric("Avg. Resolution (days)", f"{stats.average_resolution_time:.1f}")
    c6.metric("SLA Compliance", f"{ctx.sla_compliance:.1f}%")
    c7.metric("Critical SLA Alerts", ctx.critical_issues)

    st.markdown("---")
    left, right = st.columns(2)
    with left:
        st.subheader("Issues by Category")
        chart = category_bar(ctx.category_status)
        if chart is None:
            st.info("No issues reported yet.")
        else:
            st.altair_chart(chart, use_container_width=True)
    with right:
        st.subheader(f"Reported in the last {window_days} days")
        if not stats.recent_activity:
            st.info("No issues reported in this window.")
        else:
            st.altair_chart(activity_trend(ctx.activity_series), use_container_width=True)

    st.markdown("---")
    st.subheader("SLA Alerts - At-Risk Issues")
    alerts_df = alerts_to_dataframe(ctx.sla_alerts)
    if alerts_df.empty:
        st.success("No issues are close to their SLA deadline.")
    else:
        prepared, display_cols, cfg = prepare_issue_table(alerts_df, set_name="sla_alerts")
        st.dataframe(prepared[display_cols], hide_index=True, column_config=cfg)

    if stats.data_quality:
        with st.expander(f"Data quality ({len(stats.data_quality)} finding(s))"):
            st.dataframe(
                pd.DataFrame(
                    [{"issue": d.issue_id, "field": d.field, "problem": d.reason} for d in stats.data_quality]
                ),
                hide_index=True,
            )
