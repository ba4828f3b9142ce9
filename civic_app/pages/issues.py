"""Issue triage page: filtered table, CSV export, and staff status updates."""

from __future__ import annotations

from datetime import datetime

import pytz
import streamlit as st

from civic_app.app import current_request, get_authenticator, get_store, register_page
from civic_app.core.config import ISSUE_CATEGORIES, SETTINGS, STATUS_DISPLAY_ORDER
from civic_app.core.mappers import issues_to_dataframe, map_issue
from civic_app.core.status import status_label
from civic_app.features.api.handlers import handle_list_issues, handle_update_status
from civic_app.visual.tables import add_days_open, prepare_issue_table


@register_page("Issues")
def issues_page():
    st.title("Reported Issues")
    store = get_store()

    col_status, col_category = st.columns(2)
    status = col_status.selectbox(
        "Status",
        ["All", *STATUS_DISPLAY_ORDER],
        format_func=lambda s: s if s == "All" else status_label(s),
    )
    category = col_category.selectbox("Category", ["All", *ISSUE_CATEGORIES])
    params = {
        "status": None if status == "All" else status,
        "category": None if category == "All" else category,
    }
    response = handle_list_issues(params, store=store)
    if not response.ok:
        st.error(response.body.get("error", "Failed to load issues."))
        return

    issues = [map_issue(raw) for raw in response.body["issues"]]
    st.caption(f"{response.body['total']} issue(s) match.")
    if not issues:
        st.info("No issues match the selected filters.")
        return

    df = add_days_open(issues_to_dataframe(issues), datetime.now(tz=pytz.UTC))
    prepared, display_cols, cfg = prepare_issue_table(df)
    st.dataframe(prepared[display_cols], hide_index=True, column_config=cfg)
    csv = prepared[display_cols].to_csv(index=False).encode(SETTINGS.download_encoding)
    st.download_button(
        "Download Issues CSV",
        data=csv,
        file_name="ourstreet_issues.csv",
        mime="text/csv",
    )

    st.markdown("---")
    st.subheader("Update Status")
    if st.session_state.get("user") is None:
        st.caption("Sign in to update issue status.")
        return
    labels = {i.id: f"{i.id} - {i.title}" for i in issues}
    issue_id = st.selectbox("Issue", list(labels), format_func=labels.get)
    target = st.selectbox("New status", list(STATUS_DISPLAY_ORDER), format_func=status_label)
    if st.button("Apply", type="primary"):
        result = handle_update_status(
            current_request(),
            issue_id,
            {"status": target},
            authenticator=get_authenticator(),
            store=store,
        )
        if result.ok:
            st.success(f"Issue {issue_id} is now {status_label(target)}.")
        else:
            st.error(result.body.get("error", "Update failed."))
