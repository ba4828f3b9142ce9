"""Citizen report form."""

from __future__ import annotations

import streamlit as st

from civic_app.app import get_store, register_page
from civic_app.core.config import CATEGORY_LABELS, ISSUE_CATEGORIES, PRIORITY_MAPPING
from civic_app.features.api.handlers import handle_create_issue


@register_page("Report Issue")
def report_page():
    st.title("Report an Issue")
    st.caption("Tell the municipality about a problem in your street.")

    with st.form("report_issue"):
        title = st.text_input("Title")
        description = st.text_area("Description")
        category = st.selectbox("Category", list(ISSUE_CATEGORIES), format_func=lambda c: CATEGORY_LABELS.get(c, c))
        location = st.text_input("Address / landmark")
        col_lat, col_lng = st.columns(2)
        lat = col_lat.number_input("Latitude", min_value=-90.0, max_value=90.0, value=0.0, format="%.5f")
        lng = col_lng.number_input("Longitude", min_value=-180.0, max_value=180.0, value=0.0, format="%.5f")
        priority = st.selectbox("Priority", list(PRIORITY_MAPPING), index=list(PRIORITY_MAPPING).index("medium"))
        photo_url = st.text_input("Photo URL (optional)")
        submitted = st.form_submit_button("Submit", type="primary")

    if not submitted:
        return
    user = st.session_state.get("user")
    payload = {
        "title": title,
        "description": description,
        "category": category,
        "location": location,
        "coordinates": {"lat": lat, "lng": lng},
        "priority": priority,
        "photoUrl": photo_url or None,
        "userId": user.user_id if user is not None else None,
    }
    response = handle_create_issue(payload, store=get_store())
    if response.ok:
        st.success(f"{response.body['message']} (ID {response.body['issue']['id']})")
    else:
        st.error(response.body.get("error", "Could not submit the report."))
