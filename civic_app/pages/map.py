"""Map page: issue locations on the built-in Streamlit map."""

from __future__ import annotations

import streamlit as st

from civic_app.app import get_store, register_page
from civic_app.core.config import ISSUE_CATEGORIES
from civic_app.core.mappers import issues_to_dataframe


@register_page("Map")
def map_page():
    st.title("Issue Map")
    categories = st.multiselect("Categories", list(ISSUE_CATEGORIES), default=list(ISSUE_CATEGORIES))
    df = issues_to_dataframe(get_store().get_all())
    if df.empty:
        st.info("No issues reported yet.")
        return
    df = df[df["category"].isin(categories)]
    # (0, 0) is the placeholder for reports submitted without a location fix
    located = df.dropna(subset=["lat", "lng"])
    located = located[(located["lat"] != 0.0) | (located["lng"] != 0.0)]
    if located.empty:
        st.info("No located issues for the selected categories.")
        return
    st.map(located[["lat", "lng"]].rename(columns={"lat": "latitude", "lng": "longitude"}))
    st.caption(f"{len(located)} of {len(df)} issue(s) have coordinates.")
