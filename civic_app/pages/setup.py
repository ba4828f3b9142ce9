"""Sign-in page: exchange a staff token for a session identity."""

from __future__ import annotations

import streamlit as st

from civic_app.app import get_authenticator, get_store, register_page


@register_page("Setup / Login")
def setup_page():
    st.title("Staff Sign-in")
    st.caption("Tokens are configured under [auth.tokens] in Streamlit secrets.")

    token = st.text_input("Access token", type="password")
    login_btn = st.button("Sign in", type="primary")

    if login_btn:
        if not token:
            st.error("Token required.")
            return
        user = get_authenticator().authenticate({"token": token})
        if user is None:
            st.error("Unknown token.")
            return
        st.session_state["user"] = user
        st.session_state["auth_token"] = token
        st.success(f"Signed in as {user.name or user.user_id}.")

    if "user" in st.session_state:
        if st.button("Sign out"):
            del st.session_state["user"]
            st.session_state.pop("auth_token", None)
            st.info("Signed out.")

    st.markdown("---")
    st.caption(f"{len(get_store())} issue(s) in the in-memory store.")
    if st.button("Reset demo data"):
        get_store.clear()
        st.success(f"Store reset with {len(get_store())} demo issue(s).")
