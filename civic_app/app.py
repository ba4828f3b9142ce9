"""Application entry point: page registry, router, and shared resources."""

from __future__ import annotations

import streamlit as st

from civic_app.core.auth import TokenAuthenticator
from civic_app.core.config import SETTINGS
from civic_app.core.store import InMemoryIssueStore
from civic_app.features.api.handlers import default_store

PAGES = {}


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


@st.cache_resource
def get_store() -> InMemoryIssueStore:
    """One store per server process, shared by every session."""
    return default_store(seed=SETTINGS.seed_demo_data)


def get_authenticator() -> TokenAuthenticator:
    auth_secrets = st.secrets.get("auth", {})
    return TokenAuthenticator.from_config(auth_secrets.get("tokens", {}))


def current_request() -> dict:
    """Request-shaped view of the signed-in session for the handlers."""
    token = st.session_state.get("auth_token")
    return {"token": token} if token else {}


def main():
    st.sidebar.title("OurStreet")
    pages = list(PAGES.keys())
    if not pages:
        st.write("No pages registered yet.")
        return
    preferred_order = [
        "Dashboard",  # staff overview
        "Issues",  # triage table
        "Report Issue",  # citizen form
        "Map",
        "Setup / Login",
    ]

    ordered = [name for name in preferred_order if name in pages]
    trailing = [name for name in pages if name not in preferred_order]
    trailing.sort()
    pages = ordered + trailing

    user = st.session_state.get("user")
    if user is not None:
        st.sidebar.caption(f"Signed in as {user.name or user.user_id}")
    if "Setup / Login" in pages and user is None:
        default = pages.index("Setup / Login")
    else:
        default = 0
    page = st.sidebar.selectbox("Page", pages, index=default)
    PAGES[page]()


if __name__ == "__main__":
    main()
