from types import SimpleNamespace

from civic_app.core.auth import TokenAuthenticator, extract_token
from civic_app.core.status import can_transition, is_active_status, normalize_workflow_status, status_label


def test_extract_token_sources():
    assert extract_token(None) is None
    assert extract_token({"headers": {"authorization": "Bearer abc"}}) == "abc"
    assert extract_token({"headers": {"Authorization": "Basic abc"}}) is None
    assert extract_token({"token": " t1 "}) == "t1"
    assert extract_token(SimpleNamespace(headers={"Authorization": "bearer xyz"})) == "xyz"


def test_token_authenticator_from_config():
    auth = TokenAuthenticator.from_config(
        {"tok-a": {"user_id": "roads", "name": "Roads Dept"}, "tok-b": "admin"}
    )
    user = auth.authenticate({"token": "tok-a"})
    assert user.user_id == "roads" and user.name == "Roads Dept" and user.role == "staff"
    assert auth.authenticate({"token": "tok-b"}).user_id == "admin"
    assert auth.authenticate({"token": "nope"}) is None
    assert auth.authenticate({}) is None
    assert TokenAuthenticator.from_config(None).authenticate({"token": "tok-a"}) is None


def test_normalize_workflow_status():
    assert normalize_workflow_status("In Progress") == "in-progress"
    assert normalize_workflow_status("in_progress") == "in-progress"
    assert normalize_workflow_status(" RESOLVED ") == "resolved"
    assert normalize_workflow_status("") is None
    assert normalize_workflow_status("pending review") is None


def test_transitions_and_labels():
    assert can_transition("open", "in-progress")
    assert can_transition("in-progress", "resolved")
    assert not can_transition("resolved", "in-progress")
    assert not can_transition("closed", "open")
    assert can_transition(None, "closed")
    assert is_active_status("open") and not is_active_status("resolved")
    assert status_label("in-progress") == "In Progress"
    assert status_label("weird") == "Unknown"
