from datetime import UTC, datetime, timedelta

from civic_app.core.auth import TokenAuthenticator
from civic_app.core.models import IssueModel, UserIdentity
from civic_app.core.store import InMemoryIssueStore
from civic_app.features.api.handlers import (
    default_store,
    handle_create_issue,
    handle_dashboard_request,
    handle_list_issues,
    handle_update_status,
)

NOW = datetime(2025, 2, 1, 12, tzinfo=UTC)
AUTH = TokenAuthenticator({"secret": UserIdentity(user_id="roads", name="Roads Dept")})
AUTHED = {"headers": {"Authorization": "Bearer secret"}}


class ExplodingStore(InMemoryIssueStore):
    def __init__(self):
        super().__init__()
        self.reads = 0

    def get_all(self):
        self.reads += 1
        raise RuntimeError("database unavailable")


class BrokenAuthenticator:
    def authenticate(self, request):
        raise RuntimeError("token service down")


def _store():
    return InMemoryIssueStore(
        [
            IssueModel(
                id="1",
                title="Pothole",
                description="Deep",
                category="pothole",
                status="resolved",
                created_at=NOW - timedelta(days=3),
                resolved_at=NOW - timedelta(days=1),
            ),
            IssueModel(
                id="2",
                title="Leak",
                description="Pipe",
                category="water_leak",
                status="open",
                created_at=NOW - timedelta(hours=11),
            ),
        ]
    )


def test_dashboard_requires_authentication_before_reading_store():
    store = ExplodingStore()
    response = handle_dashboard_request({}, authenticator=AUTH, store=store, now=NOW)
    assert response.status_code == 401
    assert response.body == {"success": False, "error": "Unauthorized - Please login"}
    assert store.reads == 0


def test_dashboard_wrong_token_is_unauthorized():
    response = handle_dashboard_request(
        {"headers": {"Authorization": "Bearer nope"}}, authenticator=AUTH, store=_store(), now=NOW
    )
    assert response.status_code == 401


def test_dashboard_success_envelope():
    response = handle_dashboard_request(AUTHED, authenticator=AUTH, store=_store(), now=NOW)
    assert response.ok
    stats = response.body["stats"]
    assert stats["totalIssues"] == 2
    assert stats["resolvedIssues"] == 1
    assert stats["averageResolutionTime"] == 2.0
    assert {(c["category"], c["count"]) for c in stats["categoryBreakdown"]} == {("pothole", 1), ("water_leak", 1)}
    assert response.body["issueStatistics"]["slaCompliance"] == 100.0
    # the leak has 1 hour of its 12-hour SLA left
    alerts = response.body["slaAlerts"]
    assert [a["issueId"] for a in alerts] == ["2"]
    assert alerts[0]["riskLevel"] == "High"
    assert response.body["dataQualityIssues"] == []


def test_dashboard_store_failure_is_500():
    response = handle_dashboard_request(AUTHED, authenticator=AUTH, store=ExplodingStore(), now=NOW)
    assert response.status_code == 500
    assert response.body["success"] is False
    assert "stats" not in response.body


def test_dashboard_invalid_window_is_400():
    response = handle_dashboard_request(AUTHED, authenticator=AUTH, store=_store(), now=NOW, window_days=-3)
    assert response.status_code == 400


def test_list_issues_filters():
    store = _store()
    assert handle_list_issues(None, store=store).body["total"] == 2
    body = handle_list_issues({"status": "open"}, store=store).body
    assert body["total"] == 1 and body["issues"][0]["id"] == "2"
    body = handle_list_issues({"category": "pothole", "status": "open"}, store=store).body
    assert body == {"issues": [], "total": 0}


def test_create_issue_defaults():
    store = InMemoryIssueStore()
    response = handle_create_issue(
        {"title": "Dark street", "description": "Light out", "category": "streetlight", "location": "Elm St"},
        store=store,
        now=NOW,
    )
    assert response.status_code == 201
    issue = response.body["issue"]
    assert response.body["message"] == "Issue reported successfully"
    assert issue["status"] == "open"
    assert issue["priority"] == "medium"
    assert issue["userId"] == "anonymous"
    assert issue["votes"] == 0
    assert issue["coordinates"] == {"lat": 0.0, "lng": 0.0}
    assert issue["createdAt"] == "2025-02-01T12:00:00Z"
    assert len(store) == 1


def test_create_issue_validation():
    store = InMemoryIssueStore()
    missing = handle_create_issue({"title": "x", "category": "pothole"}, store=store)
    assert missing.status_code == 400
    assert missing.body["error"] == "Title, description, category, and location are required"
    base = {"title": "x", "description": "y", "location": "z"}
    assert handle_create_issue({**base, "category": "ufo"}, store=store).body["error"] == "Invalid category"
    bad_coords = handle_create_issue({**base, "category": "road", "coordinates": {"lat": 200, "lng": 0}}, store=store)
    assert bad_coords.body["error"] == "Invalid coordinates"
    bad_priority = handle_create_issue({**base, "category": "road", "priority": "asap"}, store=store)
    assert bad_priority.status_code == 400
    assert handle_create_issue(["not", "a", "dict"], store=store).status_code == 400
    assert len(store) == 0


def test_update_status_flow():
    store = _store()
    unauth = handle_update_status({}, "2", {"status": "resolved"}, authenticator=AUTH, store=store, now=NOW)
    assert unauth.status_code == 401
    bad = handle_update_status(AUTHED, "2", {"status": "whatever"}, authenticator=AUTH, store=store, now=NOW)
    assert bad.status_code == 400
    missing = handle_update_status(AUTHED, "99", {"status": "closed"}, authenticator=AUTH, store=store, now=NOW)
    assert missing.status_code == 404
    ok = handle_update_status(AUTHED, "2", {"status": "In Progress"}, authenticator=AUTH, store=store, now=NOW)
    assert ok.status_code == 200 and ok.body["issue"]["status"] == "in-progress"
    conflict = handle_update_status(AUTHED, "1", {"status": "open"}, authenticator=AUTH, store=store, now=NOW)
    assert conflict.status_code == 409


def test_default_store_is_seeded():
    assert len(default_store()) > 0
    assert len(default_store(seed=False)) == 0


def test_authenticator_failure_is_500_for_both_staff_handlers():
    store = ExplodingStore()
    dashboard = handle_dashboard_request(AUTHED, authenticator=BrokenAuthenticator(), store=store, now=NOW)
    assert dashboard.status_code == 500
    update = handle_update_status(
        AUTHED, "2", {"status": "closed"}, authenticator=BrokenAuthenticator(), store=store, now=NOW
    )
    assert update.status_code == 500
    assert update.body["success"] is False
    assert store.reads == 0
