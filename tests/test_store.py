import threading
from datetime import UTC, datetime

import pytest

from civic_app.core.errors import DuplicateIssueError, InvalidTransitionError, IssueNotFoundError
from civic_app.core.models import IssueModel
from civic_app.core.store import InMemoryIssueStore

T0 = datetime(2025, 1, 1, tzinfo=UTC)
T1 = datetime(2025, 1, 3, tzinfo=UTC)
T2 = datetime(2025, 1, 5, tzinfo=UTC)


def _issue(issue_id="1", status="open"):
    return IssueModel(
        id=issue_id,
        title="Broken light",
        description=None,
        category="streetlight",
        status=status,
        created_at=T0,
    )


def test_get_all_returns_snapshot_copies():
    store = InMemoryIssueStore([_issue()])
    snapshot = store.get_all()
    snapshot[0].status = "closed"
    snapshot.append(_issue("2"))
    assert store.get("1").status == "open"
    assert len(store) == 1


def test_append_assigns_id_and_rejects_duplicates():
    store = InMemoryIssueStore()
    stored = store.append(_issue(issue_id=""))
    assert stored.id
    with pytest.raises(DuplicateIssueError):
        store.append(_issue(issue_id=stored.id))


def test_lifecycle_sets_resolved_at_once():
    store = InMemoryIssueStore([_issue()])
    progressed = store.update_status("1", "in-progress", at=T1)
    assert progressed.resolved_at is None
    assert progressed.updated_at == T1
    resolved = store.update_status("1", "resolved", at=T1)
    assert resolved.resolved_at == T1
    closed = store.update_status("1", "closed", at=T2)
    assert closed.resolved_at == T1
    assert closed.updated_at == T2


def test_invalid_transitions():
    store = InMemoryIssueStore([_issue(status="resolved")])
    with pytest.raises(InvalidTransitionError):
        store.update_status("1", "open")
    with pytest.raises(InvalidTransitionError):
        store.update_status("1", "archived")
    with pytest.raises(IssueNotFoundError):
        store.update_status("missing", "closed")


def test_unknown_status_can_only_be_closed():
    store = InMemoryIssueStore([_issue(status="escalated")])
    with pytest.raises(InvalidTransitionError):
        store.update_status("1", "resolved")
    assert store.update_status("1", "closed").status == "closed"


def test_concurrent_appends():
    store = InMemoryIssueStore()

    def worker(start):
        for n in range(start, start + 50):
            store.append(_issue(issue_id=str(n)))

    threads = [threading.Thread(target=worker, args=(k * 50,)) for k in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(store.get_all()) == 200
