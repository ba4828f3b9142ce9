from datetime import UTC, datetime, timedelta

import pandas as pd

from civic_app.analytics.dashboard import load_issue_frame
from civic_app.analytics.metrics.sla import (
    alerts_to_dataframe,
    compute_sla_alerts,
    count_critical_alerts,
    sla_compliance,
)
from civic_app.core.models import IssueModel

NOW = datetime(2025, 3, 1, 12, tzinfo=UTC)
POLICY = {"water_leak": 12.0, "pothole": 72.0, "other": 168.0}


def _issue(i, category, status, created_hours_ago, resolved_after_hours=None):
    created = NOW - timedelta(hours=created_hours_ago)
    resolved = created + timedelta(hours=resolved_after_hours) if resolved_after_hours is not None else None
    return IssueModel(
        id=str(i),
        title=f"Issue {i}",
        description=None,
        category=category,
        status=status,
        created_at=created,
        resolved_at=resolved,
        location="Main Street",
        priority="high",
    )


def _frame(*issues):
    return load_issue_frame(list(issues))


def test_alerts_within_warning_window_sorted_by_deadline():
    df = _frame(
        _issue(1, "pothole", "open", created_hours_ago=40),  # 32h left
        _issue(2, "water_leak", "in-progress", created_hours_ago=20),  # breached 8h ago
        _issue(3, "water_leak", "open", created_hours_ago=1),  # 11h left
        _issue(4, "other", "open", created_hours_ago=1),  # 167h left, not due
        _issue(5, "water_leak", "resolved", created_hours_ago=30, resolved_after_hours=5),
    )
    alerts = compute_sla_alerts(df, NOW, warn_hours=48, policy=POLICY)
    assert [a.issue_id for a in alerts] == ["2", "3", "1"]
    assert [a.risk_level for a in alerts] == ["Breached", "High", "Medium"]
    assert alerts[0].hours_remaining == -8.0
    assert alerts[0].sla_deadline == NOW - timedelta(hours=8)
    assert count_critical_alerts(alerts) == 2


def test_unknown_category_uses_default_sla():
    df = _frame(_issue(1, "graffiti", "open", created_hours_ago=160))
    alerts = compute_sla_alerts(df, NOW, warn_hours=24, policy=POLICY)
    assert len(alerts) == 1
    assert alerts[0].hours_remaining == 8.0


def test_issues_without_created_at_are_skipped():
    issue = _issue(1, "water_leak", "open", created_hours_ago=100)
    issue.created_at = None
    assert compute_sla_alerts(_frame(issue), NOW, policy=POLICY) == []


def test_sla_compliance():
    df = _frame(
        _issue(1, "water_leak", "resolved", created_hours_ago=50, resolved_after_hours=6),
        _issue(2, "water_leak", "resolved", created_hours_ago=50, resolved_after_hours=30),
        _issue(3, "pothole", "resolved", created_hours_ago=100, resolved_after_hours=72),
        _issue(4, "pothole", "open", created_hours_ago=1),
    )
    # deadline is inclusive: 2 of 3 on time
    assert sla_compliance(df, POLICY) == 66.7
    assert sla_compliance(_frame(_issue(1, "pothole", "open", 1)), POLICY) == 0.0
    assert sla_compliance(pd.DataFrame(), POLICY) == 0.0


def test_alerts_to_dataframe():
    df = _frame(_issue(1, "water_leak", "open", created_hours_ago=10))
    frame = alerts_to_dataframe(compute_sla_alerts(df, NOW, policy=POLICY))
    assert list(frame["issue_id"]) == ["1"]
    assert alerts_to_dataframe([]).empty
