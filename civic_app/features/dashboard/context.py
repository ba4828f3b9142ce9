"""Pure helpers to build dashboard context for testing (no Streamlit)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import pandas as pd

from civic_app.analytics.aggregations.category import category_status_matrix
from civic_app.analytics.dashboard import compute_dashboard_stats, load_issue_frame
from civic_app.analytics.metrics.activity import fill_activity_gaps
from civic_app.analytics.metrics.sla import compute_sla_alerts, count_critical_alerts, sla_compliance
from civic_app.core.config import DEFAULT_SLA_WARN_HOURS, DEFAULT_WINDOW_DAYS
from civic_app.core.models import DashboardStats, IssueModel, SlaAlert


@dataclass(slots=True)
class DashboardContext:
    stats: DashboardStats
    sla_alerts: list[SlaAlert]
    sla_compliance: float
    critical_issues: int
    activity_series: pd.DataFrame
    category_status: pd.DataFrame

    def issue_statistics(self) -> dict[str, Any]:
        """Headline figures for the metric cards."""
        return {
            "totalIssues": self.stats.total_issues,
            "slaCompliance": self.sla_compliance,
            "averageResolutionTime": self.stats.average_resolution_time,
            "criticalIssues": self.critical_issues,
        }


def build_context(
    issues: Iterable[IssueModel | Mapping[str, Any]],
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
    *,
    warn_hours: float = DEFAULT_SLA_WARN_HOURS,
    policy: dict[str, float] | None = None,
) -> DashboardContext:
    # Materialize once so generators feed both passes
    if isinstance(issues, Iterable) and not isinstance(issues, (str, bytes, Mapping)):
        issues = list(issues)
    stats = compute_dashboard_stats(issues, now, window_days)
    df = load_issue_frame(issues)

    alerts = compute_sla_alerts(df, now, warn_hours=warn_hours, policy=policy)
    activity = pd.DataFrame(
        {"date": [a.date for a in stats.recent_activity], "count": [a.count for a in stats.recent_activity]}
    )
    return DashboardContext(
        stats=stats,
        sla_alerts=alerts,
        sla_compliance=sla_compliance(df, policy),
        critical_issues=count_critical_alerts(alerts),
        activity_series=fill_activity_gaps(activity, now, window_days),
        category_status=category_status_matrix(df),
    )
