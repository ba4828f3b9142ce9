"""SLA deadline tracking derived from category policy."""

from __future__ import annotations

from datetime import datetime

import pandas as pd

from civic_app.core.config import (
    DEFAULT_SLA_WARN_HOURS,
    DISPLAY_ORDER_SLA_ALERTS,
    STATUS_RESOLVED,
)
from civic_app.core.models import SlaAlert
from civic_app.core.policy_config import load_sla_policy, sla_hours_for
from civic_app.core.status import is_active_status

from .activity import normalize_timestamp
from .resolution import round_half_up

RISK_BREACHED = "Breached"
RISK_HIGH = "High"
RISK_MEDIUM = "Medium"

# Fraction of the warning window below which an alert is high risk
HIGH_RISK_FRACTION = 0.25


def add_sla_deadlines(df: pd.DataFrame, policy: dict[str, float] | None = None) -> pd.DataFrame:
    if df.empty:
        return df
    policy = policy if policy is not None else load_sla_policy()
    out = df.copy()
    created = pd.to_datetime(out["created_at"], utc=True, errors="coerce")
    hours = out["category"].apply(lambda c: sla_hours_for(c, policy)).astype(float)
    out["created_at"] = created
    out["sla_hours"] = hours
    out["sla_deadline"] = created + pd.to_timedelta(hours, unit="h")
    return out


def _risk_level(hours_remaining: float, warn_hours: float) -> str:
    if hours_remaining < 0:
        return RISK_BREACHED
    if hours_remaining < warn_hours * HIGH_RISK_FRACTION:
        return RISK_HIGH
    return RISK_MEDIUM


def compute_sla_alerts(
    df: pd.DataFrame,
    now: datetime,
    *,
    warn_hours: float = DEFAULT_SLA_WARN_HOURS,
    policy: dict[str, float] | None = None,
) -> list[SlaAlert]:
    """Open or in-progress issues whose SLA deadline is within ``warn_hours`` (or past).

    Issues without a parsed ``created_at`` have no deadline and are skipped.
    Alerts are ordered by deadline, most urgent first.
    """
    if df.empty:
        return []
    now_ts = normalize_timestamp(now)
    if now_ts is None:
        raise ValueError(f"Cannot interpret {now!r} as a timestamp")
    tracked = add_sla_deadlines(df, policy)
    active = tracked[tracked["status"].map(is_active_status).astype(bool) & tracked["sla_deadline"].notna()]
    if active.empty:
        return []
    active = active.assign(
        hours_remaining=(active["sla_deadline"] - now_ts).dt.total_seconds() / 3600.0
    )
    due = active[active["hours_remaining"] <= warn_hours].sort_values(by="sla_deadline", kind="stable")
    alerts = []
    for row in due.itertuples(index=False):
        alerts.append(
            SlaAlert(
                issue_id=str(row.id),
                title=row.title,
                category=row.category,
                priority=row.priority,
                status=row.status,
                location=row.location,
                reported_at=row.created_at.to_pydatetime(),
                sla_deadline=row.sla_deadline.to_pydatetime(),
                hours_remaining=round_half_up(row.hours_remaining, 1),
                risk_level=_risk_level(row.hours_remaining, warn_hours),
            )
        )
    return alerts


def count_critical_alerts(alerts: list[SlaAlert]) -> int:
    return sum(1 for a in alerts if a.risk_level in (RISK_BREACHED, RISK_HIGH))


def sla_compliance(df: pd.DataFrame, policy: dict[str, float] | None = None) -> float:
    """Percentage of resolved issues resolved within their SLA, one decimal; 0.0 when none."""
    if df.empty:
        return 0.0
    tracked = add_sla_deadlines(df, policy)
    resolved_at = pd.to_datetime(tracked["resolved_at"], utc=True, errors="coerce")
    mask = (tracked["status"] == STATUS_RESOLVED) & resolved_at.notna() & tracked["sla_deadline"].notna()
    if not mask.any():
        return 0.0
    on_time = (resolved_at[mask] <= tracked.loc[mask, "sla_deadline"]).sum()
    return round_half_up(100.0 * float(on_time) / float(mask.sum()), 1)


def alerts_to_dataframe(alerts: list[SlaAlert]) -> pd.DataFrame:
    if not alerts:
        return pd.DataFrame(columns=list(DISPLAY_ORDER_SLA_ALERTS))
    rows = [
        {
            "issue_id": a.issue_id,
            "title": a.title,
            "category": a.category,
            "priority": a.priority,
            "status": a.status,
            "location": a.location,
            "reported_at": a.reported_at,
            "sla_deadline": a.sla_deadline,
            "hours_remaining": a.hours_remaining,
            "risk_level": a.risk_level,
        }
        for a in alerts
    ]
    return pd.DataFrame(rows)


def alert_to_dict(alert: SlaAlert) -> dict:
    return {
        "issueId": alert.issue_id,
        "title": alert.title,
        "category": alert.category,
        "priority": alert.priority,
        "status": alert.status,
        "location": alert.location,
        "reportedDate": alert.reported_at.strftime("%Y-%m-%d"),
        "slaDeadline": alert.sla_deadline.isoformat(),
        "hoursRemaining": alert.hours_remaining,
        "riskLevel": alert.risk_level,
    }
