"""Data-quality findings surfaced alongside dashboard figures."""

from __future__ import annotations

import pandas as pd

from civic_app.core.config import STATUS_RESOLVED
from civic_app.core.models import DataQualityIssue

# Model attribute -> wire field name
FIELD_NAMES: dict[str, str] = {
    "created_at": "createdAt",
    "resolved_at": "resolvedAt",
    "updated_at": "updatedAt",
    "coordinates": "coordinates",
}


def _issue_id(value) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def collect_data_quality(df: pd.DataFrame) -> list[DataQualityIssue]:
    """List per-issue problems that made an issue drop out of a derived figure.

    Expects ``add_resolution_metrics`` to have run. Findings are reported in
    input order:

    - a timestamp or coordinate value present but unparseable;
    - ``createdAt`` missing entirely (excluded from activity and averages);
    - ``status == resolved`` without ``resolvedAt`` (excluded from the average);
    - ``resolvedAt`` earlier than ``createdAt`` (clamped to zero days).
    """
    findings: list[DataQualityIssue] = []
    if df.empty:
        return findings
    has_clamp = "resolution_clamped" in df.columns
    for row in df.itertuples(index=False):
        issue_id = _issue_id(row.id)
        bad_fields = list(row.data_errors or [])
        for name in bad_fields:
            findings.append(DataQualityIssue(issue_id, FIELD_NAMES.get(name, name), "unparseable value"))
        if pd.isna(row.created_at) and "created_at" not in bad_fields:
            findings.append(DataQualityIssue(issue_id, "createdAt", "missing timestamp"))
        if row.status == STATUS_RESOLVED and pd.isna(row.resolved_at) and "resolved_at" not in bad_fields:
            findings.append(DataQualityIssue(issue_id, "resolvedAt", "resolved without resolvedAt"))
        if has_clamp and bool(row.resolution_clamped):
            findings.append(DataQualityIssue(issue_id, "resolvedAt", "resolved before created"))
    return findings
