"""Dashboard statistics aggregation over a snapshot of issue records."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

import pandas as pd

from civic_app.core.config import DEFAULT_WINDOW_DAYS
from civic_app.core.errors import InvalidInputError
from civic_app.core.mappers import issues_to_dataframe, map_issue
from civic_app.core.models import ActivityPoint, CategoryCount, DashboardStats, IssueModel

from .aggregations.category import aggregate_by_category
from .aggregations.status import count_statuses
from .metrics.activity import recent_activity
from .metrics.quality import collect_data_quality
from .metrics.resolution import add_resolution_metrics, average_resolution_days, round_half_up

logger = logging.getLogger(__name__)


def _validate_arguments(issues: Any, now: Any, window_days: Any) -> None:
    if issues is None:
        raise InvalidInputError("issues must be a sequence of issue records, got None")
    if isinstance(issues, (str, bytes, Mapping)) or not isinstance(issues, Iterable):
        raise InvalidInputError(f"issues must be a sequence of issue records, got {type(issues).__name__}")
    if not isinstance(now, datetime):
        raise InvalidInputError(f"now must be a datetime, got {type(now).__name__}")
    if isinstance(window_days, bool) or not isinstance(window_days, int):
        raise InvalidInputError(f"window_days must be an integer, got {type(window_days).__name__}")
    if window_days < 0:
        raise InvalidInputError(f"window_days must be non-negative, got {window_days}")


def load_issue_frame(issues: Iterable[IssueModel | Mapping[str, Any]]) -> pd.DataFrame:
    """Map a sequence of issue models or raw records into the analytics DataFrame."""
    models: list[IssueModel] = []
    for idx, record in enumerate(issues):
        if not isinstance(record, (IssueModel, Mapping)):
            raise InvalidInputError(f"issue #{idx} is not an issue record: {type(record).__name__}")
        models.append(map_issue(record))
    return issues_to_dataframe(models)


def compute_dashboard_stats(
    issues: Iterable[IssueModel | Mapping[str, Any]],
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> DashboardStats:
    """Derive the dashboard figures from a snapshot of issues.

    Parameters
    ----------
    issues : sequence of IssueModel or mapping
        Snapshot from the issue store. Raw mappings (API JSON) are mapped
        first; the input itself is never modified.
    now : datetime
        Reference instant for the activity window. Naive values are UTC.
    window_days : int
        Length of the trailing activity window; an issue created exactly
        ``window_days`` before ``now`` is included.

    Returns
    -------
    DashboardStats
        Status counts, average resolution time in days (one decimal,
        half-up), category histogram, and per-UTC-day creation counts.
        Records with missing or unparseable timestamps drop out of the
        affected figure and are listed in ``data_quality``.

    Raises
    ------
    InvalidInputError
        If ``issues`` is not a sequence of records, ``now`` is not a
        datetime, or ``window_days`` is not a non-negative integer.
    """
    _validate_arguments(issues, now, window_days)
    df = load_issue_frame(issues)
    stats = DashboardStats(window_days=window_days)
    if df.empty:
        return stats

    df = add_resolution_metrics(df)
    counts = count_statuses(df)
    stats.total_issues = counts["total"]
    stats.open_issues = counts["open"]
    stats.in_progress_issues = counts["in_progress"]
    stats.resolved_issues = counts["resolved"]
    stats.average_resolution_time = round_half_up(average_resolution_days(df), 1)

    categories = aggregate_by_category(df)
    stats.category_breakdown = [
        CategoryCount(category=str(cat), count=int(n)) for cat, n in zip(categories["category"], categories["count"])
    ]
    activity = recent_activity(df, now, window_days)
    stats.recent_activity = [
        ActivityPoint(date=str(day), count=int(n)) for day, n in zip(activity["date"], activity["count"])
    ]

    stats.data_quality = collect_data_quality(df)
    if stats.data_quality:
        logger.warning(
            "Dashboard stats skipped %d data-quality problem(s) across %d issue(s)",
            len(stats.data_quality),
            len({d.issue_id for d in stats.data_quality}),
        )
        for finding in stats.data_quality:
            logger.debug("Issue %s: %s (%s)", finding.issue_id, finding.reason, finding.field)
    return stats
