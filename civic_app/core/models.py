"""Domain data models for civic issues and derived dashboard statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class CoordinatesModel:
    lat: float
    lng: float


@dataclass(slots=True)
class IssueModel:
    id: str
    title: str | None
    description: str | None
    category: str | None
    status: str | None
    created_at: datetime | None
    resolved_at: datetime | None = None
    location: str | None = None
    coordinates: CoordinatesModel | None = None
    photo_url: str | None = None
    priority: str | None = None
    user_id: str | None = None
    votes: int = 0
    updated_at: datetime | None = None

    # Timestamp fields present in the source record that could not be parsed
    data_errors: list[str] = field(default_factory=list)


@dataclass(slots=True)
class UserIdentity:
    user_id: str
    name: str | None = None
    role: str = "staff"


@dataclass(slots=True)
class CategoryCount:
    category: str
    count: int


@dataclass(slots=True)
class ActivityPoint:
    date: str
    count: int


@dataclass(slots=True)
class DataQualityIssue:
    issue_id: str | None
    field: str
    reason: str


@dataclass(slots=True)
class DashboardStats:
    total_issues: int = 0
    open_issues: int = 0
    in_progress_issues: int = 0
    resolved_issues: int = 0
    average_resolution_time: float = 0.0
    category_breakdown: list[CategoryCount] = field(default_factory=list)
    recent_activity: list[ActivityPoint] = field(default_factory=list)
    data_quality: list[DataQualityIssue] = field(default_factory=list)
    window_days: int = 30

    @property
    def unrecognized_status_issues(self) -> int:
        return self.total_issues - self.open_issues - self.in_progress_issues - self.resolved_issues

    def to_dict(self) -> dict:
        """Serialize to the camelCase payload consumed by the dashboard front end."""
        return {
            "totalIssues": self.total_issues,
            "openIssues": self.open_issues,
            "inProgressIssues": self.in_progress_issues,
            "resolvedIssues": self.resolved_issues,
            "averageResolutionTime": self.average_resolution_time,
            "categoryBreakdown": [{"category": c.category, "count": c.count} for c in self.category_breakdown],
            "recentActivity": [{"date": a.date, "count": a.count} for a in self.recent_activity],
        }

    def data_quality_to_list(self) -> list[dict]:
        return [{"issueId": d.issue_id, "field": d.field, "reason": d.reason} for d in self.data_quality]


@dataclass(slots=True)
class SlaAlert:
    issue_id: str
    title: str | None
    category: str | None
    priority: str | None
    status: str | None
    location: str | None
    reported_at: datetime
    sla_deadline: datetime
    hours_remaining: float
    risk_level: str
