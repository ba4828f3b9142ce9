"""Central configuration, constants, and shared column definitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Time Settings
# =============================================================================
# Day bucketing and deadline arithmetic always run in UTC.
MS_PER_DAY: int = 86_400_000
SECONDS_PER_DAY: float = MS_PER_DAY / 1000.0

# =============================================================================
# Issue Categories
# =============================================================================
ISSUE_CATEGORIES: Sequence[str] = (
    "pothole",
    "streetlight",
    "garbage",
    "water_leak",
    "road",
    "sanitation",
    "drainage",
    "electricity",
    "traffic",
    "other",
)

# Reported in the category breakdown for records without a category
UNKNOWN_CATEGORY = "unknown"

CATEGORY_LABELS: dict[str, str] = {
    "pothole": "Pothole",
    "streetlight": "Streetlight",
    "garbage": "Garbage",
    "water_leak": "Water Leak",
    "road": "Road",
    "sanitation": "Sanitation",
    "drainage": "Drainage",
    "electricity": "Electricity",
    "traffic": "Traffic",
    "other": "Other",
    UNKNOWN_CATEGORY: "Unknown",
}

# =============================================================================
# Workflow Status Configuration
# =============================================================================
STATUS_OPEN = "open"
STATUS_IN_PROGRESS = "in-progress"
STATUS_RESOLVED = "resolved"
STATUS_CLOSED = "closed"

# Canonical display order for status columns/charts
STATUS_DISPLAY_ORDER: Sequence[str] = (
    STATUS_OPEN,
    STATUS_IN_PROGRESS,
    STATUS_RESOLVED,
    STATUS_CLOSED,
)

# Allowed forward moves; closed is reachable from every non-closed state
STATUS_TRANSITIONS: dict[str, frozenset[str]] = {
    STATUS_OPEN: frozenset({STATUS_IN_PROGRESS, STATUS_RESOLVED, STATUS_CLOSED}),
    STATUS_IN_PROGRESS: frozenset({STATUS_RESOLVED, STATUS_CLOSED}),
    STATUS_RESOLVED: frozenset({STATUS_CLOSED}),
    STATUS_CLOSED: frozenset(),
}

# =============================================================================
# Priority Configuration
# =============================================================================
DEFAULT_PRIORITY = "medium"
PRIORITY_MAPPING = {
    "critical": 4,
    "high": 3,
    "medium": 2,
    "low": 1,
}

# =============================================================================
# Dashboard Defaults
# =============================================================================
DEFAULT_WINDOW_DAYS: int = 30  # Trailing window for recent activity
DEFAULT_SLA_WARN_HOURS: float = 48.0  # Alert when this close to an SLA deadline
DEFAULT_USER_ID = "anonymous"

# Hours allowed to resolve an issue, per category
SLA_POLICY_HOURS: dict[str, float] = {
    "pothole": 72.0,
    "streetlight": 48.0,
    "garbage": 24.0,
    "water_leak": 12.0,
    "road": 120.0,
    "sanitation": 24.0,
    "drainage": 48.0,
    "electricity": 12.0,
    "traffic": 24.0,
    "other": 168.0,
}
DEFAULT_SLA_HOURS: float = 168.0

# =============================================================================
# Table Columns
# =============================================================================
ISSUE_CORE_COLUMNS: Sequence[str] = (
    "id",
    "title",
    "category",
    "status",
    "priority",
    "location",
    "created_at",
    "resolved_at",
    "votes",
)

DISPLAY_ORDER_ISSUE_LIST: Sequence[str] = (
    "id",
    "title",
    "category",
    "status",
    "priority",
    "location",
    "votes",
    "days_open",
    "created_at",
    "resolved_at",
    "user_id",
)

DISPLAY_ORDER_SLA_ALERTS: Sequence[str] = (
    "issue_id",
    "title",
    "category",
    "priority",
    "status",
    "location",
    "sla_deadline",
    "hours_remaining",
    "risk_level",
)


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 1000
    download_encoding: str = "utf-8"
    seed_demo_data: bool = True


SETTINGS = AppSettings()
