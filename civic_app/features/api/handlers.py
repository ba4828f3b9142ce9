"""Framework-neutral request handlers for the dashboard and issue endpoints.

Each handler takes already-decoded request data plus its collaborators and
returns an ``ApiResponse`` envelope; adapting it to a web framework is a
matter of copying ``status_code`` and ``body`` onto the framework response.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import pytz

from civic_app.analytics.metrics.sla import alert_to_dict
from civic_app.core.auth import Authenticator
from civic_app.core.config import (
    DEFAULT_PRIORITY,
    DEFAULT_SLA_WARN_HOURS,
    DEFAULT_USER_ID,
    DEFAULT_WINDOW_DAYS,
    ISSUE_CATEGORIES,
    PRIORITY_MAPPING,
    STATUS_OPEN,
)
from civic_app.core.errors import (
    InvalidInputError,
    InvalidTransitionError,
    IssueNotFoundError,
    IssueValidationError,
)
from civic_app.core.mappers import issue_to_dict, parse_coordinates
from civic_app.core.models import CoordinatesModel, IssueModel
from civic_app.core.status import normalize_workflow_status
from civic_app.core.store import InMemoryIssueStore, IssueStore, new_issue_id
from civic_app.features.dashboard.context import build_context

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "description", "category", "location")


@dataclass(slots=True)
class ApiResponse:
    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def _unauthorized() -> ApiResponse:
    return ApiResponse(401, {"success": False, "error": "Unauthorized - Please login"})


def _utcnow() -> datetime:
    return datetime.now(tz=pytz.UTC)


# ------------------ Dashboard ------------------
def handle_dashboard_request(
    request: Any,
    *,
    authenticator: Authenticator,
    store: IssueStore,
    now: datetime | None = None,
    window_days: int = DEFAULT_WINDOW_DAYS,
    warn_hours: float = DEFAULT_SLA_WARN_HOURS,
) -> ApiResponse:
    """Authenticate, snapshot the store, aggregate, and wrap the result.

    The store is never read for an unauthenticated request.
    """
    try:
        user = authenticator.authenticate(request)
    except Exception:
        logger.exception("Authentication failed while fetching dashboard statistics")
        return ApiResponse(500, {"success": False, "error": "Failed to fetch dashboard statistics"})
    if user is None:
        return _unauthorized()

    try:
        issues = store.get_all()
        ctx = build_context(issues, now or _utcnow(), window_days, warn_hours=warn_hours)
    except InvalidInputError as exc:
        logger.warning("Rejected dashboard request from %s: %s", user.user_id, exc)
        return ApiResponse(400, {"success": False, "error": str(exc)})
    except Exception:
        logger.exception("Error fetching dashboard stats")
        return ApiResponse(500, {"success": False, "error": "Failed to fetch dashboard statistics"})

    return ApiResponse(
        200,
        {
            "success": True,
            "stats": ctx.stats.to_dict(),
            "issueStatistics": ctx.issue_statistics(),
            "slaAlerts": [alert_to_dict(a) for a in ctx.sla_alerts],
            "dataQualityIssues": ctx.stats.data_quality_to_list(),
        },
    )


# ------------------ Issues ------------------
def handle_list_issues(params: Mapping[str, Any] | None, *, store: IssueStore) -> ApiResponse:
    params = params or {}
    status = params.get("status") or None
    category = params.get("category") or None
    try:
        issues = store.get_all()
    except Exception:
        logger.exception("Error fetching issues")
        return ApiResponse(500, {"error": "Internal server error"})
    if status:
        issues = [i for i in issues if i.status == status]
    if category:
        issues = [i for i in issues if i.category == category]
    return ApiResponse(200, {"issues": [issue_to_dict(i) for i in issues], "total": len(issues)})


def _required_text(payload: Mapping[str, Any], name: str) -> str | None:
    value = payload.get(name)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def build_new_issue(payload: Mapping[str, Any], now: datetime) -> IssueModel:
    """Validate a report submission and build the issue to store.

    Raises IssueValidationError with a client-facing message.
    """
    if not isinstance(payload, Mapping):
        raise IssueValidationError("Invalid request body")
    values = {name: _required_text(payload, name) for name in REQUIRED_FIELDS}
    if any(v is None for v in values.values()):
        raise IssueValidationError("Title, description, category, and location are required")
    if values["category"] not in ISSUE_CATEGORIES:
        raise IssueValidationError("Invalid category")

    try:
        coordinates = parse_coordinates(payload.get("coordinates"))
    except (TypeError, ValueError) as exc:
        raise IssueValidationError("Invalid coordinates") from exc

    priority = _required_text(payload, "priority") or DEFAULT_PRIORITY
    priority = priority.lower()
    if priority not in PRIORITY_MAPPING:
        raise IssueValidationError("Invalid priority")

    photo_url = _required_text(payload, "photoUrl") or _required_text(payload, "photo_url")
    user_id = _required_text(payload, "userId") or _required_text(payload, "user_id") or DEFAULT_USER_ID
    return IssueModel(
        id=new_issue_id(),
        title=values["title"],
        description=values["description"],
        category=values["category"],
        status=STATUS_OPEN,
        created_at=now,
        location=values["location"],
        coordinates=coordinates or CoordinatesModel(lat=0.0, lng=0.0),
        photo_url=photo_url,
        priority=priority,
        user_id=user_id,
        votes=0,
        updated_at=now,
    )


def handle_create_issue(payload: Any, *, store: IssueStore, now: datetime | None = None) -> ApiResponse:
    try:
        issue = build_new_issue(payload, now or _utcnow())
    except IssueValidationError as exc:
        return ApiResponse(400, {"error": str(exc)})
    try:
        stored = store.append(issue)
    except Exception:
        logger.exception("Error creating issue")
        return ApiResponse(500, {"error": "Internal server error"})
    logger.info("Issue %s reported (%s at %s)", stored.id, stored.category, stored.location)
    return ApiResponse(201, {"message": "Issue reported successfully", "issue": issue_to_dict(stored)})


def handle_update_status(
    request: Any,
    issue_id: str,
    payload: Mapping[str, Any] | None,
    *,
    authenticator: Authenticator,
    store: IssueStore,
    now: datetime | None = None,
) -> ApiResponse:
    """Staff-only lifecycle move. Unknown ids are 404, illegal moves 409."""
    try:
        user = authenticator.authenticate(request)
    except Exception:
        logger.exception("Authentication failed while updating issue %s", issue_id)
        return ApiResponse(500, {"success": False, "error": "Internal server error"})
    if user is None:
        return _unauthorized()
    target = normalize_workflow_status((payload or {}).get("status"))
    if target is None:
        return ApiResponse(400, {"success": False, "error": "Invalid status"})
    try:
        updated = store.update_status(issue_id, target, at=now or _utcnow())
    except IssueNotFoundError as exc:
        return ApiResponse(404, {"success": False, "error": str(exc)})
    except InvalidTransitionError as exc:
        return ApiResponse(409, {"success": False, "error": str(exc)})
    except Exception:
        logger.exception("Error updating issue %s", issue_id)
        return ApiResponse(500, {"success": False, "error": "Internal server error"})
    return ApiResponse(200, {"success": True, "issue": issue_to_dict(updated)})


def default_store(seed: bool = True) -> InMemoryIssueStore:
    from civic_app.core.seed import demo_issues

    return InMemoryIssueStore(demo_issues() if seed else None)
