"""Issue record store: the collaborator interface plus an in-memory implementation."""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from typing import Protocol

import pytz

from .config import STATUS_RESOLVED
from .errors import DuplicateIssueError, InvalidTransitionError, IssueNotFoundError
from .models import IssueModel
from .status import can_transition

logger = logging.getLogger(__name__)


class IssueStore(Protocol):
    def get_all(self) -> list[IssueModel]: ...

    def append(self, issue: IssueModel) -> IssueModel: ...

    def update_status(self, issue_id: str, status: str, *, at: datetime | None = None) -> IssueModel: ...


def new_issue_id() -> str:
    return uuid.uuid4().hex


def _snapshot(issue: IssueModel) -> IssueModel:
    return replace(issue, data_errors=list(issue.data_errors))


class InMemoryIssueStore:
    """Process-local store. Readers get copies, so a snapshot never changes under them."""

    def __init__(self, issues: Iterable[IssueModel] | None = None):
        self._lock = threading.Lock()
        self._issues: dict[str, IssueModel] = {}
        for issue in issues or ():
            self.append(issue)

    def __len__(self) -> int:
        with self._lock:
            return len(self._issues)

    def get_all(self) -> list[IssueModel]:
        with self._lock:
            return [_snapshot(i) for i in self._issues.values()]

    def get(self, issue_id: str) -> IssueModel:
        with self._lock:
            issue = self._issues.get(issue_id)
            if issue is None:
                raise IssueNotFoundError(issue_id)
            return _snapshot(issue)

    def append(self, issue: IssueModel) -> IssueModel:
        with self._lock:
            if not issue.id:
                issue = replace(issue, id=new_issue_id())
            if issue.id in self._issues:
                raise DuplicateIssueError(f"Issue {issue.id} already exists")
            stored = _snapshot(issue)
            self._issues[stored.id] = stored
        logger.debug("Stored issue %s (%s)", stored.id, stored.category)
        return _snapshot(stored)

    def update_status(self, issue_id: str, status: str, *, at: datetime | None = None) -> IssueModel:
        """Move an issue along its lifecycle.

        ``resolved_at`` is stamped the first time the issue becomes resolved
        and is never overwritten afterwards.
        """
        when = at or datetime.now(tz=pytz.UTC)
        with self._lock:
            issue = self._issues.get(issue_id)
            if issue is None:
                raise IssueNotFoundError(issue_id)
            if not can_transition(issue.status, status):
                raise InvalidTransitionError(issue_id, issue.status, status)
            resolved_at = issue.resolved_at
            if status == STATUS_RESOLVED and resolved_at is None:
                resolved_at = when
            updated = replace(
                issue,
                status=status,
                resolved_at=resolved_at,
                updated_at=when,
                data_errors=list(issue.data_errors),
            )
            self._issues[issue_id] = updated
        logger.debug("Issue %s status %s -> %s", issue_id, issue.status, status)
        return _snapshot(updated)
