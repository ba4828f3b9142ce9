"""Exception types raised by the store, aggregator, and request handlers."""

from __future__ import annotations


class CivicAppError(Exception):
    """Base class for application errors."""


class InvalidInputError(CivicAppError, ValueError):
    """Caller supplied arguments the aggregator cannot interpret."""


class IssueValidationError(CivicAppError, ValueError):
    """A new issue payload is missing required fields or has invalid values."""


class IssueNotFoundError(CivicAppError, KeyError):
    def __init__(self, issue_id: str):
        super().__init__(issue_id)
        self.issue_id = issue_id

    def __str__(self) -> str:
        return f"Issue {self.issue_id} not found"


class DuplicateIssueError(CivicAppError, ValueError):
    pass


class InvalidTransitionError(CivicAppError, ValueError):
    def __init__(self, issue_id: str, current: str | None, target: str):
        super().__init__(f"Issue {issue_id} cannot move from {current!r} to {target!r}")
        self.issue_id = issue_id
        self.current = current
        self.target = target
