"""Status normalization and categorization utilities.

The dashboard aggregator matches status values exactly; the helpers here are
used at the input edges (report form, staff status updates) to map loose
spellings onto the canonical workflow values from config.py.
"""

from __future__ import annotations

from .config import (
    STATUS_CLOSED,
    STATUS_DISPLAY_ORDER,
    STATUS_IN_PROGRESS,
    STATUS_OPEN,
    STATUS_RESOLVED,
    STATUS_TRANSITIONS,
)

# Keys are lowercase for case-insensitive matching
STATUS_ALIASES: dict[str, str] = {
    "open": STATUS_OPEN,
    "new": STATUS_OPEN,
    "reported": STATUS_OPEN,
    "in-progress": STATUS_IN_PROGRESS,
    "in progress": STATUS_IN_PROGRESS,
    "in_progress": STATUS_IN_PROGRESS,
    "inprogress": STATUS_IN_PROGRESS,
    "resolved": STATUS_RESOLVED,
    "fixed": STATUS_RESOLVED,
    "done": STATUS_RESOLVED,
    "closed": STATUS_CLOSED,
}

STATUS_LABELS: dict[str, str] = {
    STATUS_OPEN: "Open",
    STATUS_IN_PROGRESS: "In Progress",
    STATUS_RESOLVED: "Resolved",
    STATUS_CLOSED: "Closed",
}


def normalize_workflow_status(value: str | None) -> str | None:
    """Map a raw status string to its canonical workflow value.

    Parameters
    ----------
    value : str | None
        Raw status string, e.g. from a form or query parameter.

    Returns
    -------
    str | None
        Canonical status (``"open"``, ``"in-progress"``, ``"resolved"``,
        ``"closed"``) or ``None`` when the value is empty or unmapped.

    Examples
    --------
    >>> normalize_workflow_status("In Progress")
    'in-progress'
    >>> normalize_workflow_status("pending review") is None
    True
    """
    if not value:
        return None
    text = str(value).strip().lower()
    return STATUS_ALIASES.get(text)


def status_label(value: str | None) -> str:
    if value in STATUS_LABELS:
        return STATUS_LABELS[value]
    return "Unknown"


def is_active_status(value: str | None) -> bool:
    """True for statuses whose SLA clock is still running."""
    return value in {STATUS_OPEN, STATUS_IN_PROGRESS}


def can_transition(current: str | None, target: str) -> bool:
    """Check whether the lifecycle allows moving from ``current`` to ``target``.

    Records with a missing or unrecognized current status may only be
    closed, which lets staff retire bad data without inventing history.
    """
    if target not in STATUS_DISPLAY_ORDER:
        return False
    if current not in STATUS_TRANSITIONS:
        return target == STATUS_CLOSED
    return target in STATUS_TRANSITIONS[current]
