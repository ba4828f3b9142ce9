"""Status partition counts."""

from __future__ import annotations

import pandas as pd

from civic_app.core.config import STATUS_IN_PROGRESS, STATUS_OPEN, STATUS_RESOLVED


def count_statuses(df: pd.DataFrame) -> dict[str, int]:
    """Count issues per dashboard status bucket.

    Status values are matched exactly. Anything outside open / in-progress /
    resolved (``closed``, unknown, missing) contributes to ``total`` and to
    ``other`` only, so ``total == open + in_progress + resolved + other``.
    """
    total = int(len(df))
    if df.empty or "status" not in df.columns:
        return {"total": total, "open": 0, "in_progress": 0, "resolved": 0, "other": total}
    status = df["status"]
    open_count = int((status == STATUS_OPEN).sum())
    in_progress = int((status == STATUS_IN_PROGRESS).sum())
    resolved = int((status == STATUS_RESOLVED).sum())
    return {
        "total": total,
        "open": open_count,
        "in_progress": in_progress,
        "resolved": resolved,
        "other": total - open_count - in_progress - resolved,
    }
