"""Resolution-time metrics (pure functions)."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

import pandas as pd

from civic_app.core.config import SECONDS_PER_DAY, STATUS_RESOLVED


def round_half_up(value: float, digits: int = 1) -> float:
    """Round with half-up semantics on the decimal representation.

    Python's ``round`` uses banker's rounding on the binary value, which turns
    1.75 into 1.8 but 0.25 into 0.2; dashboards expect 0.3.
    """
    if value is None or math.isnan(value):
        return 0.0
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def add_resolution_metrics(df: pd.DataFrame) -> pd.DataFrame:
    """Add ``resolution_days`` for issues that qualify for the resolution average.

    An issue qualifies when its status is ``resolved`` and both ``created_at``
    and ``resolved_at`` parsed. Elapsed time is fractional days at a fixed
    86 400 s per day. Negative spans (resolved before created) are clamped to
    zero and marked in ``resolution_clamped``.
    """
    if df.empty:
        return df
    out = df.copy()
    created = pd.to_datetime(out["created_at"], utc=True, errors="coerce")
    resolved = pd.to_datetime(out["resolved_at"], utc=True, errors="coerce")
    qualifies = (out["status"] == STATUS_RESOLVED) & created.notna() & resolved.notna()
    elapsed = (resolved - created).dt.total_seconds() / SECONDS_PER_DAY
    out["resolution_qualifies"] = qualifies
    out["resolution_clamped"] = qualifies & (elapsed < 0)
    out["resolution_days"] = elapsed.where(qualifies).clip(lower=0.0)
    return out


def average_resolution_days(df: pd.DataFrame) -> float:
    """Mean ``resolution_days`` over qualifying issues; exactly 0.0 when none qualify."""
    if df.empty:
        return 0.0
    if "resolution_days" not in df.columns:
        df = add_resolution_metrics(df)
    days = df.loc[df["resolution_qualifies"], "resolution_days"]
    if days.empty:
        return 0.0
    return float(days.sum() / len(days))
