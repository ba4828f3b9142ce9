"""Load SLA policy and column sets from YAML (with fallbacks)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .config import (
    DEFAULT_SLA_HOURS,
    DISPLAY_ORDER_ISSUE_LIST,
    DISPLAY_ORDER_SLA_ALERTS,
    ISSUE_CORE_COLUMNS,
    SLA_POLICY_HOURS,
)

logger = logging.getLogger(__name__)

_SLA_CACHE: dict[str, float] | None = None
_COLUMN_CACHE: dict[str, list[str]] | None = None


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent.parent


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        return yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}


def load_sla_policy(base_path: str | Path | None = None, *, reload: bool = False) -> dict[str, float]:
    """Return hours-to-resolve per category.

    ``sla_policy.yaml`` may override individual categories under a ``hours``
    table; anything missing or non-numeric keeps the built-in default.
    """
    global _SLA_CACHE
    if _SLA_CACHE is not None and not reload and base_path is None:
        return _SLA_CACHE
    data = _read_yaml(Path(base_path or _project_root()) / "sla_policy.yaml")
    policy = dict(SLA_POLICY_HOURS)
    overrides = data.get("hours") if isinstance(data, dict) else None
    for category, hours in (overrides or {}).items():
        try:
            value = float(hours)
        except (TypeError, ValueError):
            logger.warning("Ignoring SLA hours %r for %s", hours, category)
            continue
        if value <= 0:
            logger.warning("Ignoring non-positive SLA hours %r for %s", hours, category)
            continue
        policy[str(category)] = value
    if base_path is None:
        _SLA_CACHE = policy
    return policy


def sla_hours_for(category: str | None, policy: dict[str, float] | None = None) -> float:
    policy = policy if policy is not None else load_sla_policy()
    if category and category in policy:
        return policy[category]
    return DEFAULT_SLA_HOURS


def load_column_sets(base_path: str | Path | None = None) -> dict[str, list[str]]:
    global _COLUMN_CACHE
    if _COLUMN_CACHE is not None and base_path is None:
        return _COLUMN_CACHE
    data = _read_yaml(Path(base_path or _project_root()) / "columns.yaml")
    sets = data.get("sets", {}) if isinstance(data, dict) else {}
    out = {
        "core": sets.get("core") or list(ISSUE_CORE_COLUMNS),
        "issue_list": sets.get("issue_list") or list(DISPLAY_ORDER_ISSUE_LIST),
        "sla_alerts": sets.get("sla_alerts") or list(DISPLAY_ORDER_SLA_ALERTS),
    }
    if base_path is None:
        _COLUMN_CACHE = out
    return out


def get_columns(set_name: str) -> list[str]:
    return load_column_sets().get(set_name, [])
