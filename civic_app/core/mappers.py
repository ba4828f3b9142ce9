"""Mapping raw issue JSON into IssueModel instances and DataFrames."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

import pandas as pd

from .models import CoordinatesModel, IssueModel

# camelCase keys used by the web client, mapped to model attribute names
FIELD_ALIASES: dict[str, str] = {
    "createdAt": "created_at",
    "resolvedAt": "resolved_at",
    "updatedAt": "updated_at",
    "photoUrl": "photo_url",
    "userId": "user_id",
}

TIMESTAMP_FIELDS = ("created_at", "resolved_at", "updated_at")


def _get(raw: Mapping[str, Any], name: str):
    if name in raw:
        return raw[name]
    for camel, snake in FIELD_ALIASES.items():
        if snake == name and camel in raw:
            return raw[camel]
    return None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO string, epoch milliseconds, or datetime into an aware UTC datetime.

    Naive values are taken to be UTC. Returns None when the value is empty,
    not a scalar, or cannot be parsed.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (bool, Mapping, list, tuple, set)):
        return None
    try:
        if isinstance(value, (int, float)):
            if not math.isfinite(value):
                return None
            ts = pd.to_datetime(value, unit="ms", utc=True, errors="coerce")
        else:
            ts = pd.to_datetime(value, utc=True, errors="coerce")
    except (TypeError, ValueError, OverflowError, pd.errors.OutOfBoundsDatetime):
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def parse_coordinates(value: Any) -> CoordinatesModel | None:
    """Accept ``{"lat": .., "lng": ..}`` or a ``(lat, lng)`` pair.

    Raises ValueError for malformed input; returns None for a missing value.
    """
    if value is None:
        return None
    if isinstance(value, CoordinatesModel):
        return value
    if isinstance(value, Mapping):
        lat = value.get("lat", value.get("latitude"))
        lng = value.get("lng", value.get("longitude"))
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        lat, lng = value
    else:
        raise ValueError(f"Unrecognized coordinates: {value!r}")
    if isinstance(lat, bool) or isinstance(lng, bool):
        raise ValueError(f"Unrecognized coordinates: {value!r}")
    lat_f = float(lat)
    lng_f = float(lng)
    if not (-90.0 <= lat_f <= 90.0) or not (-180.0 <= lng_f <= 180.0):
        raise ValueError(f"Coordinates out of range: ({lat_f}, {lng_f})")
    return CoordinatesModel(lat=lat_f, lng=lng_f)


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _raw_text(value: Any) -> str | None:
    # Kept verbatim: statuses are bucketed by exact match
    return None if value is None else str(value)


def map_issue(raw: Mapping[str, Any] | IssueModel) -> IssueModel:
    if isinstance(raw, IssueModel):
        return raw

    errors: list[str] = []
    stamps: dict[str, datetime | None] = {}
    for name in TIMESTAMP_FIELDS:
        value = _get(raw, name)
        parsed = parse_timestamp(value)
        if parsed is None and value not in (None, ""):
            errors.append(name)
        stamps[name] = parsed

    try:
        coordinates = parse_coordinates(raw.get("coordinates"))
    except (TypeError, ValueError):
        coordinates = None
        errors.append("coordinates")

    votes = raw.get("votes")
    try:
        votes = int(votes) if votes is not None else 0
    except (TypeError, ValueError):
        votes = 0

    raw_id = raw.get("id")
    return IssueModel(
        id=str(raw_id) if raw_id is not None else "",
        title=raw.get("title"),
        description=raw.get("description"),
        category=_text(raw.get("category")),
        status=_raw_text(raw.get("status")),
        created_at=stamps["created_at"],
        resolved_at=stamps["resolved_at"],
        location=raw.get("location"),
        coordinates=coordinates,
        photo_url=_get(raw, "photo_url"),
        priority=_text(raw.get("priority")),
        user_id=_get(raw, "user_id"),
        votes=votes,
        updated_at=stamps["updated_at"],
        data_errors=errors,
    )


def _iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    ts = pd.Timestamp(value)
    ts = ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")
    return ts.isoformat().replace("+00:00", "Z")


def issue_to_dict(issue: IssueModel) -> dict[str, Any]:
    """Serialize an issue to the camelCase JSON shape used by the web client."""
    coords = issue.coordinates
    return {
        "id": issue.id,
        "title": issue.title,
        "description": issue.description,
        "category": issue.category,
        "location": issue.location,
        "coordinates": {"lat": coords.lat, "lng": coords.lng} if coords else None,
        "photoUrl": issue.photo_url,
        "status": issue.status,
        "priority": issue.priority,
        "userId": issue.user_id,
        "votes": issue.votes,
        "createdAt": _iso(issue.created_at),
        "updatedAt": _iso(issue.updated_at),
        "resolvedAt": _iso(issue.resolved_at),
    }


def issues_to_dataframe(issues: Iterable[IssueModel]) -> pd.DataFrame:
    rows = []
    for i in issues:
        rows.append(
            {
                "id": i.id,
                "title": i.title,
                "description": i.description,
                "category": i.category,
                "status": i.status,
                "priority": i.priority or "None",
                "location": i.location,
                "lat": i.coordinates.lat if i.coordinates else None,
                "lng": i.coordinates.lng if i.coordinates else None,
                "votes": i.votes,
                "user_id": i.user_id,
                "created_at": i.created_at,
                "resolved_at": i.resolved_at,
                "updated_at": i.updated_at,
                "data_errors": list(i.data_errors),
            }
        )
    df = pd.DataFrame(rows)
    if df.empty:
        return df
    for col in TIMESTAMP_FIELDS:
        df[col] = pd.to_datetime(df[col], utc=True, errors="coerce")
    return df
