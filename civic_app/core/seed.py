"""Demo issues for a fresh in-memory store."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytz

from .models import CoordinatesModel, IssueModel

# (title, category, location, lat, lng, status, days_ago, resolved_after_days, priority)
_DEMO_ROWS = [
    ("Pothole on Main Street", "pothole", "Main Street", 15.4909, 73.8278, "open", 2, None, "high"),
    ("Streetlight out near school", "streetlight", "School Road", 15.4921, 73.8265, "in-progress", 5, None, "medium"),
    ("Overflowing garbage bin", "garbage", "Market Area", 15.4850, 73.8250, "resolved", 9, 1.5, "medium"),
    ("Burst water pipe", "water_leak", "Station Road", 15.4888, 73.8301, "resolved", 12, 0.5, "critical"),
    ("Blocked storm drain", "drainage", "Riverside Lane", 15.4870, 73.8222, "open", 1, None, "high"),
    ("Faded lane markings", "road", "Highway Junction", 15.4953, 73.8312, "open", 20, None, "low"),
    ("Exposed electrical wires", "electricity", "Park Avenue", 15.4899, 73.8240, "in-progress", 3, None, "critical"),
    ("Traffic signal stuck on red", "traffic", "Clock Tower Circle", 15.4915, 73.8288, "resolved", 15, 0.25, "high"),
    ("Public toilet unclean", "sanitation", "Bus Stand", 15.4862, 73.8272, "closed", 35, None, "low"),
    ("Second pothole on Main Street", "pothole", "Main Street", 15.4911, 73.8281, "resolved", 25, 4.0, "medium"),
    ("Fallen tree branch", "other", "Church Square", 15.4934, 73.8259, "open", 0, None, "medium"),
    ("Garbage not collected for a week", "garbage", "Fisherman Colony", 15.4841, 73.8236, "open", 6, None, "high"),
]


def demo_issues(now: datetime | None = None) -> list[IssueModel]:
    now = now or datetime.now(tz=pytz.UTC)
    issues = []
    for idx, (title, category, location, lat, lng, status, days_ago, resolve_days, priority) in enumerate(
        _DEMO_ROWS, start=1
    ):
        created = now - timedelta(days=days_ago, hours=idx)
        resolved = created + timedelta(days=resolve_days) if resolve_days is not None else None
        issues.append(
            IssueModel(
                id=f"demo-{idx:03d}",
                title=title,
                description=f"{title} reported by a resident.",
                category=category,
                status=status,
                created_at=created,
                resolved_at=resolved,
                location=location,
                coordinates=CoordinatesModel(lat=lat, lng=lng),
                priority=priority,
                user_id="demo",
                votes=(idx * 7) % 23,
                updated_at=resolved or created,
            )
        )
    return issues
