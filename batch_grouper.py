"""
Batch Grouper — collapses same-category, same-day notifications and sorts by priority.
"""

from datetime import date

from config import GROUPABLE_CATEGORIES
from settings import AISettings


def is_groupable(category: str, settings: AISettings) -> bool:
    """Emergency and medical notifications are never grouped."""
    return settings.enabled and settings.smart_grouping and category in GROUPABLE_CATEGORIES


def group_id_for(category: str, processing_date: date) -> str:
    return f"{category}-{processing_date.isoformat()}"


def sort_by_priority(notifications: list[dict]) -> list[dict]:
    """Priority descending; ties keep their input order."""
    return sorted(notifications, key=lambda n: -n["ai_priority"])


def build_representative(bucket: list[dict]) -> dict:
    """Summarize a bucket of 2+ notifications as a copy of its first member."""
    first = bucket[0]
    category = first["category"]
    count = len(bucket)

    titles = ", ".join(n["title"] for n in bucket[:2])
    more = "..." if count > 2 else ""

    representative = dict(first)
    representative.update({
        "title": f"{count} {category} notifications",
        "description": f"Multiple {category} items: {titles}{more}",
        "is_grouped": True,
        "group_count": count,
    })
    return representative


def group_and_sort(notifications: list[dict], settings: AISettings) -> list[dict]:
    """
    Group groupable notifications by group_id and return the whole list
    sorted by priority. Buckets of one are passed through unchanged.
    """
    if not (settings.enabled and settings.smart_grouping):
        return sort_by_priority(notifications)

    standalone = []
    buckets: dict[str, list[dict]] = {}
    for n in notifications:
        if n.get("is_groupable") and n.get("group_id"):
            buckets.setdefault(n["group_id"], []).append(n)
        else:
            standalone.append(n)

    collapsed = []
    for bucket in buckets.values():
        if len(bucket) >= 2:
            collapsed.append(build_representative(bucket))
        else:
            collapsed.append(bucket[0])

    return sort_by_priority(standalone + collapsed)
