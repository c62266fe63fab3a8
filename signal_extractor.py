"""
Signal Extractor — urgency, medical relevance and time relevance scores.

Each score accumulates its terms unclamped and is clamped once at the
end to its own range: urgency [0, 50], medical relevance [0, 30],
time relevance [0, 20].
"""

from datetime import datetime, timezone

from config import (
    URGENCY_MAX, MEDICAL_RELEVANCE_MAX, TIME_RELEVANCE_MAX, TIME_RELEVANCE_BASE,
    URGENCY_RECENCY, URGENCY_STALE_MINUTES, URGENCY_STALE_PENALTY,
    TIME_RECENCY, TIME_STALE_MINUTES, TIME_STALE_PENALTY,
    PREFERRED_HOUR_BONUS, OFF_HOURS_PENALTY, OFF_HOURS_BEFORE, OFF_HOURS_AFTER,
    SENDER_ROLE_BONUS, URGENCY_METADATA_WEIGHT,
    MEDICAL_TERM_WEIGHT, MEDICAL_METADATA_WEIGHT, METADATA_ID_WEIGHTS, DEPARTMENT_WEIGHT,
)
from tables import ReferenceTables, default_tables


def notification_text(notification: dict) -> str:
    """Lower-cased title + description used for all keyword matching."""
    return f"{notification.get('title') or ''} {notification.get('description') or ''}".lower()


def age_minutes(notification: dict, now: datetime) -> float:
    """Minutes since the notification was generated, never negative."""
    ts = notification.get("parsed_timestamp")
    if ts is None:
        return 0.0
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return max((now - ts).total_seconds() / 60, 0.0)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _count_list(metadata: dict, key: str) -> int:
    value = metadata.get(key)
    if isinstance(value, (list, tuple)):
        return len(value)
    return 0


class SignalExtractor:
    """Derives the three independent signal scores for a notification."""

    def __init__(self, tables: ReferenceTables = None):
        self.tables = tables or default_tables()

    def score(self, notification: dict, now: datetime) -> dict:
        """
        Score a validated notification.
        Returns { "urgency", "medical_relevance", "time_relevance" }.
        """
        text = notification_text(notification)
        age = age_minutes(notification, now)
        return {
            "urgency": self.urgency(notification, text, age),
            "medical_relevance": self.medical_relevance(notification, text),
            "time_relevance": self.time_relevance(text, age, now.hour),
        }

    def urgency(self, notification: dict, text: str, age: float) -> float:
        score = 0
        for keyword, weight in self.tables.urgency_keywords.items():
            if keyword in text:
                score += weight
        for keyword, weight in self.tables.medical_urgency_keywords.items():
            if keyword in text:
                score += weight

        # Recency
        for limit, bonus in URGENCY_RECENCY:
            if age < limit:
                score += bonus
                break
        else:
            if age > URGENCY_STALE_MINUTES:
                score += URGENCY_STALE_PENALTY

        # Exact role match, not substring
        role = (notification.get("sender_role") or "").strip().lower()
        score += SENDER_ROLE_BONUS.get(role, 0)

        metadata = notification.get("metadata") or {}
        score += URGENCY_METADATA_WEIGHT * _count_list(metadata, "urgency_keywords")

        return clamp(score, 0, URGENCY_MAX)

    def medical_relevance(self, notification: dict, text: str) -> float:
        score = 0
        for term in self.tables.medical_terms:
            if term in text:
                score += MEDICAL_TERM_WEIGHT

        metadata = notification.get("metadata") or {}
        for key, weight in METADATA_ID_WEIGHTS.items():
            if metadata.get(key):
                score += weight
        score += MEDICAL_METADATA_WEIGHT * _count_list(metadata, "medical_terms")

        for department in self.tables.department_keywords:
            if department in text:
                score += DEPARTMENT_WEIGHT

        return clamp(score, 0, MEDICAL_RELEVANCE_MAX)

    def time_relevance(self, text: str, age: float, hour: int) -> float:
        score = TIME_RELEVANCE_BASE

        if hour in self.tables.preferred_hours:
            score += PREFERRED_HOUR_BONUS
        if (hour < OFF_HOURS_BEFORE or hour > OFF_HOURS_AFTER) \
                and "emergency" not in text and "critical" not in text:
            score += OFF_HOURS_PENALTY

        for limit, bonus in TIME_RECENCY:
            if age < limit:
                score += bonus
                break
        else:
            if age > TIME_STALE_MINUTES:
                score += TIME_STALE_PENALTY

        return clamp(score, 0, TIME_RELEVANCE_MAX)
