"""
Priority Synthesizer — blends signals into a 1-5 priority with confidence,
insight text, a suggested action and the roles that should see it.
"""

import math

from config import (
    SIGNAL_WEIGHTS, NEUTRAL_PRIORITY_BASELINE, PRIORITY_DIVISOR,
    PRIORITY_MIN, PRIORITY_MAX, ENGAGEMENT_BASE, ENGAGEMENT_SPAN,
    CONFIDENCE_STEPS, BASE_CONFIDENCE, QUICK_RESPONSE_MINUTES, EVERYONE_ROLE,
    INSIGHT_CRITICAL, INSIGHT_CRITICAL_FAST, INSIGHT_CRITICAL_SLOW,
    INSIGHT_CRITICAL_FAST_URGENCY, INSIGHT_URGENT_MEDICAL, INSIGHT_URGENT_APPOINTMENT,
    INSIGHT_ROUTINE_APPOINTMENT, INSIGHT_DEFAULT, INSIGHT_QUICK_RESPONDER, INSIGHT_SEPARATOR,
    SUMMARY_MIN_LENGTH, SUMMARY_KEYWORDS,
)
from settings import AISettings
from tables import ReferenceTables, default_tables


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class PrioritySynthesizer:
    """Turns signal scores plus settings into priority, confidence and guidance."""

    def __init__(self, tables: ReferenceTables = None):
        self.tables = tables or default_tables()

    def synthesize(self, signals: dict, category: str, notification_type: str,
                   settings: AISettings) -> dict:
        """
        Returns { "priority": int, "confidence": float, "insight": str }.
        """
        urgency = signals["urgency"]
        medical = signals["medical_relevance"]
        return {
            "priority": self.priority(signals, category, settings),
            "confidence": self.confidence(urgency, medical),
            "insight": self.insight(urgency, category, notification_type, settings),
        }

    def priority(self, signals: dict, category: str, settings: AISettings) -> int:
        raw = (SIGNAL_WEIGHTS["urgency"] * signals["urgency"]
               + SIGNAL_WEIGHTS["medical_relevance"] * signals["medical_relevance"]
               + SIGNAL_WEIGHTS["time_relevance"] * signals["time_relevance"])
        raw *= settings.category_weight(category) / 100

        if settings.adapts_to_behavior:
            raw *= ENGAGEMENT_BASE + ENGAGEMENT_SPAN * self.tables.engagement(category)

        ai_share = settings.priority_weight / 100
        blended = raw * ai_share + NEUTRAL_PRIORITY_BASELINE * (1 - ai_share)

        # Scale the blended signal down to the 1-5 band.
        priority = round_half_up(blended / PRIORITY_DIVISOR)
        return max(PRIORITY_MIN, min(PRIORITY_MAX, priority))

    @staticmethod
    def confidence(urgency: float, medical_relevance: float) -> float:
        total = urgency + medical_relevance
        for threshold, value in CONFIDENCE_STEPS:
            if total > threshold:
                return value
        return BASE_CONFIDENCE

    def insight(self, urgency: float, category: str, notification_type: str,
                settings: AISettings) -> str:
        parts = []
        if notification_type == "critical":
            window = INSIGHT_CRITICAL_FAST if urgency > INSIGHT_CRITICAL_FAST_URGENCY else INSIGHT_CRITICAL_SLOW
            parts.append(INSIGHT_CRITICAL + window)
        elif notification_type == "urgent" and category == "medical":
            parts.append(INSIGHT_URGENT_MEDICAL)
        elif notification_type == "urgent" and category == "appointment":
            parts.append(INSIGHT_URGENT_APPOINTMENT)
        elif notification_type == "routine" and category == "appointment":
            parts.append(INSIGHT_ROUTINE_APPOINTMENT)
        else:
            parts.append(INSIGHT_DEFAULT)

        if settings.learning_mode.enabled:
            response = self.tables.average_response_minutes.get(category)
            if response is not None and response < QUICK_RESPONSE_MINUTES:
                parts.append(INSIGHT_QUICK_RESPONDER)

        return INSIGHT_SEPARATOR.join(parts)

    def suggest_action(self, text: str, category: str, notification_type: str) -> str | None:
        """First keyword hit in table order wins; otherwise fall back on type/category."""
        for keyword, action in self.tables.action_keywords.items():
            if keyword in text:
                return action

        if notification_type == "critical":
            return "respond"
        if category == "appointment":
            return "accept"
        if category == "medical" and notification_type == "urgent":
            return "review"
        return None

    def suggest_roles(self, category: str, settings: AISettings) -> list[str]:
        roles = self.tables.roles_for(category)
        rbf = settings.role_based_filtering
        if rbf.enabled:
            roles = [r for r in roles if r == EVERYONE_ROLE or r in rbf.user_roles]
        return roles

    @staticmethod
    def summarize(description: str) -> str | None:
        """Shorten long multi-sentence descriptions to their most relevant sentence."""
        if len(description) <= SUMMARY_MIN_LENGTH:
            return None
        sentences = [s for s in description.split(".") if s.strip()]
        if len(sentences) <= 1:
            return None

        for sentence in sentences:
            if any(word in sentence.lower() for word in SUMMARY_KEYWORDS):
                return sentence.strip() + "..."
        return sentences[0].strip() + "..."
