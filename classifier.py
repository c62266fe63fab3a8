"""
Classifier — ordered category and type rules over the extracted signals.

Rules are evaluated top to bottom; the first match wins.
"""

from signal_extractor import notification_text


EMERGENCY_URGENCY = 25
MEDICAL_RELEVANCE = 15
CRITICAL_URGENCY = 30
URGENT_URGENCY = 20
URGENT_MEDICAL_RELEVANCE = 20
URGENT_MEDICAL_CATEGORY_URGENCY = 15
SYSTEM_URGENCY = 5

APPOINTMENT_WORDS = ("appointment", "schedule", "booking")
REMINDER_WORDS = ("reminder", "due", "upcoming")


def categorize(notification: dict, urgency: float, medical_relevance: float) -> str:
    """Map a notification and its signals to one of the five categories."""
    text = notification_text(notification)
    metadata = notification.get("metadata") or {}

    if urgency > EMERGENCY_URGENCY or "emergency" in text or "critical" in text:
        return "emergency"
    if (medical_relevance > MEDICAL_RELEVANCE
            or metadata.get("patient_id") or metadata.get("lab_result_id")
            or "patient" in text or "medical" in text):
        return "medical"
    if any(w in text for w in APPOINTMENT_WORDS) or metadata.get("appointment_id"):
        return "appointment"
    if any(w in text for w in REMINDER_WORDS):
        return "reminder"
    return "administrative"


def type_of(urgency: float, medical_relevance: float, category: str) -> str:
    """Map signals and category to an urgency tier."""
    if category == "emergency" or urgency > CRITICAL_URGENCY:
        return "critical"
    if (urgency > URGENT_URGENCY or medical_relevance > URGENT_MEDICAL_RELEVANCE
            or (category == "medical" and urgency > URGENT_MEDICAL_CATEGORY_URGENCY)):
        return "urgent"
    if category == "administrative" and urgency < SYSTEM_URGENCY:
        return "system"
    return "routine"
