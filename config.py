"""
Configuration constants for the Notification Triage Engine.
"""

# ── Categories / Types ─────────────────────────────────────────────────
CATEGORIES = ("emergency", "medical", "appointment", "administrative", "reminder")
TYPES = ("critical", "urgent", "routine", "system")
GROUPABLE_CATEGORIES = ("appointment", "reminder", "administrative")

# ── Urgency Keywords (substring → weight) ──────────────────────────────
URGENCY_KEYWORDS = {
    "asap":          9,
    "immediately":   9,
    "now":           8,
    "urgent":        8,
    "priority":      7,
    "important":     6,
    "attention":     5,
    "please":        4,
    "when possible": 2,
    "convenient":    1,
}

MEDICAL_URGENCY_KEYWORDS = {
    "emergency":   10,
    "critical":    10,
    "urgent":      9,
    "stat":        9,
    "immediate":   9,
    "cardiac":     8,
    "stroke":      8,
    "bleeding":    8,
    "unconscious": 8,
    "respiratory": 7,
    "pain":        6,
    "abnormal":    6,
    "elevated":    5,
    "concern":     4,
    "follow-up":   3,
    "routine":     2,
    "scheduled":   2,
    "reminder":    1,
}

# ── Medical Relevance ──────────────────────────────────────────────────
MEDICAL_TERMS = [
    "patient", "diagnosis", "treatment", "medication", "prescription",
    "lab", "test", "result", "vital", "surgery", "procedure",
    "consultation", "examination", "symptom", "condition", "blood",
    "pressure", "heart", "lung", "brain", "kidney",
]
MEDICAL_TERM_WEIGHT = 2
MEDICAL_METADATA_WEIGHT = 1.5
METADATA_ID_WEIGHTS = {
    "patient_id":    5,
    "doctor_id":     3,
    "lab_result_id": 4,
}
DEPARTMENT_KEYWORDS = ["cardiology", "emergency", "icu", "surgery", "pediatrics"]
DEPARTMENT_WEIGHT = 3

# ── Sender Roles ───────────────────────────────────────────────────────
SENDER_ROLE_BONUS = {
    "emergency": 5,
    "doctor":    3,
    "physician": 3,
    "nurse":     2,
}
URGENCY_METADATA_WEIGHT = 2

# ── Score Bounds ───────────────────────────────────────────────────────
URGENCY_MAX = 50
MEDICAL_RELEVANCE_MAX = 30
TIME_RELEVANCE_MAX = 20
TIME_RELEVANCE_BASE = 10

# ── Recency (minutes) ──────────────────────────────────────────────────
# Urgency: +3 under 30 min, +2 under 2h, -2 past 24h.
URGENCY_RECENCY = [(30, 3), (120, 2)]
URGENCY_STALE_MINUTES = 24 * 60
URGENCY_STALE_PENALTY = -2

# Time relevance: most specific bucket wins.
TIME_RECENCY = [(5, 5), (30, 3), (120, 1)]
TIME_STALE_MINUTES = 24 * 60
TIME_STALE_PENALTY = -5
PREFERRED_HOUR_BONUS = 5
OFF_HOURS_PENALTY = -8
OFF_HOURS_BEFORE = 6
OFF_HOURS_AFTER = 22

# ── Behaviour Profile (static) ─────────────────────────────────────────
PREFERRED_HOURS = [8, 9, 10, 11, 14, 15, 16]
CATEGORY_ENGAGEMENT = {
    "emergency":      0.95,
    "medical":        0.85,
    "appointment":    0.75,
    "administrative": 0.45,
    "reminder":       0.30,
}
DEFAULT_ENGAGEMENT = 0.5
AVERAGE_RESPONSE_MINUTES = {
    "emergency":      2,
    "medical":        15,
    "appointment":    60,
    "administrative": 240,
    "reminder":       1440,
}
QUICK_RESPONSE_MINUTES = 30

# ── Priority Synthesis ─────────────────────────────────────────────────
SIGNAL_WEIGHTS = {"urgency": 0.5, "medical_relevance": 0.3, "time_relevance": 0.2}
NEUTRAL_PRIORITY_BASELINE = 2.5
PRIORITY_DIVISOR = 10
PRIORITY_MIN = 1
PRIORITY_MAX = 5
HIGH_PRIORITY = 4
ENGAGEMENT_BASE = 0.7
ENGAGEMENT_SPAN = 0.3

# (exclusive lower bound on urgency + medical relevance, confidence)
CONFIDENCE_STEPS = [(40, 0.95), (30, 0.85), (20, 0.75), (10, 0.65)]
BASE_CONFIDENCE = 0.5

# ── Roles / Actions ────────────────────────────────────────────────────
CATEGORY_ROLES = {
    "emergency":      ["doctor", "nurse", "emergency-staff"],
    "medical":        ["doctor", "nurse"],
    "appointment":    ["admin", "receptionist", "doctor"],
    "administrative": ["admin", "manager"],
    "reminder":       ["all"],
}
EVERYONE_ROLE = "all"

ACTION_KEYWORDS = {
    "book":        "accept",
    "schedule":    "accept",
    "confirm":     "accept",
    "approve":     "accept",
    "review":      "review",
    "check":       "review",
    "examine":     "review",
    "contact":     "respond",
    "call":        "respond",
    "notify":      "respond",
    "acknowledge": "acknowledge",
    "received":    "acknowledge",
}

# ── Insight Phrases ────────────────────────────────────────────────────
INSIGHT_CRITICAL = "Critical: Requires immediate medical intervention"
INSIGHT_CRITICAL_FAST = ", within 10 minutes"
INSIGHT_CRITICAL_SLOW = ", within 30 minutes"
INSIGHT_CRITICAL_FAST_URGENCY = 35
INSIGHT_URGENT_MEDICAL = "Medical attention needed: Contact patient within 2 hours"
INSIGHT_URGENT_APPOINTMENT = "High impact: Affects multiple patients and schedules"
INSIGHT_ROUTINE_APPOINTMENT = "Routine booking cluster - can be processed in batch"
INSIGHT_DEFAULT = "Standard priority - process when convenient"
INSIGHT_QUICK_RESPONDER = "You typically respond to these quickly"
INSIGHT_SEPARATOR = ". "

# ── Summary ────────────────────────────────────────────────────────────
SUMMARY_MIN_LENGTH = 100
SUMMARY_KEYWORDS = [
    "patient", "doctor", "appointment", "surgery",
    "emergency", "completed", "report",
]

# ── Delivery ───────────────────────────────────────────────────────────
AUTO_READ_AGE_MINUTES = 24 * 60
AUTO_READ_MAX_PRIORITY = 2

# ── Default AI Settings ────────────────────────────────────────────────
DEFAULT_SETTINGS = {
    "enabled": True,
    "priority_weight": 75,
    "category_weights": {
        "emergency":      100,
        "medical":        85,
        "appointment":    60,
        "administrative": 40,
        "reminder":       30,
    },
    "smart_grouping": True,
    "group_similar_threshold": 70,
    "role_based_filtering": {
        "enabled": True,
        "user_roles": ["doctor", "nurse"],
        "department_filter": ["cardiology", "emergency"],
    },
    "learning_mode": {
        "enabled": True,
        "adapt_to_behavior": True,
        "suggest_optimizations": True,
    },
    "auto_actions": {
        "enabled": True,
        "low_priority_auto_read": False,
        "high_priority_alerts": True,
        "emergency_notifications": True,
    },
    "quiet_hours": {
        "enabled": True,
        "start_time": "22:00",
        "end_time": "06:00",
        "emergency_override": True,
    },
    "notification_methods": {
        "in_app": True,
        "email": True,
        "sms": False,
        "push": True,
    },
}
MISSING_CATEGORY_WEIGHT = 100

# ── Disabled Engine ────────────────────────────────────────────────────
NEUTRAL_RESULT = {
    "type": "routine",
    "category": "administrative",
    "ai_priority": 3,
    "ai_confidence": 0.5,
    "ai_insight": "",
    "is_groupable": False,
    "group_id": None,
    "suggested_role": [],
    "action_suggested": False,
    "action_type": None,
}
