"""
Input Validator — validates and normalizes incoming notifications.
"""

from datetime import datetime, timezone


REQUIRED_FIELDS = ["id", "timestamp"]
LIST_METADATA_FIELDS = ["urgency_keywords", "medical_terms"]

# Accept the camelCase spelling used by JavaScript callers.
FIELD_ALIASES = {
    "senderRole": "sender_role",
}
METADATA_ALIASES = {
    "patientId":       "patient_id",
    "doctorId":        "doctor_id",
    "appointmentId":   "appointment_id",
    "labResultId":     "lab_result_id",
    "urgencyKeywords": "urgency_keywords",
    "medicalTerms":    "medical_terms",
}


class ValidationError(Exception):
    """Raised when a notification fails validation."""
    pass


def parse_timestamp(value) -> datetime:
    """Parse an ISO-8601 string or datetime into an aware UTC datetime."""
    if isinstance(value, datetime):
        ts = value
    else:
        try:
            ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except (ValueError, AttributeError):
            raise ValidationError(f"Invalid timestamp format: {value}")

    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _normalize_metadata(metadata) -> dict:
    """Apply camelCase aliases; malformed metadata is treated as absent."""
    if not isinstance(metadata, dict):
        return {}

    normalized = {METADATA_ALIASES.get(k, k): v for k, v in metadata.items()}
    for field in LIST_METADATA_FIELDS:
        if field in normalized and not isinstance(normalized[field], (list, tuple)):
            del normalized[field]
    return normalized


def _text(raw: dict, field: str) -> str:
    value = raw.get(field)
    return value if isinstance(value, str) else ""


def validate_notification(notification: dict) -> dict:
    """
    Validate and normalize a notification.
    Returns a cleaned copy with defaults filled in.
    Raises ValidationError when the notification is not an object or its
    id or timestamp is missing or unusable. Malformed optional fields
    read as absent.
    """
    if not isinstance(notification, dict):
        raise ValidationError("Notification must be a JSON object (dict)")

    raw = {FIELD_ALIASES.get(k, k): v for k, v in notification.items()}

    # Check required fields
    for field in REQUIRED_FIELDS:
        if field not in raw or not raw[field]:
            raise ValidationError(f"Missing required field: {field}")

    ts = parse_timestamp(raw["timestamp"])

    # Build normalized notification; unrecognized top-level keys pass through
    normalized = dict(raw)
    normalized.update({
        "id": str(raw["id"]),
        "title": _text(raw, "title"),
        "description": _text(raw, "description"),
        "sender": _text(raw, "sender") or "unknown",
        "sender_role": _text(raw, "sender_role"),
        "timestamp": ts.isoformat(),
        "parsed_timestamp": ts,
        "metadata": _normalize_metadata(raw.get("metadata")),
    })
    return normalized
