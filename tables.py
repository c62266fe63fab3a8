"""
Reference Tables — immutable keyword weights and behaviour profile handed to the engine.
"""

import json
from dataclasses import dataclass, fields
from types import MappingProxyType

import config


@dataclass(frozen=True)
class ReferenceTables:
    """Read-only lookup tables consumed by the extractor and synthesizer."""

    urgency_keywords: MappingProxyType
    medical_urgency_keywords: MappingProxyType
    medical_terms: tuple
    department_keywords: tuple
    preferred_hours: frozenset
    category_engagement: MappingProxyType
    average_response_minutes: MappingProxyType
    category_roles: MappingProxyType
    action_keywords: MappingProxyType

    def engagement(self, category: str) -> float:
        return self.category_engagement.get(category, config.DEFAULT_ENGAGEMENT)

    def roles_for(self, category: str) -> list[str]:
        return list(self.category_roles.get(category, ()))


def _freeze(name: str, value):
    """Convert a JSON-ish value into the immutable shape a field expects."""
    if name in ("medical_terms", "department_keywords"):
        return tuple(str(v).lower() for v in value)
    if name == "preferred_hours":
        return frozenset(int(h) for h in value)
    if name == "category_roles":
        return MappingProxyType({k: tuple(v) for k, v in value.items()})
    if name in ("urgency_keywords", "medical_urgency_keywords"):
        return MappingProxyType({str(k).lower(): v for k, v in value.items()})
    return MappingProxyType(dict(value))


def build_tables(overrides: dict | None = None) -> ReferenceTables:
    """Build tables from the config defaults, replacing any table named in overrides."""
    source = {
        "urgency_keywords": config.URGENCY_KEYWORDS,
        "medical_urgency_keywords": config.MEDICAL_URGENCY_KEYWORDS,
        "medical_terms": config.MEDICAL_TERMS,
        "department_keywords": config.DEPARTMENT_KEYWORDS,
        "preferred_hours": config.PREFERRED_HOURS,
        "category_engagement": config.CATEGORY_ENGAGEMENT,
        "average_response_minutes": config.AVERAGE_RESPONSE_MINUTES,
        "category_roles": config.CATEGORY_ROLES,
        "action_keywords": config.ACTION_KEYWORDS,
    }
    known = {f.name for f in fields(ReferenceTables)}
    for key, value in (overrides or {}).items():
        if key in known:
            source[key] = value
    return ReferenceTables(**{name: _freeze(name, value) for name, value in source.items()})


def default_tables() -> ReferenceTables:
    return build_tables()


def load_tables(path: str) -> ReferenceTables:
    """Load table overrides from a JSON file, falling back to defaults if unreadable."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"[ReferenceTables] Warning: Could not load tables from {path}: {e}")
        return default_tables()

    if not isinstance(data, dict):
        print(f"[ReferenceTables] Warning: {path} is not a JSON object, using defaults")
        return default_tables()
    return build_tables(data.get("tables", data))
