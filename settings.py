"""
AI Settings — typed configuration for the triage engine.

Settings objects are treated as values: every update builds a new
AISettings via the section setters (with_ai_engine, with_automation,
with_roles, with_advanced) or merged(), so a reader holding a snapshot
never sees a half-applied change.
"""

import copy
import re
from dataclasses import asdict, dataclass, field, fields, replace

from config import DEFAULT_SETTINGS, MISSING_CATEGORY_WEIGHT


class SettingsError(ValueError):
    """Raised when a settings value is out of range or malformed."""
    pass


_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def _check_percent(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SettingsError(f"{name} must be a number, got {value!r}")
    if not 0 <= value <= 100:
        raise SettingsError(f"{name} must be between 0 and 100, got {value}")


def _check_bool(name: str, value) -> None:
    if not isinstance(value, bool):
        raise SettingsError(f"{name} must be true or false, got {value!r}")


def _check_str_list(name: str, value) -> None:
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise SettingsError(f"{name} must be a list of strings")


@dataclass(frozen=True)
class RoleFilterSettings:
    enabled: bool = False
    user_roles: tuple = ()
    department_filter: tuple = ()

    def __post_init__(self):
        _check_bool("role_based_filtering.enabled", self.enabled)
        _check_str_list("role_based_filtering.user_roles", self.user_roles)
        _check_str_list("role_based_filtering.department_filter", self.department_filter)
        object.__setattr__(self, "user_roles", tuple(self.user_roles))
        object.__setattr__(self, "department_filter", tuple(self.department_filter))


@dataclass(frozen=True)
class LearningModeSettings:
    enabled: bool = False
    adapt_to_behavior: bool = False
    suggest_optimizations: bool = False

    def __post_init__(self):
        for f in fields(self):
            _check_bool(f"learning_mode.{f.name}", getattr(self, f.name))


@dataclass(frozen=True)
class AutoActionSettings:
    enabled: bool = False
    low_priority_auto_read: bool = False
    high_priority_alerts: bool = False
    emergency_notifications: bool = False

    def __post_init__(self):
        for f in fields(self):
            _check_bool(f"auto_actions.{f.name}", getattr(self, f.name))


@dataclass(frozen=True)
class QuietHoursSettings:
    enabled: bool = False
    start_time: str = "22:00"
    end_time: str = "06:00"
    emergency_override: bool = True

    def __post_init__(self):
        _check_bool("quiet_hours.enabled", self.enabled)
        _check_bool("quiet_hours.emergency_override", self.emergency_override)
        for name in ("start_time", "end_time"):
            value = getattr(self, name)
            if not isinstance(value, str) or not _TIME_PATTERN.match(value):
                raise SettingsError(f"quiet_hours.{name} must be HH:MM, got {value!r}")

    @property
    def start(self) -> tuple[int, int]:
        hour, minute = self.start_time.split(":")
        return int(hour), int(minute)

    @property
    def end(self) -> tuple[int, int]:
        hour, minute = self.end_time.split(":")
        return int(hour), int(minute)


@dataclass(frozen=True)
class NotificationMethodSettings:
    in_app: bool = True
    email: bool = False
    sms: bool = False
    push: bool = False

    def __post_init__(self):
        for f in fields(self):
            _check_bool(f"notification_methods.{f.name}", getattr(self, f.name))

    def enabled_channels(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]


_SECTIONS = {
    "role_based_filtering": RoleFilterSettings,
    "learning_mode": LearningModeSettings,
    "auto_actions": AutoActionSettings,
    "quiet_hours": QuietHoursSettings,
    "notification_methods": NotificationMethodSettings,
}


@dataclass(frozen=True)
class AISettings:
    """Complete engine configuration. Build with from_dict() or defaults()."""

    enabled: bool = True
    priority_weight: float = 75
    category_weights: dict = field(default_factory=dict)
    smart_grouping: bool = True
    # Not consumed by grouping, which buckets on category + processing day only.
    group_similar_threshold: float = 70
    role_based_filtering: RoleFilterSettings = field(default_factory=RoleFilterSettings)
    learning_mode: LearningModeSettings = field(default_factory=LearningModeSettings)
    auto_actions: AutoActionSettings = field(default_factory=AutoActionSettings)
    quiet_hours: QuietHoursSettings = field(default_factory=QuietHoursSettings)
    notification_methods: NotificationMethodSettings = field(default_factory=NotificationMethodSettings)

    def __post_init__(self):
        for key, section in _SECTIONS.items():
            value = getattr(self, key)
            if isinstance(value, dict):
                object.__setattr__(self, key, _merge_section(section(), key, value))
            elif not isinstance(value, section):
                raise SettingsError(f"{key} must be an object")

        _check_bool("enabled", self.enabled)
        _check_bool("smart_grouping", self.smart_grouping)
        _check_percent("priority_weight", self.priority_weight)
        _check_percent("group_similar_threshold", self.group_similar_threshold)
        if not isinstance(self.category_weights, dict):
            raise SettingsError("category_weights must be a mapping of category to weight")
        for category, weight in self.category_weights.items():
            _check_percent(f"category_weights.{category}", weight)
        # Private copy so callers can't mutate a live snapshot through their dict.
        object.__setattr__(self, "category_weights", dict(self.category_weights))

    # ── Reads ─────────────────────────────────────────────────────────

    def category_weight(self, category: str) -> float:
        """Weight for a category; unknown categories act as a no-op multiplier."""
        return self.category_weights.get(category, MISSING_CATEGORY_WEIGHT)

    @property
    def adapts_to_behavior(self) -> bool:
        return self.learning_mode.enabled and self.learning_mode.adapt_to_behavior

    # ── Section setters ───────────────────────────────────────────────

    def with_ai_engine(self, enabled: bool = None, priority_weight: float = None,
                       category_weights: dict = None, smart_grouping: bool = None,
                       group_similar_threshold: float = None) -> "AISettings":
        """Return a copy with AI engine values changed. category_weights merge per key."""
        changes = {}
        if enabled is not None:
            changes["enabled"] = enabled
        if priority_weight is not None:
            changes["priority_weight"] = priority_weight
        if category_weights is not None:
            changes["category_weights"] = {**self.category_weights, **category_weights}
        if smart_grouping is not None:
            changes["smart_grouping"] = smart_grouping
        if group_similar_threshold is not None:
            changes["group_similar_threshold"] = group_similar_threshold
        return replace(self, **changes)

    def with_automation(self, **auto_actions) -> "AISettings":
        """Return a copy with auto action flags changed."""
        return replace(self, auto_actions=replace(self.auto_actions, **auto_actions))

    def with_roles(self, enabled: bool = None, user_roles: list = None,
                   department_filter: list = None) -> "AISettings":
        """Return a copy with role-based filtering changed."""
        changes = {}
        if enabled is not None:
            changes["enabled"] = enabled
        if user_roles is not None:
            changes["user_roles"] = tuple(user_roles)
        if department_filter is not None:
            changes["department_filter"] = tuple(department_filter)
        return replace(self, role_based_filtering=replace(self.role_based_filtering, **changes))

    def with_advanced(self, quiet_hours: dict = None, notification_methods: dict = None,
                      learning_mode: dict = None) -> "AISettings":
        """Return a copy with quiet hours, notification methods or learning mode changed."""
        changes = {}
        if quiet_hours is not None:
            changes["quiet_hours"] = replace(self.quiet_hours, **quiet_hours)
        if notification_methods is not None:
            changes["notification_methods"] = replace(self.notification_methods, **notification_methods)
        if learning_mode is not None:
            changes["learning_mode"] = replace(self.learning_mode, **learning_mode)
        return replace(self, **changes)

    # ── Dict conversion ───────────────────────────────────────────────

    def merged(self, partial: dict) -> "AISettings":
        """
        Shallow-merge a partial settings dict.
        Section dicts merge into the current section; unknown keys raise SettingsError.
        """
        if not isinstance(partial, dict):
            raise SettingsError("Settings update must be a JSON object (dict)")

        changes = {}
        known = {f.name for f in fields(self)}
        for key, value in partial.items():
            if key not in known:
                raise SettingsError(f"Unknown setting: {key}")
            if key in _SECTIONS:
                if not isinstance(value, dict):
                    raise SettingsError(f"{key} must be an object")
                changes[key] = _merge_section(getattr(self, key), key, value)
            elif key == "category_weights":
                if not isinstance(value, dict):
                    raise SettingsError("category_weights must be an object")
                changes[key] = {**self.category_weights, **value}
            else:
                changes[key] = value
        return replace(self, **changes)

    def to_dict(self) -> dict:
        data = asdict(self)
        rbf = data["role_based_filtering"]
        rbf["user_roles"] = list(rbf["user_roles"])
        rbf["department_filter"] = list(rbf["department_filter"])
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AISettings":
        """Build settings from a full or partial dict, filling gaps from an all-off base."""
        return cls().merged(data)

    @classmethod
    def defaults(cls) -> "AISettings":
        return cls.from_dict(copy.deepcopy(DEFAULT_SETTINGS))


def _merge_section(current, key: str, values: dict):
    allowed = {f.name for f in fields(current)}
    unknown = set(values) - allowed
    if unknown:
        raise SettingsError(f"Unknown {key} setting(s): {', '.join(sorted(unknown))}")
    if key == "role_based_filtering":
        values = {k: tuple(v) if isinstance(v, list) else v for k, v in values.items()}
    return replace(current, **values)
