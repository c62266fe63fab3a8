"""Tests for typed AI settings."""

import dataclasses

import pytest

from settings import AISettings, QuietHoursSettings, SettingsError


class TestDefaults:
    """Test the shipped default settings."""

    def test_default_values(self, default_settings):
        assert default_settings.enabled is True
        assert default_settings.priority_weight == 75
        assert default_settings.category_weights == {
            "emergency": 100, "medical": 85, "appointment": 60,
            "administrative": 40, "reminder": 30,
        }
        assert default_settings.smart_grouping is True
        assert default_settings.group_similar_threshold == 70
        assert default_settings.role_based_filtering.user_roles == ("doctor", "nurse")
        assert default_settings.adapts_to_behavior is True

    def test_missing_category_weight_reads_as_neutral(self):
        assert AISettings(category_weights={"medical": 40}).category_weight("reminder") == 100

    def test_frozen(self, default_settings):
        with pytest.raises(dataclasses.FrozenInstanceError):
            default_settings.enabled = False


class TestValidation:
    """Test range and type checks."""

    @pytest.mark.parametrize("changes", [
        {"priority_weight": 101},
        {"priority_weight": -1},
        {"group_similar_threshold": "high"},
        {"category_weights": {"medical": 120}},
        {"enabled": "yes"},
        {"quiet_hours": {"start_time": "25:00"}},
        {"role_based_filtering": {"user_roles": "doctor"}},
        {"learning_mode": {"enabled": 1}},
        {"unknown": True},
        {"auto_actions": {"turbo": True}},
    ])
    def test_rejected(self, default_settings, changes):
        with pytest.raises(SettingsError):
            default_settings.merged(changes)

    def test_settings_error_is_value_error(self):
        assert issubclass(SettingsError, ValueError)


class TestMerge:
    """Test partial updates."""

    def test_merge_returns_new_object(self, default_settings):
        updated = default_settings.merged({"priority_weight": 20})
        assert updated.priority_weight == 20
        assert default_settings.priority_weight == 75

    def test_sections_merge_field_by_field(self, default_settings):
        updated = default_settings.merged({"quiet_hours": {"start_time": "23:30"}})
        assert updated.quiet_hours.start_time == "23:30"
        assert updated.quiet_hours.end_time == "06:00"
        assert updated.quiet_hours.enabled is True

    def test_category_weights_merge_per_key(self, default_settings):
        updated = default_settings.merged({"category_weights": {"reminder": 0}})
        assert updated.category_weights["reminder"] == 0
        assert updated.category_weights["medical"] == 85

    def test_round_trip_through_dict(self, default_settings):
        assert AISettings.from_dict(default_settings.to_dict()) == default_settings
        assert default_settings.to_dict()["role_based_filtering"]["user_roles"] == ["doctor", "nurse"]


class TestSectionSetters:
    """Test the named per-section setters."""

    def test_ai_engine(self, default_settings):
        updated = default_settings.with_ai_engine(priority_weight=10, category_weights={"medical": 5})
        assert updated.priority_weight == 10
        assert updated.category_weights["medical"] == 5
        assert updated.category_weights["emergency"] == 100

    def test_automation(self, default_settings):
        updated = default_settings.with_automation(enabled=False)
        assert updated.auto_actions.enabled is False
        assert updated.auto_actions.high_priority_alerts is True

    def test_roles(self, default_settings):
        updated = default_settings.with_roles(user_roles=["admin"])
        assert updated.role_based_filtering.user_roles == ("admin",)
        assert updated.role_based_filtering.enabled is True

    def test_advanced(self, default_settings):
        updated = default_settings.with_advanced(
            quiet_hours={"enabled": False},
            notification_methods={"sms": True},
            learning_mode={"adapt_to_behavior": False},
        )
        assert updated.quiet_hours.enabled is False
        assert updated.notification_methods.enabled_channels() == ["in_app", "email", "sms", "push"]
        assert updated.adapts_to_behavior is False

    def test_setter_validates(self, default_settings):
        with pytest.raises(SettingsError):
            default_settings.with_ai_engine(priority_weight=500)


class TestQuietHours:
    """Test quiet hour parsing."""

    def test_start_and_end(self):
        qh = QuietHoursSettings(enabled=True, start_time="21:15", end_time="07:45")
        assert qh.start == (21, 15)
        assert qh.end == (7, 45)
