"""
Triage Engine — the central orchestrator that turns raw notifications into
classified, prioritized and grouped notifications.

Pipeline per notification:
1. Validate → 2. Extract signals → 3. Classify → 4. Synthesize priority
→ 5. Suggest action/roles → 6. Plan delivery → 7. Log
Batches then pass through grouping and the priority sort.
"""

import copy
import threading
from datetime import datetime

from batch_grouper import group_and_sort, group_id_for, is_groupable
from classifier import categorize, type_of
from config import HIGH_PRIORITY, EVERYONE_ROLE, NEUTRAL_RESULT
from delivery_scheduler import plan_delivery
from input_validator import validate_notification
from logger import TriageLogger
from priority_synthesizer import PrioritySynthesizer
from settings import AISettings
from signal_extractor import SignalExtractor, age_minutes, notification_text
from tables import ReferenceTables, default_tables


class EngineNotInitializedError(RuntimeError):
    """Raised when notifications are processed before settings are configured."""
    pass


class TriageEngine:
    """Classifies and prioritizes notifications against the current settings."""

    def __init__(self, settings: AISettings | dict = None, tables: ReferenceTables = None,
                 logger: TriageLogger = None):
        self.tables = tables or default_tables()
        self.extractor = SignalExtractor(self.tables)
        self.synthesizer = PrioritySynthesizer(self.tables)
        self.logger = logger or TriageLogger()

        self._settings: AISettings | None = None
        self._settings_lock = threading.Lock()
        self._cache: list[dict] = []
        self.is_processing = False

        if settings is not None:
            self.configure(settings)

    # ── Settings ──────────────────────────────────────────────────────

    def configure(self, settings: AISettings | dict):
        """Install a full settings object (or dict), initializing the engine."""
        if isinstance(settings, dict):
            settings = AISettings.from_dict(settings)
        with self._settings_lock:
            self._settings = settings

    @property
    def initialized(self) -> bool:
        return self._settings is not None

    @property
    def settings(self) -> AISettings:
        """Current settings snapshot."""
        return self._require_settings()

    def update_settings(self, partial: dict):
        """Shallow-merge a partial settings dict into the held settings."""
        self._swap_settings(lambda s: s.merged(partial), partial)

    def update_ai_engine(self, **values):
        self._swap_settings(lambda s: s.with_ai_engine(**values), values)

    def update_automation(self, **values):
        self._swap_settings(lambda s: s.with_automation(**values), {"auto_actions": values})

    def update_roles(self, **values):
        self._swap_settings(lambda s: s.with_roles(**values), {"role_based_filtering": values})

    def update_advanced(self, **values):
        self._swap_settings(lambda s: s.with_advanced(**values), values)

    def _swap_settings(self, change, description: dict):
        with self._settings_lock:
            current = self._settings if self._settings is not None else AISettings()
            self._settings = change(current)
        self.logger.log_settings(description)

    def _require_settings(self) -> AISettings:
        settings = self._settings
        if settings is None:
            raise EngineNotInitializedError(
                "TriageEngine has no settings; call configure() before processing"
            )
        return settings

    # ── Processing ────────────────────────────────────────────────────

    def process_one(self, raw: dict, now: datetime = None) -> dict:
        """
        Triage a single notification.
        Raises ValidationError for malformed input.
        """
        settings = self._require_settings()
        now = now or datetime.now().astimezone()

        notification = validate_notification(raw)
        processed = self._triage(notification, settings, now)
        self.logger.log_triage(processed)
        return self.logger.get_output_record(processed)

    def process_batch(self, raws: list[dict], now: datetime = None) -> list[dict]:
        """
        Triage a batch, group it and sort it by priority.
        Notifications that fail are logged and left out of the result.
        """
        settings = self._require_settings()
        now = now or datetime.now().astimezone()

        self.is_processing = True
        try:
            processed = []
            for raw in raws:
                try:
                    notification = validate_notification(raw)
                    item = self._triage(notification, settings, now)
                except Exception as e:
                    self._skip(raw, e)
                    continue
                self.logger.log_triage(item)
                processed.append(self.logger.get_output_record(item))

            results = group_and_sort(processed, settings)
            self._cache = copy.deepcopy(results)
            return results
        finally:
            self.is_processing = False

    def _skip(self, raw, error: Exception):
        self.logger.log_error(raw, error)
        notification_id = raw.get("id") if isinstance(raw, dict) else None
        print(f"[TriageEngine] Warning: skipped notification {notification_id or '?'}: {error}")

    def _triage(self, notification: dict, settings: AISettings, now: datetime) -> dict:
        age = age_minutes(notification, now)
        result = dict(notification)

        if not settings.enabled:
            result.update(NEUTRAL_RESULT)
            result.update({
                "suggested_role": [],
                "urgency_score": 0,
                "medical_relevance_score": 0,
                "time_relevance_score": 0,
                "ai_summary": None,
                "is_grouped": False,
            })
            result["delivery"] = plan_delivery(result, settings, now, self.tables, age)
            return result

        # ── Signals ───────────────────────────────────────────────────
        signals = self.extractor.score(notification, now)
        urgency = signals["urgency"]
        medical = signals["medical_relevance"]

        # ── Classification ────────────────────────────────────────────
        category = categorize(notification, urgency, medical)
        notification_type = type_of(urgency, medical, category)

        # ── Priority / confidence / insight ───────────────────────────
        synthesis = self.synthesizer.synthesize(signals, category, notification_type, settings)

        # ── Action / roles / grouping ─────────────────────────────────
        text = notification_text(notification)
        action_type = self.synthesizer.suggest_action(text, category, notification_type)
        groupable = is_groupable(category, settings)

        result.update({
            "type": notification_type,
            "category": category,
            "ai_priority": synthesis["priority"],
            "ai_confidence": synthesis["confidence"],
            "ai_insight": synthesis["insight"],
            "ai_summary": self.synthesizer.summarize(notification["description"]),
            "urgency_score": urgency,
            "medical_relevance_score": medical,
            "time_relevance_score": signals["time_relevance"],
            "is_groupable": groupable,
            "group_id": group_id_for(category, now.date()) if groupable else None,
            "is_grouped": False,
            "suggested_role": self.synthesizer.suggest_roles(category, settings),
            "action_suggested": action_type is not None,
            "action_type": action_type,
        })
        result["delivery"] = plan_delivery(result, settings, now, self.tables, age)
        return result

    # ── Learning hook ─────────────────────────────────────────────────

    def record_user_action(self, notification_id: str, action: str,
                           response_time_ms: float | None = None):
        """Observe a user action. Only logged in learning mode; scoring is unaffected."""
        settings = self._require_settings()
        if not settings.learning_mode.enabled:
            return
        self.logger.log_user_action(notification_id, action, response_time_ms)

    # ── Cached batch ──────────────────────────────────────────────────

    def get_notifications(self) -> list[dict]:
        """Results of the most recent batch."""
        return copy.deepcopy(self._cache)

    def clear_cache(self):
        self._cache = []

    # Queries default to the cached batch; pass a list to chain them.

    def _source(self, notifications: list | None) -> list[dict]:
        return self.get_notifications() if notifications is None else notifications

    def by_type(self, notification_type: str, notifications: list = None) -> list[dict]:
        source = self._source(notifications)
        return [n for n in source if n.get("type") == notification_type]

    def by_category(self, category: str, notifications: list = None) -> list[dict]:
        source = self._source(notifications)
        return [n for n in source if n.get("category") == category]

    def high_priority(self, min_priority: int = HIGH_PRIORITY, notifications: list = None) -> list[dict]:
        source = self._source(notifications)
        return [n for n in source if n.get("ai_priority", 0) >= min_priority]

    def for_role(self, role: str, notifications: list = None) -> list[dict]:
        """Notifications suggested for a role, including those meant for everyone."""
        source = self._source(notifications)
        return [
            n for n in source
            if role in n.get("suggested_role", []) or EVERYONE_ROLE in n.get("suggested_role", [])
        ]

    def reset(self):
        """Reset cache and logs; settings are kept."""
        self.clear_cache()
        self.logger.clear()
