"""
Logger — structured triage logging and console output.
"""

import json
from datetime import datetime, timezone


INTERNAL_FIELDS = ("parsed_timestamp",)


class TriageLogger:
    """Accumulates structured triage, user action and error logs."""

    def __init__(self):
        self.logs: list[dict] = []

    def _append(self, kind: str, **fields) -> dict:
        entry = {"kind": kind, "logged_at": datetime.now(timezone.utc).isoformat()}
        entry.update(fields)
        self.logs.append(entry)
        return entry

    def log_triage(self, processed: dict) -> dict:
        """Record the outcome of triaging one notification."""
        return self._append(
            "triage",
            notification_id=processed.get("id"),
            category=processed.get("category"),
            type=processed.get("type"),
            ai_priority=processed.get("ai_priority"),
            ai_confidence=processed.get("ai_confidence"),
            urgency_score=processed.get("urgency_score"),
            medical_relevance_score=processed.get("medical_relevance_score"),
            time_relevance_score=processed.get("time_relevance_score"),
            group_id=processed.get("group_id"),
            action_type=processed.get("action_type"),
            insight=processed.get("ai_insight", ""),
        )

    def log_user_action(self, notification_id: str, action: str,
                        response_time_ms: float | None = None) -> dict:
        return self._append(
            "user_action",
            notification_id=notification_id,
            action=action,
            response_time_ms=response_time_ms,
        )

    def log_error(self, notification: object, error: Exception) -> dict:
        notification_id = notification.get("id") if isinstance(notification, dict) else None
        return self._append(
            "error",
            notification_id=notification_id,
            error_type=type(error).__name__,
            reason=str(error),
        )

    def log_settings(self, changes: dict) -> dict:
        return self._append("settings", changes=changes)

    def entries(self, kind: str) -> list[dict]:
        return [e for e in self.logs if e["kind"] == kind]

    @staticmethod
    def get_output_record(processed: dict) -> dict:
        """Strip internal fields from a processed notification."""
        return {k: v for k, v in processed.items() if k not in INTERNAL_FIELDS}

    def print_table(self):
        """Print a formatted table of all triage decisions."""
        triaged = self.entries("triage")
        if not triaged:
            print("No notifications triaged.")
            return

        # Header
        print("\n" + "=" * 110)
        print(f"{'#':<4} {'ID':<10} {'Category':<15} {'Type':<9} {'Pri':<4} "
              f"{'Conf':<5} {'U':>5} {'M':>5} {'T':>5}  {'Action':<12} {'Group':<25}")
        print("-" * 110)

        for i, log in enumerate(triaged, 1):
            print(
                f"{i:<4} {str(log['notification_id'])[:10]:<10} {log['category']:<15} "
                f"{log['type']:<9} {log['ai_priority']:<4} {log['ai_confidence']:<5} "
                f"{log['urgency_score']:>5} {log['medical_relevance_score']:>5} "
                f"{log['time_relevance_score']:>5}  {log.get('action_type') or '-':<12} "
                f"{log.get('group_id') or '-':<25}"
            )

        errors = self.entries("error")
        if errors:
            print("-" * 110)
            for log in errors:
                print(f"  ✖ {log['notification_id'] or '?'}: {log['error_type']} — {log['reason']}")

        print("=" * 110 + "\n")

    def export_json(self, filepath: str = "triage_log.json"):
        """Export all logs to a JSON file."""
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.logs, f, indent=2, default=str)
        print(f"[Logger] Exported {len(self.logs)} log entries to {filepath}")

    def clear(self):
        """Clear all logs."""
        self.logs.clear()
