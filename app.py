"""
Flask Web Application — JSON API embedding the Notification Triage Engine.
"""

import os
import sys
from datetime import datetime

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from flask import Flask, request, jsonify

from input_validator import ValidationError
from settings import AISettings, SettingsError
from tables import default_tables, load_tables
from triage_engine import TriageEngine

app = Flask(__name__)

# Global engine instance
TABLES_PATH = os.environ.get("TRIAGE_TABLES_PATH")

engine = TriageEngine(
    settings=AISettings.defaults(),
    tables=load_tables(TABLES_PATH) if TABLES_PATH else default_tables(),
)


def _request_now(data: dict):
    """
    Optional 'now' override in the request body (ISO-8601).
    The caller's UTC offset is kept; a naive value is read as server local time.
    """
    value = data.get("now")
    if not value:
        return None
    try:
        now = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"Invalid 'now' timestamp: {value}")
    return now if now.tzinfo is not None else now.astimezone()


@app.errorhandler(ValidationError)
def handle_validation_error(e):
    return jsonify({"error": f"Invalid notification: {e}"}), 400


@app.errorhandler(SettingsError)
def handle_settings_error(e):
    return jsonify({"error": f"Invalid settings: {e}"}), 400


@app.route("/api/process", methods=["POST"])
def process_notifications():
    """Triage a batch of notifications."""
    data = request.get_json(silent=True) or {}
    notifications = data.get("notifications", [])

    if not notifications or not isinstance(notifications, list):
        return jsonify({"error": "No notifications provided"}), 400

    errors_before = len(engine.logger.entries("error"))
    results = engine.process_batch(notifications, now=_request_now(data))
    skipped = engine.logger.entries("error")[errors_before:]

    return jsonify({
        "results": results,
        "skipped": skipped,
        "summary": {
            "total": len(results),
            "grouped": sum(1 for r in results if r.get("is_grouped")),
            "high_priority": sum(1 for r in results if r["ai_priority"] >= 4),
            "skipped": len(skipped),
        }
    })


@app.route("/api/process-one", methods=["POST"])
def process_one():
    """Triage a single notification."""
    data = request.get_json(silent=True) or {}
    notification = data.get("notification")
    if not notification:
        return jsonify({"error": "No notification provided"}), 400

    result = engine.process_one(notification, now=_request_now(data))
    return jsonify({"result": result})


@app.route("/api/settings", methods=["GET"])
def get_settings():
    """Get current settings."""
    return jsonify(engine.settings.to_dict())


@app.route("/api/settings", methods=["POST"])
def update_settings():
    """Merge a partial settings update at runtime."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Settings update must be a JSON object"}), 400

    engine.update_settings(data)
    return jsonify({"status": "ok", "settings": engine.settings.to_dict()})


@app.route("/api/actions", methods=["POST"])
def record_action():
    """Record a user action on a notification."""
    data = request.get_json(silent=True) or {}
    notification_id = data.get("notification_id")
    action = data.get("action")
    if not notification_id or not action:
        return jsonify({"error": "notification_id and action are required"}), 400

    engine.record_user_action(notification_id, action, data.get("response_time_ms"))
    return jsonify({
        "status": "ok",
        "recorded": engine.settings.learning_mode.enabled,
    })


@app.route("/api/notifications", methods=["GET"])
def get_notifications():
    """Return the most recent batch, optionally filtered."""
    results = engine.get_notifications()

    category = request.args.get("category")
    notification_type = request.args.get("type")
    role = request.args.get("role")
    min_priority = request.args.get("min_priority", type=int)

    if category:
        results = engine.by_category(category, results)
    if notification_type:
        results = engine.by_type(notification_type, results)
    if role:
        results = engine.for_role(role, results)
    if min_priority is not None:
        results = engine.high_priority(min_priority, results)

    return jsonify({"results": results, "processing": engine.is_processing})


@app.route("/api/notifications", methods=["DELETE"])
def clear_notifications():
    engine.clear_cache()
    return jsonify({"status": "ok"})


@app.route("/api/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "engine": "Notification Triage Engine v1.0"})


if __name__ == "__main__":
    print("\n🚀 Notification Triage Engine — API")
    print("   http://localhost:5000\n")
    app.run(debug=True, port=5000, host="0.0.0.0")
