"""
Runner — CLI script to triage the sample notifications with grouping on,
grouping off and the engine disabled.

Usage:
    python runner.py [--tables PATH] [--input PATH]
"""

import json
import sys
import os
from datetime import datetime, timedelta

# Ensure the project directory is in the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from settings import AISettings
from tables import default_tables, load_tables
from triage_engine import TriageEngine


PRIORITY_BADGES = {
    5: "🔴 5",
    4: "🟠 4",
    3: "🟡 3",
    2: "🟢 2",
    1: "⚪ 1",
}


def load_json(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def materialize(samples: list[dict], now: datetime) -> list[dict]:
    """Turn 'minutes_ago' sample entries into notifications with real timestamps."""
    notifications = []
    for sample in samples:
        notification = {k: v for k, v in sample.items() if k != "minutes_ago"}
        if "minutes_ago" in sample:
            notification["timestamp"] = (now - timedelta(minutes=sample["minutes_ago"])).isoformat()
        notifications.append(notification)
    return notifications


def run_scenario(engine: TriageEngine, notifications: list, label: str, now: datetime):
    """Run a batch of notifications and display results."""
    print(f"\n{'━' * 80}")
    print(f"  ▶  {label}")
    print(f"{'━' * 80}")

    results = engine.process_batch(notifications, now=now)

    for i, result in enumerate(results, 1):
        badge = PRIORITY_BADGES.get(result["ai_priority"], str(result["ai_priority"]))
        title = result.get("title", "")[:40]
        print(f"  {i:>2}. [{badge}] {result['category']:<15} {result['type']:<9} │ {title}")

        if result.get("is_grouped"):
            print(f"      ↳ grouped: {result['group_count']} items ({result['group_id']})")
        if result.get("ai_insight"):
            print(f"      ↳ {result['ai_insight']}")

    engine.logger.print_table()
    return results


def main():
    base_dir = os.path.dirname(os.path.abspath(__file__))
    input_path = os.path.join(base_dir, "sample_notifications.json")
    output_path = os.path.join(base_dir, "output.json")

    tables = default_tables()
    if "--tables" in sys.argv:
        tables = load_tables(sys.argv[sys.argv.index("--tables") + 1])
    if "--input" in sys.argv:
        input_path = sys.argv[sys.argv.index("--input") + 1]

    now = datetime.now().astimezone()
    samples = load_json(input_path).get("notifications", [])
    notifications = materialize(samples, now)

    print("\n" + "=" * 80)
    print("  NOTIFICATION TRIAGE ENGINE")
    print("=" * 80)

    # ── Scenario 1: Default settings, grouping on ─────────────────────
    engine = TriageEngine(settings=AISettings.defaults(), tables=tables)
    grouped = run_scenario(engine, notifications, "SCENARIO 1: Default settings (smart grouping)", now)

    # ── Scenario 2: Grouping off ──────────────────────────────────────
    engine2 = TriageEngine(settings=AISettings.defaults(), tables=tables)
    engine2.update_ai_engine(smart_grouping=False)
    ungrouped = run_scenario(engine2, notifications, "SCENARIO 2: Smart grouping disabled", now)

    # ── Scenario 3: Engine disabled ───────────────────────────────────
    engine3 = TriageEngine(settings=AISettings.defaults(), tables=tables)
    engine3.update_settings({"enabled": False})
    neutral = run_scenario(engine3, notifications, "SCENARIO 3: AI engine disabled", now)

    all_output = {
        "scenario_1_grouped": grouped,
        "scenario_2_ungrouped": ungrouped,
        "scenario_3_disabled": neutral,
    }

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(all_output, f, indent=2, default=str)

    print(f"\n✅ All results exported to: {output_path}")
    print(f"   Total results: {len(grouped) + len(ungrouped) + len(neutral)}")


if __name__ == "__main__":
    main()
