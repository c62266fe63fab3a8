"""
Delivery Scheduler — personalized delivery timing, quiet hours and auto actions.
"""

from datetime import datetime, timedelta

from config import AUTO_READ_AGE_MINUTES, AUTO_READ_MAX_PRIORITY, HIGH_PRIORITY
from settings import AISettings
from tables import ReferenceTables


def plan_delivery(processed: dict, settings: AISettings, now: datetime,
                  tables: ReferenceTables, age: float) -> dict:
    """
    Compute the delivery plan for a processed notification.
    Returns {
        "quiet_hours": bool,
        "optimal_time": ISO-8601 str,
        "alert": bool,
        "auto_read": bool,
        "channels": list[str]
    }
    """
    channels = settings.notification_methods.enabled_channels()
    if not settings.enabled:
        return {
            "quiet_hours": False,
            "optimal_time": now.isoformat(),
            "alert": False,
            "auto_read": False,
            "channels": channels,
        }

    qh = settings.quiet_hours
    quiet = qh.enabled and is_quiet_time(now, qh.start, qh.end)
    overridden = processed["category"] == "emergency" and qh.emergency_override
    held = quiet and not overridden

    if held:
        optimal = next_quiet_end(now, qh.end)
    elif now.hour in tables.preferred_hours:
        optimal = now
    else:
        optimal = next_preferred_hour(now, tables.preferred_hours)

    auto = settings.auto_actions
    alert = False
    if auto.enabled and not held:
        alert = ((auto.high_priority_alerts and processed["ai_priority"] >= HIGH_PRIORITY)
                 or (auto.emergency_notifications and processed["category"] == "emergency"))

    auto_read = (auto.enabled and auto.low_priority_auto_read
                 and processed["ai_priority"] <= AUTO_READ_MAX_PRIORITY
                 and age > AUTO_READ_AGE_MINUTES
                 and processed["type"] != "critical")

    return {
        "quiet_hours": quiet,
        "optimal_time": optimal.isoformat(),
        "alert": alert,
        "auto_read": auto_read,
        "channels": channels,
    }


def is_quiet_time(now: datetime, start: tuple[int, int], end: tuple[int, int]) -> bool:
    """Check if the time of day falls within the quiet window (may wrap midnight)."""
    minute = now.hour * 60 + now.minute
    start_min = start[0] * 60 + start[1]
    end_min = end[0] * 60 + end[1]
    if start_min > end_min:
        return minute >= start_min or minute < end_min
    return start_min <= minute < end_min


def next_quiet_end(now: datetime, end: tuple[int, int]) -> datetime:
    """Return the next occurrence of the quiet window's end time."""
    resume = now.replace(hour=end[0], minute=end[1], second=0, microsecond=0)
    if resume <= now:
        resume += timedelta(days=1)
    return resume


def next_preferred_hour(now: datetime, preferred_hours) -> datetime:
    """Return the start of the next preferred hour, wrapping to the next day."""
    hours = sorted(preferred_hours)
    if not hours:
        return now
    later = [h for h in hours if h > now.hour]
    base = now.replace(minute=0, second=0, microsecond=0)
    if later:
        return base.replace(hour=later[0])
    return (base + timedelta(days=1)).replace(hour=hours[0])
