"""Shared fixtures for the triage engine tests."""

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from input_validator import validate_notification
from settings import AISettings
from tables import default_tables
from triage_engine import TriageEngine


# 10:00 is a preferred hour and outside the default quiet window.
NOW = datetime(2026, 4, 14, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def tables():
    return default_tables()


@pytest.fixture
def default_settings():
    return AISettings.defaults()


@pytest.fixture
def plain_settings():
    """Full AI weight, neutral category weights, no learning or role filtering."""
    return AISettings(priority_weight=100)


@pytest.fixture
def engine(default_settings):
    return TriageEngine(settings=default_settings)


@pytest.fixture
def make_raw():
    """Build a raw notification dict generated `minutes_ago` before NOW."""
    counter = itertools.count(1)

    def _make(title="", description="", minutes_ago=180, **fields):
        raw = {
            "id": fields.pop("id", f"n-{next(counter):03d}"),
            "title": title,
            "description": description,
            "sender": fields.pop("sender", "Test Sender"),
            "sender_role": fields.pop("sender_role", ""),
            "timestamp": (NOW - timedelta(minutes=minutes_ago)).isoformat(),
        }
        raw.update(fields)
        return raw

    return _make


@pytest.fixture
def make_notification(make_raw):
    """Build a validated notification."""

    def _make(*args, **kwargs):
        return validate_notification(make_raw(*args, **kwargs))

    return _make
