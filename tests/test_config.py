"""Tests for configuration loading and timezone helpers."""

from __future__ import annotations

from datetime import timedelta

import pytest

from compliance_feed.config import get_settings, reset_settings_cache
from compliance_feed.utils import get_app_timezone, now_in_app_timezone, parse_iso_datetime


@pytest.fixture
def fresh_settings():
    reset_settings_cache()
    get_app_timezone.cache_clear()
    yield
    reset_settings_cache()
    get_app_timezone.cache_clear()


def test_settings_read_the_environment(monkeypatch, fresh_settings):
    monkeypatch.setenv("STATUS_POLL_INTERVAL_SECONDS", "2.5")
    monkeypatch.setenv("NOTIFICATION_LIMIT", "10")

    settings = get_settings()

    assert settings.status_poll_interval_seconds == 2.5
    assert settings.notification_limit == 10


@pytest.mark.parametrize(
    ("name", "offset"),
    [
        ("UTC+05:30", timedelta(hours=5, minutes=30)),
        ("GMT-3", timedelta(hours=-3)),
        ("Not/AZone", timedelta(0)),
    ],
)
def test_app_timezone_accepts_fixed_offsets(monkeypatch, fresh_settings, name, offset):
    monkeypatch.setenv("APP_TIMEZONE", name)

    assert now_in_app_timezone().utcoffset() == offset


@pytest.mark.parametrize("value", [None, "", "yesterday", 42])
def test_parse_iso_datetime_rejects_garbage(value):
    assert parse_iso_datetime(value) is None


def test_parse_iso_datetime_accepts_zulu_suffix():
    parsed = parse_iso_datetime("2024-01-01T09:00:00Z")

    assert parsed is not None
    assert parsed.utcoffset() is not None
