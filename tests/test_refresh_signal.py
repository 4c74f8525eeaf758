"""Tests for the single-listener refresh signal."""

from __future__ import annotations

import logging

from compliance_feed.infrastructure.notifications import RefreshSignal

from tests.conftest import CountingListener


def test_notify_without_listener_is_a_no_op():
    RefreshSignal().notify()


def test_registering_replaces_the_previous_listener():
    signal = RefreshSignal()
    first, second = CountingListener(), CountingListener()

    signal.register(first)
    signal.register(second)
    signal.notify()

    assert first.calls == 0
    assert second.calls == 1
    assert signal.listener is second


def test_unregister_only_removes_the_current_listener():
    signal = RefreshSignal()
    stale, current = CountingListener(), CountingListener()
    signal.register(stale)
    signal.register(current)

    assert signal.unregister(stale) is False
    assert signal.has_listener
    assert signal.unregister(current) is True
    assert not signal.has_listener


def test_failing_listener_is_logged(caplog):
    signal = RefreshSignal()

    def explode() -> None:
        raise RuntimeError("boom")

    signal.register(explode)
    with caplog.at_level(logging.ERROR):
        signal.notify()

    assert "Refresh listener failed" in caplog.text
