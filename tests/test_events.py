"""Tests for the local notification surface."""

from __future__ import annotations

import logging

from app_preferences.events import SETTINGS_CHANGED, EventTarget, SettingsEvent


def test_dispatch_reaches_listeners_in_order():
    target = EventTarget()
    seen: list[str] = []
    target.add_listener("demo", lambda event: seen.append("first"))
    target.add_listener("demo", lambda event: seen.append("second"))

    assert target.dispatch(SettingsEvent("demo")) is True
    assert seen == ["first", "second"]


def test_stop_propagation_skips_remaining_listeners():
    target = EventTarget()
    seen: list[str] = []

    def claim(event):
        event.prevent_default()
        event.stop_propagation()
        seen.append("claim")

    target.add_listener("demo", claim)
    target.add_listener("demo", lambda event: seen.append("late"))

    result = target.dispatch(SettingsEvent("demo", cancelable=True))

    assert result is False
    assert seen == ["claim"]


def test_prevent_default_requires_cancelable():
    event = SettingsEvent("demo")
    event.prevent_default()
    assert event.default_prevented is False


def test_failing_listener_does_not_break_dispatch(caplog):
    target = EventTarget()
    seen: list[str] = []

    def broken(event):
        raise RuntimeError("boom")

    target.add_listener("demo", broken)
    target.add_listener("demo", lambda event: seen.append("ok"))

    with caplog.at_level(logging.ERROR, logger="app_preferences.events"):
        target.dispatch(SettingsEvent("demo"))

    assert seen == ["ok"]
    assert "Listener for demo failed" in caplog.text


def test_remove_listener_and_emit():
    target = EventTarget()
    received: list[dict] = []

    def listener(event):
        received.append(event.detail)

    target.add_listener(SETTINGS_CHANGED, listener)
    target.add_listener(SETTINGS_CHANGED, listener)
    assert target.listener_count(SETTINGS_CHANGED) == 1

    event = target.emit(SETTINGS_CHANGED, name="theme", value="dark")
    assert event.cancelable is False
    assert received == [{"name": "theme", "value": "dark"}]

    target.remove_listener(SETTINGS_CHANGED, listener)
    target.remove_listener(SETTINGS_CHANGED, listener)
    target.emit(SETTINGS_CHANGED, name="theme", value="light")
    assert len(received) == 1
    assert target.listener_count(SETTINGS_CHANGED) == 0
