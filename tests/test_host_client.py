"""Tests for the preference host and the UI-side client."""

from __future__ import annotations

import json
import logging

import pytest

from app_preferences.channel import PREFERENCE_UPDATED, UPDATE_PREFERENCE, LoopbackHub, RemoteError
from app_preferences.client import PreferencesClient
from app_preferences.events import SETTINGS_CHANGED, SETTINGS_READ, EventTarget, SettingsEvent
from app_preferences.host import PreferencesHost


def _setup(tmp_path, **host_options):
    hub = LoopbackHub()
    host = PreferencesHost(file=str(tmp_path / "settings.json"), **host_options)
    host.observe(hub)
    return hub, host


def _changes(target: EventTarget) -> list[tuple]:
    changes: list[tuple] = []

    def listener(event: SettingsEvent) -> None:
        if not event.cancelable:
            changes.append((event.detail["name"], event.detail["value"]))

    target.add_listener(SETTINGS_CHANGED, listener)
    return changes


@pytest.mark.asyncio
async def test_update_then_read(tmp_path):
    hub, host = _setup(tmp_path)
    client = PreferencesClient(hub.connect())

    await client.store("k", "v")
    assert (await client.load())["k"] == "v"

    await client.store("k", "v2")
    assert (await client.load())["k"] == "v2"
    assert json.loads(host.settings_file.read_text(encoding="utf-8")) == {"k": "v2"}


@pytest.mark.asyncio
async def test_read_returns_defaults(tmp_path):
    hub, _ = _setup(tmp_path, defaults={"theme": "light"})

    assert await PreferencesClient(hub.connect()).load() == {"theme": "light"}


@pytest.mark.asyncio
async def test_change_is_broadcast_to_every_connection(tmp_path):
    hub, host = _setup(tmp_path)
    origin = PreferencesClient(hub.connect())
    other = PreferencesClient(hub.connect())
    origin.observe()
    other.observe()
    origin_changes = _changes(origin.target)
    other_changes = _changes(other.target)
    host_changes = _changes(host.events)

    await origin.store("theme", {"name": "dark", "contrast": 2})

    expected = [("theme", {"name": "dark", "contrast": 2})]
    assert origin_changes == expected
    assert other_changes == expected
    assert host_changes == expected


@pytest.mark.asyncio
async def test_client_rejects_empty_name(tmp_path):
    hub, host = _setup(tmp_path)
    client = PreferencesClient(hub.connect())

    with pytest.raises(ValueError):
        await client.store("", 1)
    assert not host.settings_file.exists()


@pytest.mark.asyncio
async def test_host_rejects_empty_name(tmp_path, caplog):
    hub, host = _setup(tmp_path)
    connection = hub.connect()
    received: list[tuple] = []
    connection.on(PREFERENCE_UPDATED, lambda *args: received.append(args))

    with caplog.at_level(logging.ERROR, logger="app_preferences.host"):
        with pytest.raises(RemoteError) as excinfo:
            await connection.invoke(UPDATE_PREFERENCE, "", 1)

    assert excinfo.value.error_type == "ValueError"
    assert not host.settings_file.exists()
    assert received == []
    assert "Unable to update preference" in caplog.text
    assert any(record.name == "app_preferences.host" for record in caplog.records)


@pytest.mark.asyncio
async def test_read_failure_reaches_requester(tmp_path, monkeypatch):
    hub, host = _setup(tmp_path)

    async def broken_load():
        raise OSError("permission denied")

    monkeypatch.setattr(host.store, "load", broken_load)

    with pytest.raises(RemoteError) as excinfo:
        await PreferencesClient(hub.connect()).load()

    assert excinfo.value.error_type == "OSError"


@pytest.mark.asyncio
async def test_persist_failure_keeps_value_in_memory(tmp_path, monkeypatch):
    hub, host = _setup(tmp_path)
    client = PreferencesClient(hub.connect())
    client.observe()
    changes = _changes(client.target)

    async def broken_store():
        raise OSError("disk full")

    monkeypatch.setattr(host.store, "store", broken_store)

    with pytest.raises(RemoteError):
        await client.store("k", "v")

    assert host.store.document == {"k": "v"}
    assert changes == []


@pytest.mark.asyncio
async def test_read_intent_is_answered(tmp_path):
    hub, _ = _setup(tmp_path, defaults={"a": 1})
    client = PreferencesClient(hub.connect())
    client.observe()

    event = SettingsEvent(SETTINGS_READ, cancelable=True)
    client.target.dispatch(event)

    assert event.default_prevented
    assert await event.detail["result"] == {"a": 1}


@pytest.mark.asyncio
async def test_change_intent_is_stored(tmp_path):
    hub, host = _setup(tmp_path)
    client = PreferencesClient(hub.connect())
    client.observe()
    changes = _changes(client.target)

    event = SettingsEvent(SETTINGS_CHANGED, detail={"name": "zoom", "value": 3}, cancelable=True)
    client.target.dispatch(event)
    await event.detail["result"]

    assert event.default_prevented
    assert host.store.document == {"zoom": 3}
    assert changes == [("zoom", 3)]


@pytest.mark.asyncio
async def test_non_cancelable_change_is_ignored(tmp_path):
    hub, host = _setup(tmp_path)
    client = PreferencesClient(hub.connect())
    client.observe()

    event = SettingsEvent(SETTINGS_CHANGED, detail={"name": "zoom", "value": 3})
    client.target.dispatch(event)

    assert "result" not in event.detail
    assert host.store.document is None


@pytest.mark.asyncio
async def test_unobserve_detaches_everything(tmp_path):
    hub, host = _setup(tmp_path)
    connection = hub.connect()
    client = PreferencesClient(connection)
    client.observe()
    client.unobserve()
    changes = _changes(client.target)

    await host.update("k", 1)

    assert changes == []
    assert client.target.listener_count(SETTINGS_READ) == 0
    assert client.target.listener_count(SETTINGS_CHANGED) == 1


def test_host_unobserve_removes_handlers(tmp_path):
    hub, host = _setup(tmp_path)

    host.observe(hub)
    host.unobserve()

    assert not hub.has_handler("read-app-preferences")
    assert not hub.has_handler("update-app-preference")
    assert host.channel is None
