"""Preferences facade used inside a UI process."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from .channel.base import PREFERENCE_UPDATED, READ_PREFERENCES, UPDATE_PREFERENCE, ClientChannel
from .events import SETTINGS_CHANGED, SETTINGS_READ, EventTarget, SettingsEvent
from .settings_store import Document

logger = logging.getLogger(__name__)


class PreferencesClient:
    """Reads and changes preferences through the host process.

    Besides the direct :meth:`load` and :meth:`store` calls, UI code that has
    no reference to the client can dispatch a ``settings-read`` event, or a
    cancelable ``settings-changed`` event with ``name`` and ``value`` in its
    detail, on :attr:`target`. The client claims the event and puts a task with
    the outcome into ``event.detail["result"]``.

    Changes announced by the host are re-dispatched on :attr:`target` as
    non-cancelable ``settings-changed`` events, whichever process made them.
    """

    def __init__(self, channel: ClientChannel, target: EventTarget | None = None) -> None:
        self.channel = channel
        self.target = target or EventTarget()
        self._observing = False

    def observe(self) -> None:
        if self._observing:
            return
        self.target.add_listener(SETTINGS_READ, self._read_handler)
        self.target.add_listener(SETTINGS_CHANGED, self._change_handler)
        self.channel.on(PREFERENCE_UPDATED, self._host_changed_handler)
        self._observing = True

    def unobserve(self) -> None:
        if not self._observing:
            return
        self.target.remove_listener(SETTINGS_READ, self._read_handler)
        self.target.remove_listener(SETTINGS_CHANGED, self._change_handler)
        self.channel.remove_listener(PREFERENCE_UPDATED, self._host_changed_handler)
        self._observing = False

    async def load(self) -> Document:
        """Return the current preferences from the host."""
        return await self.channel.invoke(READ_PREFERENCES)

    async def store(self, name: str, value: Any) -> None:
        """Change one preference; returns once the host has written it to disk."""
        if not name:
            raise ValueError("Name is not set.")
        await self.channel.invoke(UPDATE_PREFERENCE, name, value)

    def _read_handler(self, event: SettingsEvent) -> None:
        event.prevent_default()
        event.stop_propagation()
        event.detail["result"] = asyncio.ensure_future(self.load())

    def _change_handler(self, event: SettingsEvent) -> None:
        if not event.cancelable:
            return
        event.prevent_default()
        event.stop_propagation()
        name = event.detail.get("name")
        value = event.detail.get("value")
        event.detail["result"] = asyncio.ensure_future(self.store(name, value))

    def _host_changed_handler(self, name: str, value: Any = None) -> None:
        logger.debug("Preference %r changed in the host", name)
        self.target.emit(SETTINGS_CHANGED, name=name, value=value)
