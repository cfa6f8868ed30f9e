"""Preferences service running in the privileged (host) process."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .channel.base import (
    PREFERENCE_UPDATED,
    READ_PREFERENCES,
    UPDATE_PREFERENCE,
    Connection,
    HostChannel,
)
from .config import StoreOptions
from .events import SETTINGS_CHANGED, EventTarget
from .settings_store import Document, SettingsStore

logger = logging.getLogger(__name__)


class PreferencesHost:
    """Answers preference reads and updates from every UI process.

    Each successful update is announced on :attr:`events` for listeners in
    this process and sent as ``app-preference-updated`` to every open
    connection, including the one that asked for the change.
    """

    def __init__(
        self,
        options: StoreOptions | None = None,
        *,
        defaults: Mapping[str, Any] | None = None,
        user_data_dir: Path | None = None,
        log: logging.Logger | None = None,
        **option_values: Any,
    ) -> None:
        self.store = SettingsStore(
            options,
            defaults=defaults,
            user_data_dir=user_data_dir,
            log=log,
            **option_values,
        )
        self.log = log or logger
        self.events = EventTarget()
        self.channel: HostChannel | None = None

    @property
    def settings_file(self) -> Path:
        return self.store.settings_file

    def observe(self, channel: HostChannel) -> None:
        """Start answering preference requests arriving on ``channel``."""
        self.unobserve()
        channel.handle(READ_PREFERENCES, self._read_handler)
        channel.handle(UPDATE_PREFERENCE, self._change_handler)
        self.channel = channel

    def unobserve(self) -> None:
        channel = self.channel
        if channel is None:
            return
        channel.remove_handler(READ_PREFERENCES)
        channel.remove_handler(UPDATE_PREFERENCE)
        self.channel = None

    async def read(self) -> Document:
        try:
            return await self.store.load()
        except Exception as exc:
            self.log.error("Unable to read preferences: %s", exc)
            raise

    async def update(self, name: str, value: Any) -> None:
        """Set ``name`` to ``value``, persist, and announce the change."""
        try:
            if not name:
                raise ValueError("Name is not set.")
            document = await self.store.load()
            document[name] = value
            await self.store.store()
        except Exception as exc:
            self.log.error("Unable to update preference %r: %s", name, exc)
            raise
        self._inform_change(name, value)

    async def _read_handler(self, connection: Connection) -> Document:
        return await self.read()

    async def _change_handler(self, connection: Connection, name: str, value: Any = None) -> None:
        await self.update(name, value)

    def _inform_change(self, name: str, value: Any) -> None:
        self.events.emit(SETTINGS_CHANGED, name=name, value=value)
        if self.channel is None:
            return
        for connection in self.channel.connections():
            connection.send(PREFERENCE_UPDATED, name, value)
