"""In-process implementation of the host/UI message channel.

Requests and broadcasts are delivered in order on the running event loop.
Every payload is copied through JSON on its way across, so neither side can
share mutable state with the other, exactly as with a real process boundary.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .base import BroadcastListener, RemoteError, RequestHandler

logger = logging.getLogger(__name__)


def _copy(value: Any) -> Any:
    return json.loads(json.dumps(value))


class LoopbackHub:
    """Host side: owns the request handlers and the list of open connections."""

    def __init__(self) -> None:
        self._handlers: dict[str, RequestHandler] = {}
        self._connections: list[LoopbackConnection] = []

    def handle(self, name: str, handler: RequestHandler) -> None:
        if name in self._handlers:
            raise ValueError(f"A handler for '{name}' is already registered.")
        self._handlers[name] = handler

    def remove_handler(self, name: str) -> None:
        self._handlers.pop(name, None)

    def has_handler(self, name: str) -> bool:
        return name in self._handlers

    def connections(self) -> list[LoopbackConnection]:
        return list(self._connections)

    def connect(self) -> LoopbackConnection:
        """Open a new UI-side connection to this hub."""
        connection = LoopbackConnection(self)
        self._connections.append(connection)
        return connection

    def _disconnect(self, connection: LoopbackConnection) -> None:
        if connection in self._connections:
            self._connections.remove(connection)

    async def _dispatch(self, connection: LoopbackConnection, name: str, args: list[Any]) -> Any:
        handler = self._handlers.get(name)
        if handler is None:
            raise RemoteError(name, "LookupError", f"No handler registered for '{name}'")
        try:
            result = await handler(connection, *args)
        except Exception as exc:
            raise RemoteError(name, type(exc).__name__, str(exc)) from exc
        return _copy(result)


class LoopbackConnection:
    """UI side of a loopback channel; also the host's handle for broadcasts."""

    def __init__(self, hub: LoopbackHub) -> None:
        self._hub = hub
        self._listeners: dict[str, list[BroadcastListener]] = {}
        self.closed = False

    async def invoke(self, name: str, *args: Any) -> Any:
        if self.closed:
            raise RemoteError(name, "ConnectionError", "The connection is closed")
        return await self._hub._dispatch(self, name, _copy(list(args)))

    def send(self, name: str, *args: Any) -> None:
        if self.closed:
            logger.debug("Dropping '%s' message for a closed connection", name)
            return
        payload = _copy(list(args))
        for listener in list(self._listeners.get(name, ())):
            try:
                listener(*payload)
            except Exception:
                logger.exception("Listener for '%s' failed", name)

    def on(self, name: str, listener: BroadcastListener) -> None:
        self._listeners.setdefault(name, []).append(listener)

    def remove_listener(self, name: str, listener: BroadcastListener) -> None:
        listeners = self._listeners.get(name, [])
        if listener in listeners:
            listeners.remove(listener)

    def close(self) -> None:
        self.closed = True
        self._listeners.clear()
        self._hub._disconnect(self)
