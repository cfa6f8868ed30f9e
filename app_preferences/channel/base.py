"""Interfaces of the message channel between the host and UI processes."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol, Sequence

READ_PREFERENCES = "read-app-preferences"
UPDATE_PREFERENCE = "update-app-preference"
PREFERENCE_UPDATED = "app-preference-updated"

BroadcastListener = Callable[..., None]


class RemoteError(RuntimeError):
    """Raised on the requesting side when a remote handler failed."""

    def __init__(self, channel: str, error_type: str, message: str) -> None:
        super().__init__(f"Error invoking '{channel}': {error_type}: {message}")
        self.channel = channel
        self.error_type = error_type
        self.message = message


class Connection(Protocol):
    """Host-side view of one connected UI process."""

    def send(self, name: str, *args: Any) -> None:
        """Push a fire-and-forget message to the UI process."""


RequestHandler = Callable[..., Awaitable[Any]]


class HostChannel(Protocol):
    """Request/response endpoint of the privileged process."""

    def handle(self, name: str, handler: RequestHandler) -> None:
        """Answer ``name`` requests with ``await handler(connection, *args)``."""

    def remove_handler(self, name: str) -> None:
        """Stop answering ``name`` requests."""

    def connections(self) -> Sequence[Connection]:
        """Return every currently open UI connection."""


class ClientChannel(Protocol):
    """UI-process endpoint of the channel."""

    async def invoke(self, name: str, *args: Any) -> Any:
        """Send a request and wait for the reply."""

    def on(self, name: str, listener: BroadcastListener) -> None:
        """Call ``listener(*args)`` for every ``name`` message from the host."""

    def remove_listener(self, name: str, listener: BroadcastListener) -> None:
        """Stop delivering ``name`` messages to ``listener``."""
