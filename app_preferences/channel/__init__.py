"""Message channel between the preferences host and UI processes."""

from .base import (
    PREFERENCE_UPDATED,
    READ_PREFERENCES,
    UPDATE_PREFERENCE,
    ClientChannel,
    Connection,
    HostChannel,
    RemoteError,
)
from .loopback import LoopbackConnection, LoopbackHub

__all__ = [
    "PREFERENCE_UPDATED",
    "READ_PREFERENCES",
    "UPDATE_PREFERENCE",
    "ClientChannel",
    "Connection",
    "HostChannel",
    "LoopbackConnection",
    "LoopbackHub",
    "RemoteError",
]
