"""Top-level package for the app-preferences library."""

from .app_meta import IdentityMeta
from .client import PreferencesClient
from .config import SessionDefaults, StoreOptions
from .events import EventTarget, SettingsEvent
from .host import PreferencesHost
from .session import SessionState
from .settings_store import SettingsStore, StoreState

__all__ = [
    "EventTarget",
    "IdentityMeta",
    "PreferencesClient",
    "PreferencesHost",
    "SessionDefaults",
    "SessionState",
    "SettingsEvent",
    "SettingsStore",
    "StoreOptions",
    "StoreState",
]
