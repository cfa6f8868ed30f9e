"""Local notification surface shared by the preference components.

A small synchronous dispatcher modelled on DOM custom events: an event carries
a ``detail`` mapping, may be cancelable, and a listener can claim it with
:meth:`SettingsEvent.prevent_default` and stop further listeners with
:meth:`SettingsEvent.stop_propagation`. Listeners communicate results back to
the dispatcher by writing into ``detail`` (for example ``detail["result"]``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

SETTINGS_READ = "settings-read"
SETTINGS_CHANGED = "settings-changed"

Listener = Callable[["SettingsEvent"], None]


@dataclass
class SettingsEvent:
    type: str
    detail: Dict[str, Any] = field(default_factory=dict)
    cancelable: bool = False
    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        if self.cancelable:
            self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class EventTarget:
    """Dispatches :class:`SettingsEvent` objects to registered listeners."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {}

    def add_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.setdefault(event_type, [])
        if listener not in listeners:
            listeners.append(listener)

    def remove_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_type)
        if not listeners:
            return
        try:
            listeners.remove(listener)
        except ValueError:
            return
        if not listeners:
            del self._listeners[event_type]

    def listener_count(self, event_type: str) -> int:
        return len(self._listeners.get(event_type, ()))

    def dispatch(self, event: SettingsEvent) -> bool:
        """Deliver ``event`` and return False when a listener prevented its default."""
        for listener in list(self._listeners.get(event.type, ())):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener for %s failed", event.type)
            if event.propagation_stopped:
                break
        return not event.default_prevented

    def emit(self, event_type: str, **detail: Any) -> SettingsEvent:
        """Dispatch a non-cancelable notification built from ``detail``."""
        event = SettingsEvent(event_type, detail=dict(detail))
        self.dispatch(event)
        return event
