"""Qt signal bridge for preference change notifications."""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from ..events import SETTINGS_CHANGED, EventTarget, SettingsEvent


class QtSettingsBridge(QObject):
    """Re-emits announced preference changes as a Qt signal."""

    settings_changed = Signal(str, object)

    def __init__(self, target: EventTarget, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._target = target
        target.add_listener(SETTINGS_CHANGED, self._forward)

    def close(self) -> None:
        self._target.remove_listener(SETTINGS_CHANGED, self._forward)

    def _forward(self, event: SettingsEvent) -> None:
        # Cancelable events are change requests, not announcements.
        if event.cancelable:
            return
        self.settings_changed.emit(event.detail.get("name"), event.detail.get("value"))
