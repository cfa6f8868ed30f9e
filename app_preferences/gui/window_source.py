"""Qt adapter that lets a session follow a widget's geometry."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from PySide6.QtCore import QEvent, QObject
from PySide6.QtWidgets import QWidget

from ..session import MOVE_EVENT, RESIZE_EVENT, WindowListener

_EVENT_NAMES = {
    QEvent.Type.Move: MOVE_EVENT,
    QEvent.Type.Resize: RESIZE_EVENT,
}


class QtWindowSource(QObject):
    """Turns a widget's move and resize events into session notifications."""

    def __init__(self, widget: QWidget, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._widget = widget
        self._listeners: dict[str, list[WindowListener]] = {}
        widget.installEventFilter(self)

    @property
    def widget(self) -> QWidget:
        return self._widget

    def add_listener(self, event: str, listener: WindowListener) -> None:
        self._listeners.setdefault(event, []).append(listener)

    def remove_listener(self, event: str, listener: WindowListener) -> None:
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)

    def get_position(self) -> tuple[int, int]:
        pos = self._widget.pos()
        return pos.x(), pos.y()

    def get_size(self) -> tuple[int, int]:
        size = self._widget.size()
        return size.width(), size.height()

    def detach(self) -> None:
        """Stop watching the widget; call before the widget is destroyed."""
        self._widget.removeEventFilter(self)
        self._listeners.clear()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is self._widget:
            name = _EVENT_NAMES.get(event.type())
            if name is not None:
                for listener in list(self._listeners.get(name, ())):
                    listener(self)
        return False


def apply_session(widget: QWidget, document: Mapping[str, Any]) -> None:
    """Resize and move ``widget`` according to a restored session document."""
    size = document.get("size") or {}
    width, height = size.get("width"), size.get("height")
    if width is not None and height is not None:
        widget.resize(int(width), int(height))
    position = document.get("position") or {}
    x, y = position.get("x"), position.get("y")
    if x is not None and y is not None:
        widget.move(int(x), int(y))
