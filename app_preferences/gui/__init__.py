"""PySide6 adapters for the preference components."""

from .bridge import QtSettingsBridge
from .scheduler import QtWriteScheduler
from .window_source import QtWindowSource, apply_session

__all__ = ["QtSettingsBridge", "QtWindowSource", "QtWriteScheduler", "apply_session"]
