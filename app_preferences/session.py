"""Window session state: the last size and position of an application window.

Stored document format::

    {
      "size": {"width": 1200, "height": 800},
      "position": {"x": 10, "y": 20}
    }
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol, Sequence

from .config import SessionDefaults
from .settings_store import Document, SettingsStore
from .utils.scheduler import CoalescingWriteScheduler, SchedulerFactory, WriteScheduler

logger = logging.getLogger(__name__)

SESSIONS_DIR = "sessions"
MOVE_EVENT = "move"
RESIZE_EVENT = "resize"

WindowListener = Callable[["TrackedWindow"], None]


class TrackedWindow(Protocol):
    """Geometry source a session can follow."""

    def add_listener(self, event: str, listener: WindowListener) -> None:
        """Call ``listener(window)`` whenever ``event`` (move or resize) happens."""

    def remove_listener(self, event: str, listener: WindowListener) -> None:
        """Stop calling ``listener`` for ``event``."""

    def get_position(self) -> Sequence[float]:
        """Return the current ``(x, y)`` position of the window."""

    def get_size(self) -> Sequence[float]:
        """Return the current ``(width, height)`` of the window."""


def _to_number(value: Any) -> int | float | None:
    if value is None or value is False or value == "":
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number: int | float = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        if number.is_integer():
            number = int(number)
    else:
        return None
    if isinstance(number, float) and math.isnan(number):
        return None
    return number


def number_value(value: Any, default: int | float | None = None) -> int | float | None:
    """Coerce a stored value to a non-negative number.

    ``0`` is a valid value. Missing or non-numeric values give ``default`` and
    negative numbers are clamped to ``0``.
    """
    number = _to_number(value)
    if number is None:
        return default
    if number < 0:
        return 0
    return number


class SessionState:
    """Persists the geometry of one window, batching writes while it moves.

    Writes are batched by a scheduler built with ``scheduler_factory(write,
    debounce)``. The default runs on the asyncio event loop; Qt applications
    pass :class:`app_preferences.gui.QtWriteScheduler` instead.
    """

    def __init__(
        self,
        window_index: int = 0,
        *,
        width: float | None = None,
        height: float | None = None,
        debounce: float | None = None,
        user_data_dir: Path | None = None,
        log: logging.Logger | None = None,
        scheduler_factory: SchedulerFactory | None = None,
    ) -> None:
        self.id = window_index
        self.defaults = SessionDefaults(
            width=width or 0,
            height=height or 0,
            debounce=debounce or 0,
        )
        self.store = SettingsStore(
            file_path=SESSIONS_DIR,
            append_file_path=True,
            file_name=f"{window_index}.json",
            normalizer=self._process_settings,
            user_data_dir=user_data_dir,
            log=log,
        )
        self.log = log or logger
        factory = scheduler_factory or CoalescingWriteScheduler
        self.scheduler: WriteScheduler = factory(self.store.write, self.defaults.debounce)
        self.window: TrackedWindow | None = None

    @property
    def settings_file(self) -> Path:
        return self.store.settings_file

    async def load(self) -> Document:
        return await self.store.load()

    async def flush(self) -> None:
        """Write pending geometry immediately instead of waiting for the debounce."""
        self.scheduler.cancel()
        await self.scheduler.wait()
        await self.store.store()

    def track_window(self, window: TrackedWindow) -> None:
        """Follow ``window``'s move and resize notifications.

        Call :meth:`untrack_window` before the window is destroyed, otherwise
        the window keeps a reference to this session.
        """
        self.untrack_window()
        self.window = window
        self.log.debug("Session %s is tracking a window", self.id)
        window.add_listener(MOVE_EVENT, self._moved_handler)
        window.add_listener(RESIZE_EVENT, self._resized_handler)

    def untrack_window(self) -> None:
        window = self.window
        if window is None:
            return
        window.remove_listener(MOVE_EVENT, self._moved_handler)
        window.remove_listener(RESIZE_EVENT, self._resized_handler)
        self.window = None

    def update_size(self, width: float, height: float) -> None:
        """Record the window size. Safe to call many times in a short period."""
        document = self.store.ensure_document()
        size = document.setdefault("size", {})
        size["width"] = width
        size["height"] = height
        self.scheduler.request_write()

    def update_position(self, x: float, y: float) -> None:
        """Record the window position. Safe to call many times in a short period."""
        document = self.store.ensure_document()
        position = document.setdefault("position", {})
        position["x"] = x
        position["y"] = y
        self.scheduler.request_write()

    def _moved_handler(self, window: TrackedWindow) -> None:
        x, y = window.get_position()
        self.update_position(x, y)

    def _resized_handler(self, window: TrackedWindow) -> None:
        width, height = window.get_size()
        self.update_size(width, height)

    def _process_settings(self, data: Any) -> Document:
        return {
            "size": self._read_size(data),
            "position": self._read_position(data),
        }

    def _read_size(self, data: Any) -> dict[str, Any]:
        size = data.get("size") if isinstance(data, dict) else None
        if not isinstance(size, dict):
            return {"width": self.defaults.width, "height": self.defaults.height}
        return {
            "width": number_value(size.get("width"), self.defaults.width),
            "height": number_value(size.get("height"), self.defaults.height),
        }

    @staticmethod
    def _read_position(data: Any) -> dict[str, Any]:
        # Negative coordinates are valid on multi-monitor setups, so no clamping.
        position = data.get("position") if isinstance(data, dict) else None
        if not isinstance(position, dict):
            return {"x": None, "y": None}
        return {"x": _to_number(position.get("x")), "y": _to_number(position.get("y"))}
