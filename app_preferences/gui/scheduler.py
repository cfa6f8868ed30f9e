"""Write batching on the Qt event loop."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PySide6.QtCore import QObject, QTimer

from ..utils.scheduler import SchedulerState

logger = logging.getLogger(__name__)


class QtWriteScheduler(QObject):
    """Single-shot timer counterpart of ``CoalescingWriteScheduler``.

    Needs a ``QCoreApplication`` but no asyncio loop, so a session tracking a
    :class:`QtWindowSource` can save from ``QApplication.exec()``. The write
    runs synchronously on the GUI thread when the timer fires.
    """

    def __init__(
        self,
        write: Callable[[], object],
        interval: float,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._write = write
        self.interval = interval
        self._state = SchedulerState.IDLE
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state is SchedulerState.SCHEDULED

    def request_write(self) -> None:
        if self._state is SchedulerState.SCHEDULED:
            return
        self._state = SchedulerState.SCHEDULED
        self._timer.start(max(0, int(self.interval * 1000)))

    def cancel(self) -> None:
        self._timer.stop()
        self._state = SchedulerState.IDLE

    def flush(self) -> None:
        """Run a pending write now, e.g. from a ``closeEvent``."""
        if self.pending:
            self.cancel()
            self._run()

    async def wait(self) -> None:
        # Writes finish inside the timer callback; nothing is ever in flight.
        return None

    def _fire(self) -> None:
        self._state = SchedulerState.IDLE
        self._run()

    def _run(self) -> None:
        try:
            self._write()
        except Exception:
            logger.exception("Scheduled write failed")
