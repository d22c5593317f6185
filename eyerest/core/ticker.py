from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QTimer

from eyerest.core.config import TICK_INTERVAL_MS
from eyerest.core.ports import Ticker


class QtTicker(Ticker):
    """One-second QTimer source. Starting again replaces the previous timer."""

    def __init__(self) -> None:
        self._timer: QTimer | None = None

    @property
    def is_running(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def start(self, callback: Callable[[], None]) -> None:
        self.stop()
        timer = QTimer()
        timer.setInterval(TICK_INTERVAL_MS)
        timer.timeout.connect(callback)
        timer.start()
        self._timer = timer

    def stop(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.timeout.disconnect()
        self._timer = None
