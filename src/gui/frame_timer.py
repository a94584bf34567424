"""Qt implementation of the scheduler's tick source."""

from __future__ import annotations

from typing import Callable, Dict

from PyQt5.QtCore import QObject, QTimer

from src.C_pipeline.frame_scheduler import TickSource


class QtTickSource(TickSource):
    """One single-shot ``QTimer`` per requested tick, fired on the GUI thread."""

    def __init__(self, interval_ms: int, parent: QObject | None = None) -> None:
        self.interval_ms = max(0, int(interval_ms))
        self._parent = parent
        self._next_token = 0
        self._timers: Dict[int, QTimer] = {}

    def request(self, callback: Callable[[], None]) -> int:
        self._next_token += 1
        token = self._next_token
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda: self._fire(token, callback))
        self._timers[token] = timer
        timer.start(self.interval_ms)
        return token

    def _fire(self, token: int, callback: Callable[[], None]) -> None:
        timer = self._timers.pop(token, None)
        if timer is None:
            return
        timer.deleteLater()
        callback()

    def cancel(self, token: int) -> None:
        timer = self._timers.pop(token, None)
        if timer is not None:
            timer.stop()
            timer.deleteLater()
