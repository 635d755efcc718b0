from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone

from PySide6 import QtCore

from chameleon_app.services.scheduler import Callback, Scheduler, TimerHandle

LOGGER = logging.getLogger(__name__)


class _QtHandle(TimerHandle):
    def __init__(self, timer: QtCore.QTimer) -> None:
        self._timer: QtCore.QTimer | None = timer

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class QtScheduler(Scheduler):
    """QTimer-backed scheduler on a QCoreApplication event loop."""

    def __init__(self) -> None:
        self._app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication(sys.argv)
        self._handles: list[_QtHandle] = []

    def now(self) -> datetime:
        return datetime.now(tz=timezone.utc)

    def _start_timer(self, seconds: float, callback: Callback, single_shot: bool) -> TimerHandle:
        timer = QtCore.QTimer()
        timer.setSingleShot(single_shot)
        timer.setInterval(max(1, int(seconds * 1000)))
        handle = _QtHandle(timer)

        def _fire() -> None:
            if single_shot:
                handle.cancel()
            callback()

        timer.timeout.connect(_fire)
        timer.start()
        self._handles = [h for h in self._handles if h.active]
        self._handles.append(handle)
        return handle

    def schedule_every(self, seconds: float, callback: Callback) -> TimerHandle:
        return self._start_timer(seconds, callback, single_shot=False)

    def call_later(self, seconds: float, callback: Callback) -> TimerHandle:
        return self._start_timer(seconds, callback, single_shot=True)

    def run(self) -> int:
        LOGGER.info("event loop starting timers=%s", len(self._handles))
        return int(self._app.exec())
