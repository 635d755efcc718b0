from __future__ import annotations

import heapq
import itertools
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

Callback = Callable[[], None]


class TimerHandle(ABC):
    @property
    @abstractmethod
    def active(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def cancel(self) -> None:
        raise NotImplementedError


class Scheduler(ABC):
    """Periodic and one-shot callbacks on a single-threaded loop."""

    @abstractmethod
    def now(self) -> datetime:
        raise NotImplementedError

    @abstractmethod
    def schedule_every(self, seconds: float, callback: Callback) -> TimerHandle:
        raise NotImplementedError

    @abstractmethod
    def call_later(self, seconds: float, callback: Callback) -> TimerHandle:
        raise NotImplementedError


class _ManualHandle(TimerHandle):
    def __init__(self, interval: float | None, callback: Callback) -> None:
        self.interval = interval
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False


class ManualScheduler(Scheduler):
    """Virtual clock. Due callbacks fire in order, ties by registration."""

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2025, 1, 1, tzinfo=timezone.utc)
        self._queue: list[tuple[datetime, int, _ManualHandle]] = []
        self._seq = itertools.count()

    def now(self) -> datetime:
        return self._now

    def _push(self, due: datetime, handle: _ManualHandle) -> None:
        heapq.heappush(self._queue, (due, next(self._seq), handle))

    def schedule_every(self, seconds: float, callback: Callback) -> TimerHandle:
        interval = max(0.001, float(seconds))
        handle = _ManualHandle(interval, callback)
        self._push(self._now + timedelta(seconds=interval), handle)
        return handle

    def call_later(self, seconds: float, callback: Callback) -> TimerHandle:
        handle = _ManualHandle(None, callback)
        self._push(self._now + timedelta(seconds=max(0.0, float(seconds))), handle)
        return handle

    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if handle.active)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing everything that falls due. Returns the fire count."""
        target = self._now + timedelta(seconds=max(0.0, float(seconds)))
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self._now = due
            if handle.interval is None:
                handle.cancel()
            else:
                self._push(due + timedelta(seconds=handle.interval), handle)
            handle.callback()
            fired += 1
        self._now = target
        return fired
