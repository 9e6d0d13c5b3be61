from __future__ import annotations
import logging
from typing import Any, Callable

SCHEDULE_PERIOD_MS = 60_000

class ScheduleMonitor:
    """
    Runs `apply` once immediately and then every period_ms on the loop.
    Holds exactly one pending handle; start() always drops the previous one.
    """
    def __init__(self, loop, apply: Callable[[], Any], period_ms: int = SCHEDULE_PERIOD_MS):
        self._loop = loop
        self._apply = apply
        self._period_ms = max(1000, int(period_ms))
        self._job = None
        self._log = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def active(self) -> bool:
        return self._job is not None

    def start(self) -> None:
        self.stop()
        self._log.debug("Starting schedule timer period=%dms", self._period_ms)
        self._job = self._loop.after(0, self._tick)

    def stop(self) -> None:
        if self._job is not None:
            self._loop.after_cancel(self._job)
            self._job = None

    def _tick(self) -> None:
        self._job = self._loop.after(self._period_ms, self._tick)
        self._apply()
