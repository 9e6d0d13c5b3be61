from __future__ import annotations
import logging, sched, time
from typing import Any, Callable

log = logging.getLogger(__name__)

class HeadlessLoop:
    """
    Single-threaded timer loop with the Tk after()/after_cancel() surface, so the
    thermostat can run under a Tk root or without any UI at all.
    """
    def __init__(self, idle_s: float = 0.1):
        self._sched = sched.scheduler(time.monotonic, time.sleep)
        self._idle_s = idle_s
        self._running = False

    def after(self, ms: int, fn: Callable[[], Any]) -> sched.Event:
        return self._sched.enter(max(0, int(ms)) / 1000.0, 0, self._call, (fn,))

    def after_cancel(self, handle: sched.Event | None) -> None:
        if handle is None:
            return
        try:
            self._sched.cancel(handle)
        except ValueError:
            pass  # already fired

    def pending(self) -> int:
        return len(self._sched.queue)

    def run(self) -> None:
        self._running = True
        log.info("Loop running")
        while self._running:
            delay = self._sched.run(blocking=False)
            time.sleep(self._idle_s if delay is None else min(delay, self._idle_s))
        log.info("Loop stopped")

    def stop(self) -> None:
        self._running = False

    @staticmethod
    def _call(fn: Callable[[], Any]) -> None:
        try:
            fn()
        except Exception:
            log.exception("Timer callback %r failed", fn)
