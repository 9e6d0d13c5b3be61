from __future__ import annotations
import logging
from typing import Any, Callable, Literal, Optional, Tuple

STEP_C = 0.1
TICK_MS = 500

State = Literal["idle", "running"]

def step_toward(current: float, target: float, step: float = STEP_C) -> Tuple[float, bool]:
    """One simulated move of `current` toward `target`. Returns (value, converged)."""
    diff = target - current
    if abs(diff) < step:
        return target, True
    nxt = round(current + (step if diff > 0 else -step), 1)
    return nxt, nxt == target

class SimulationStepper:
    """
    Walks a temperature toward a target on a timer. The target is read live on
    every tick, so a setpoint change mid-run redirects without a restart.
    `loop` is anything with Tk-style after()/after_cancel().
    """
    def __init__(self, loop, read: Callable[[], float], write: Callable[[float], Any],
                 target: Callable[[], float], on_converged: Optional[Callable[[], Any]] = None,
                 step: float = STEP_C, tick_ms: int = TICK_MS):
        self._loop = loop
        self._read = read; self._write = write; self._target = target
        self._on_converged = on_converged
        self.step = step; self.tick_ms = tick_ms
        self.state: State = "idle"
        self.ticks = 0
        self._job = None
        self._log = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def running(self) -> bool:
        return self.state == "running"

    def start(self) -> bool:
        if self.running:
            return False
        self.state = "running"; self.ticks = 0
        self._log.info("Simulation started %.1f -> %.1f", self._read(), self._target())
        self._job = self._loop.after(self.tick_ms, self._tick)
        return True

    def stop(self) -> bool:
        if not self.running:
            return False
        self._cancel()
        self.state = "idle"
        self._log.info("Simulation stopped at %.1f after %d ticks", self._read(), self.ticks)
        return True

    def _cancel(self) -> None:
        if self._job is not None:
            self._loop.after_cancel(self._job)
            self._job = None

    def _tick(self) -> None:
        self._job = None
        if not self.running:
            return
        value, converged = step_toward(self._read(), self._target(), self.step)
        self.ticks += 1
        if converged:
            self.state = "idle"
            self._write(value)
            self._log.info("Simulation converged at %.1f after %d ticks", value, self.ticks)
            if self._on_converged:
                self._on_converged()
            return
        self._job = self._loop.after(self.tick_ms, self._tick)
        self._write(value)
