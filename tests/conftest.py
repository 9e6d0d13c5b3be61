from __future__ import annotations
import datetime as dt
from concurrent.futures import Executor, Future
import pytest
from fuzzystat.config import Defaults
from fuzzystat.exceptions import WeatherError
from fuzzystat.thermostat import FuzzyStat
from fuzzystat.weather import WeatherReading

class FakeLoop:
    """Tk-style after()/after_cancel() driven by advance(ms) instead of a clock."""
    def __init__(self):
        self.now = 0
        self._jobs = {}
        self._seq = 0
    def after(self, ms, fn):
        self._seq += 1
        self._jobs[self._seq] = (self.now + ms, self._seq, fn)
        return self._seq
    def after_cancel(self, job):
        self._jobs.pop(job, None)
    @property
    def pending(self) -> int:
        return len(self._jobs)
    def advance(self, ms: int) -> None:
        end = self.now + ms
        while True:
            due = [j for j in self._jobs.values() if j[0] <= end]
            if not due:
                break
            at, seq, fn = min(due, key=lambda j: (j[0], j[1]))
            del self._jobs[seq]
            self.now = at
            fn()
        self.now = end

class ImmediateExecutor(Executor):
    def submit(self, fn, *args, **kwargs):
        f = Future()
        try:
            f.set_result(fn(*args, **kwargs))
        except Exception as e:
            f.set_exception(e)
        return f

class DeferredExecutor(Executor):
    """Holds calls until finish() so the in-flight state can be observed."""
    def __init__(self):
        self.calls = []
    def submit(self, fn, *args, **kwargs):
        f = Future()
        self.calls.append((f, fn, args))
        return f
    def finish(self, i: int = -1) -> None:
        f, fn, args = self.calls[i]
        try:
            f.set_result(fn(*args))
        except Exception as e:
            f.set_exception(e)

class FakeWeather:
    def __init__(self, temperature=12.5, humidity=80.0, name="Vienna, Austria", error=None):
        self.reading = WeatherReading(temperature, humidity, name)
        self.error = error
        self.calls = []
    def __call__(self, location):
        self.calls.append(location)
        if self.error:
            raise WeatherError(self.error)
        return self.reading

def build(clock_hm="09:00", weather=None, executor=None, **defaults):
    h, m = map(int, clock_hm.split(':'))
    loop = FakeLoop()
    app = FuzzyStat(loop, weather or FakeWeather(), defaults=Defaults(**defaults),
                    executor=executor or ImmediateExecutor(),
                    clock=lambda: dt.datetime(2026, 10, 19, h, m, 30))
    notices = []
    app.add_listener(notices.append)
    return app, loop, notices

@pytest.fixture
def loop():
    return FakeLoop()
