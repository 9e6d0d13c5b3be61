from __future__ import annotations
import logging, datetime as dt
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional
from fuzzystat import events
from fuzzystat.config import DataSource, Defaults
from fuzzystat.controller import Decision, decide
from fuzzystat.events import Notice
from fuzzystat.exceptions import WeatherError
from fuzzystat.monitor import ScheduleMonitor, SCHEDULE_PERIOD_MS
from fuzzystat.schedule import Schedule, ScheduleEntry, active_at
from fuzzystat.simulation import SimulationStepper
from fuzzystat.weather import WeatherReading

POLL_MS = 100
AT_TARGET_C = 0.1
TEMP_STEP_C = 0.5
HUMIDITY_STEP_PCT = 5.0

@dataclass
class AppState:
    temperature_c: float = 22.0
    humidity_pct: float = 45.0
    target_c: float = 20.0
    data_source: DataSource = 'manual'
    location: str = 'Vienna'
    fetched_location: Optional[str] = None
    fetching: bool = False
    weather_error: Optional[str] = None

    @classmethod
    def from_defaults(cls, d: Defaults) -> "AppState":
        return cls(temperature_c=d.temperature_c, humidity_pct=d.humidity_pct, target_c=d.target_c,
                   data_source=d.data_source, location=d.location)

class FuzzyStat:
    """
    Owns the session state and drives the pipeline:
    readings -> perceived temperature -> deadband output, re-run on every change.
    Timers (schedule, simulation, weather polling) all go through `loop`,
    anything with Tk-style after()/after_cancel(); nothing runs concurrently
    except the weather HTTP call, whose result is picked up by polling.
    """
    def __init__(self, loop, weather: Callable[[str], WeatherReading], defaults: Defaults | None = None,
                 executor: Executor | None = None, clock: Callable[[], dt.datetime] = dt.datetime.now,
                 schedule_period_ms: int = SCHEDULE_PERIOD_MS, poll_ms: int = POLL_MS):
        self._loop = loop
        self._weather = weather
        self._defaults = defaults or Defaults()
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="weather")
        self._clock = clock
        self._poll_ms = poll_ms
        self.state = AppState.from_defaults(self._defaults)
        self.schedule = Schedule()
        self.decision: Decision = decide(self.state.temperature_c, self.state.humidity_pct, self.state.target_c)
        self._listeners: List[Callable[[Notice], None]] = []
        self._decision_listeners: List[Callable[[Decision], None]] = []
        self._fetch_seq = 0
        self._poll_job = None
        self._stepper = SimulationStepper(loop, read=lambda: self.state.temperature_c,
                                          write=self._set_simulated_temperature,
                                          target=lambda: self.state.target_c,
                                          on_converged=self._on_simulation_converged)
        self._schedule_monitor = ScheduleMonitor(loop, self.apply_schedule, period_ms=schedule_period_ms)
        self._log = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    # listeners
    def add_listener(self, fn: Callable[[Notice], None]) -> None:
        if fn not in self._listeners:
            self._listeners.append(fn)

    def remove_listener(self, fn: Callable[[Notice], None]) -> None:
        try: self._listeners.remove(fn)
        except ValueError: pass

    def add_decision_listener(self, fn: Callable[[Decision], None]) -> None:
        if fn not in self._decision_listeners:
            self._decision_listeners.append(fn)
            fn(self.decision)

    def remove_decision_listener(self, fn: Callable[[Decision], None]) -> None:
        try: self._decision_listeners.remove(fn)
        except ValueError: pass

    def _notify(self, notice: Notice) -> None:
        self._log.info("%s: %s", notice.title, notice.message)
        for fn in list(self._listeners):
            try: fn(notice)
            except Exception: self._log.exception("Notice listener %r failed", fn)

    # pipeline
    @property
    def simulating(self) -> bool:
        return self._stepper.running

    @property
    def manual_controls_enabled(self) -> bool:
        return self.state.data_source == 'manual' and not self.state.fetching and not self.simulating

    def recompute(self) -> Decision:
        s = self.state
        self.decision = decide(s.temperature_c, s.humidity_pct, s.target_c)
        for fn in list(self._decision_listeners):
            try: fn(self.decision)
            except Exception: self._log.exception("Decision listener %r failed", fn)
        return self.decision

    def start(self) -> None:
        """Initial pipeline run plus whatever the configured data source needs."""
        self.recompute()
        self._restart_schedule_monitor()
        if self.state.data_source == 'open-meteo':
            self.fetch_weather(self.state.location)

    # readings and setpoint
    def set_temperature(self, value: float) -> bool:
        if not self.manual_controls_enabled:
            return False
        self.state.temperature_c = float(value); self.recompute()
        return True

    def set_humidity(self, value: float) -> bool:
        if not self.manual_controls_enabled:
            return False
        self.state.humidity_pct = min(100.0, max(0.0, float(value))); self.recompute()
        return True

    def adjust_temperature(self, delta: float = TEMP_STEP_C) -> bool:
        return self.set_temperature(self.state.temperature_c + delta)

    def adjust_humidity(self, delta: float = HUMIDITY_STEP_PCT) -> bool:
        return self.set_humidity(self.state.humidity_pct + delta)

    def set_target(self, value: float) -> None:
        # A running simulation reads the target live and simply redirects.
        self.state.target_c = float(value); self.recompute()

    # schedule
    def add_schedule(self, name: str, time: str, temperature: float) -> ScheduleEntry:
        entry = self.schedule.add(name, time, temperature)
        self._notify(events.schedule_added(entry.name))
        self._restart_schedule_monitor()
        return entry

    def update_schedule(self, entry: ScheduleEntry) -> ScheduleEntry:
        entry = self.schedule.update(entry)
        self._notify(events.schedule_updated(entry.name))
        self._restart_schedule_monitor()
        return entry

    def delete_schedule(self, entry_id: str) -> Optional[ScheduleEntry]:
        entry = self.schedule.delete(entry_id)
        if entry is not None:
            self._notify(events.schedule_deleted(entry.name))
            self._restart_schedule_monitor()
        return entry

    def load_schedule(self, items) -> None:
        """Seed entries (name/time/temperature objects) without per-entry notices."""
        for it in items:
            self.schedule.add(it.name, it.time, it.temperature)
        self._restart_schedule_monitor()

    def apply_schedule(self, now: dt.datetime | None = None) -> Optional[ScheduleEntry]:
        """Apply the entry active now; returns it only if the target actually changed."""
        if not self.schedule or self.simulating:
            return None
        entry = active_at(self.schedule, now or self._clock())
        if entry is None or entry.temperature == self.state.target_c:
            return None
        self.state.target_c = entry.temperature
        self.recompute()
        self._notify(events.schedule_applied(entry.name, entry.temperature))
        return entry

    def _restart_schedule_monitor(self) -> None:
        if self.schedule and not self.simulating:
            self._schedule_monitor.start()
        else:
            self._schedule_monitor.stop()

    # simulation
    def start_simulation(self) -> bool:
        if self.simulating:
            return False
        if self.state.data_source != 'manual' or self.state.fetching:
            self._notify(events.simulation_unavailable("Simulation needs manual readings."))
            return False
        if abs(self.state.temperature_c - self.state.target_c) < AT_TARGET_C:
            self._notify(events.already_at_target())
            return False
        self._schedule_monitor.stop()
        return self._stepper.start()

    def stop_simulation(self) -> bool:
        if not self._stepper.stop():
            return False
        self._restart_schedule_monitor()
        return True

    def toggle_simulation(self) -> bool:
        """True when a simulation is running afterwards."""
        if self.simulating:
            self.stop_simulation()
            return False
        return self.start_simulation()

    def _set_simulated_temperature(self, value: float) -> None:
        self.state.temperature_c = value; self.recompute()

    def _on_simulation_converged(self) -> None:
        self._restart_schedule_monitor()

    # data source / weather
    def set_data_source(self, source: DataSource) -> None:
        if source not in ('manual', 'open-meteo'):
            raise ValueError(f"unknown data source {source!r}")
        self.stop_simulation()
        self.state.data_source = source
        if source == 'open-meteo':
            self.fetch_weather(self.state.location)

    def set_location(self, query: str) -> None:
        self.state.location = query
        if self.state.data_source == 'open-meteo':
            self.fetch_weather(query)

    def fetch_weather(self, location: str) -> bool:
        if not (location or "").strip():
            self.state.weather_error = "Please enter a city name."
            self._notify(events.weather_error("City name cannot be empty to fetch live weather.", title="Input Required"))
            return False
        self._cancel_poll()
        self._fetch_seq += 1
        seq = self._fetch_seq
        s = self.state
        s.fetching = True; s.weather_error = None; s.fetched_location = None
        self._log.info("Fetching weather for %s", location)
        future = self._executor.submit(self._weather, location)
        self._poll_job = self._loop.after(0, lambda: self._poll_fetch(future, seq))
        return True

    def _poll_fetch(self, future: Future, seq: int) -> None:
        self._poll_job = None
        if seq != self._fetch_seq:
            return
        if not future.done():
            self._poll_job = self._loop.after(self._poll_ms, lambda: self._poll_fetch(future, seq))
            return
        s = self.state
        s.fetching = False
        try:
            reading = future.result()
        except WeatherError as e:
            self._fail_fetch(str(e))
            return
        except Exception as e:
            self._log.exception("Weather lookup crashed")
            self._fail_fetch(str(e) or "Failed to fetch live weather data.")
            return
        s.temperature_c = reading.temperature
        s.humidity_pct = reading.humidity
        s.fetched_location = reading.fetched_location_name
        self.recompute()
        self._notify(events.weather_fetched(reading.temperature, reading.humidity, reading.fetched_location_name))

    def _fail_fetch(self, message: str) -> None:
        self.state.weather_error = message
        self._notify(events.weather_error(message))

    def _cancel_poll(self) -> None:
        if self._poll_job is not None:
            self._loop.after_cancel(self._poll_job)
            self._poll_job = None

    # lifecycle
    def reset(self) -> None:
        prior_source = self.state.data_source
        self._stepper.stop()
        self._schedule_monitor.stop()
        self._cancel_poll()
        self._fetch_seq += 1  # drop any fetch still in flight
        d = self._defaults
        self.state = AppState.from_defaults(d)
        self.state.data_source = 'manual'
        self.schedule.clear()
        self.recompute()
        self._notify(events.demo_reset())
        if prior_source == 'open-meteo':
            self.fetch_weather(d.location)

    def shutdown(self) -> None:
        self._stepper.stop()
        self._schedule_monitor.stop()
        self._cancel_poll()
        self._fetch_seq += 1
        self._executor.shutdown(wait=False)
        self._log.info("Shut down")
