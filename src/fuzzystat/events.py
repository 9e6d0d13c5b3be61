from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Literal
from fuzzystat.comfort import fmt_num

Kind = Literal[
    "schedule-applied", "schedule-added", "schedule-updated", "schedule-deleted",
    "weather-fetched", "weather-error", "already-at-target", "simulation-unavailable",
    "demo-reset",
]

@dataclass(frozen=True)
class Notice:
    """User-facing message; the front end decides how to show it."""
    kind: Kind
    title: str
    message: str
    destructive: bool = False
    data: Dict[str, Any] = field(default_factory=dict)

def schedule_applied(name: str, temperature: float) -> Notice:
    return Notice("schedule-applied", "Schedule Applied",
                  f"Temperature set to {fmt_num(temperature)}°C by '{name}' schedule.",
                  data={"name": name, "temperature": temperature})

def schedule_added(name: str) -> Notice:
    return Notice("schedule-added", "Schedule Added", f"'{name}' schedule created.", data={"name": name})

def schedule_updated(name: str) -> Notice:
    return Notice("schedule-updated", "Schedule Updated", f"'{name}' schedule modified.", data={"name": name})

def schedule_deleted(name: str) -> Notice:
    return Notice("schedule-deleted", "Schedule Deleted", f"'{name}' schedule removed.",
                  destructive=True, data={"name": name})

def weather_fetched(temperature: float, humidity: float, location: str) -> Notice:
    return Notice("weather-fetched", "Live Weather Fetched",
                  f"Temp: {fmt_num(temperature)}°C, Hum: {fmt_num(humidity)}% ({location})",
                  data={"temperature": temperature, "humidity": humidity, "location": location})

def weather_error(message: str, title: str = "Error Fetching Weather") -> Notice:
    return Notice("weather-error", title, message, destructive=True, data={"message": message})

def already_at_target() -> Notice:
    return Notice("already-at-target", "Already at Target",
                  "Current temperature is already at the desired temperature.")

def simulation_unavailable(reason: str) -> Notice:
    return Notice("simulation-unavailable", "Simulation Unavailable", reason, data={"reason": reason})

def demo_reset() -> Notice:
    return Notice("demo-reset", "Demo Reset", "All values reset to defaults.")
