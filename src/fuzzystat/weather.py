from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict
import requests
from fuzzystat.exceptions import WeatherError

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

log = logging.getLogger(__name__)

@dataclass(frozen=True)
class WeatherReading:
    temperature: float
    humidity: float
    fetched_location_name: str

class OpenMeteoClient:
    """
    Current temperature/humidity for a city name via Open-Meteo (no API key).
    Every failure is raised as WeatherError with a message fit for the user.
    """
    def __init__(self, timeout_s: float = 5.0, geocoding_url: str = GEOCODING_URL,
                 forecast_url: str = FORECAST_URL, session: requests.Session | None = None):
        self.timeout_s = timeout_s
        self.geocoding_url = geocoding_url
        self.forecast_url = forecast_url
        self._http = session or requests

    def __call__(self, location: str) -> WeatherReading:
        return self.fetch(location)

    def fetch(self, location: str) -> WeatherReading:
        name = (location or "").strip()
        if not name:
            raise WeatherError("City name cannot be empty.")
        place = self._geocode(name)
        current = self._get(self.forecast_url, {
            "latitude": place["latitude"],
            "longitude": place["longitude"],
            "current": "temperature_2m,relative_humidity_2m",
            "timezone": "auto",
        }).get("current") or {}
        temp = current.get("temperature_2m"); rh = current.get("relative_humidity_2m")
        if temp is None or rh is None:
            raise WeatherError(f"Weather data for {name} is missing temperature or humidity.")
        label = place.get("name") or name
        if place.get("country"):
            label = f"{label}, {place['country']}"
        log.info("Fetched %s: %.1fC %.0f%%", label, float(temp), float(rh))
        return WeatherReading(temperature=float(temp), humidity=float(rh), fetched_location_name=label)

    def _geocode(self, name: str) -> Dict[str, Any]:
        results = self._get(self.geocoding_url, {"name": name, "count": 1, "language": "en", "format": "json"}).get("results") or []
        if not results:
            raise WeatherError(f"Could not find location: {name}")
        place = results[0]
        if place.get("latitude") is None or place.get("longitude") is None:
            raise WeatherError(f"Location {name} has no coordinates.")
        return place

    def _get(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            r = self._http.get(url, params=params, timeout=self.timeout_s)
        except requests.RequestException as e:
            log.warning("Request to %s failed: %s", url, e)
            raise WeatherError(f"Weather service unreachable: {e}") from e
        if not r.ok:
            log.warning("Open-Meteo HTTP %s: %s", r.status_code, r.text[:200])
            raise WeatherError(f"Weather service returned HTTP {r.status_code}.")
        try:
            return r.json() or {}
        except ValueError as e:
            raise WeatherError("Weather service returned an invalid response.") from e
