"""Open-Meteo geocoding and forecast API client.

Single-attempt requests with an explicit timeout; callers decide what to
do with failures.
"""

import logging

import httpx

from console_weather.models.common import UnitSystem
from console_weather.models.weather import GeoLocation

logger = logging.getLogger(__name__)

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
DEFAULT_USER_AGENT = "console-weather/1.0.0"

DAILY_FIELDS = "weathercode,temperature_2m_max,temperature_2m_min,precipitation_sum"
HOURLY_FIELDS = "temperature_2m,precipitation,weathercode"
HOURLY_FORECAST_HOURS = 24


class LocationNotFoundError(Exception):
    """Geocoding returned no usable result."""


class OpenMeteoClient:
    def __init__(
        self,
        forecast_url: str = FORECAST_URL,
        geocoding_url: str = GEOCODING_URL,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.forecast_url = forecast_url
        self.geocoding_url = geocoding_url
        self.timeout = timeout
        self.user_agent = user_agent

    def geocode(self, location: str) -> GeoLocation:
        """Resolve a postal code or place name to coordinates (first match)."""
        params = {"name": location, "count": 1}
        resp = self._get(self.geocoding_url, params)
        try:
            results = resp.json().get("results") or []
        except ValueError as e:
            raise LocationNotFoundError(f"location not found: {location}") from e
        if not results:
            raise LocationNotFoundError(f"location not found: {location}")

        first = results[0]
        return GeoLocation(
            latitude=float(first["latitude"]),
            longitude=float(first["longitude"]),
            name=first.get("name", location),
            country=first.get("country", ""),
        )

    def fetch_forecast(
        self,
        latitude: float,
        longitude: float,
        want_daily: bool,
        want_hourly: bool,
        unit_system: UnitSystem,
    ) -> bytes:
        """Fetch current weather plus the requested series. Returns the raw body."""
        params: dict[str, str | float | int] = {
            "latitude": latitude,
            "longitude": longitude,
            "current_weather": "true",
        }
        if unit_system == UnitSystem.IMPERIAL:
            params["temperature_unit"] = "fahrenheit"
            params["windspeed_unit"] = "mph"
            params["precipitation_unit"] = "inch"
        if want_daily:
            params["daily"] = DAILY_FIELDS
        if want_hourly:
            params["hourly"] = HOURLY_FIELDS
            params["forecast_hours"] = HOURLY_FORECAST_HOURS
        if want_daily or want_hourly:
            # Series times and dates in the location's local time
            params["timezone"] = "auto"

        return self._get(self.forecast_url, params).content

    def _get(self, url: str, params: dict) -> httpx.Response:
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        try:
            resp = httpx.get(url, params=params, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
            return resp
        except httpx.HTTPStatusError as e:
            logger.error("Open-Meteo error for %s: %s", url, e)
            raise
        except httpx.RequestError as e:
            logger.error("Open-Meteo request failed for %s: %s", url, e)
            raise
