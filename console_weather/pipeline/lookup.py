"""Weather lookup: serve from the disk cache, otherwise fetch and cache."""

import logging
from dataclasses import dataclass

from console_weather.cache.keys import generate_cache_key
from console_weather.cache.store import CacheStore, CacheWriteError, decode_snapshot
from console_weather.ingest.open_meteo_client import OpenMeteoClient
from console_weather.models.common import UnitSystem
from console_weather.models.weather import WeatherSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupResult:
    snapshot: WeatherSnapshot
    from_cache: bool
    cache_error: str | None = None


class WeatherLookup:
    def __init__(self, client: OpenMeteoClient, cache: CacheStore):
        self.client = client
        self.cache = cache

    def get(
        self,
        latitude: float,
        longitude: float,
        want_daily: bool,
        want_hourly: bool,
        unit_system: UnitSystem,
    ) -> LookupResult:
        """Return a snapshot for the request, from cache when fresh.

        A payload that fails to decode raises MalformedPayloadError. A cache
        write failure is logged and reported on the result, never raised.
        """
        key = generate_cache_key(
            latitude, longitude, want_daily, want_hourly, unit_system
        )
        cached = self.cache.lookup(key)
        if cached is not None:
            return LookupResult(snapshot=cached, from_cache=True)

        raw = self.client.fetch_forecast(
            latitude, longitude, want_daily, want_hourly, unit_system
        )
        snapshot = decode_snapshot(raw)
        try:
            self.cache.store(key, raw)
        except CacheWriteError as e:
            logger.warning("Failed to cache weather data: %s", e)
            return LookupResult(snapshot=snapshot, from_cache=False, cache_error=str(e))
        return LookupResult(snapshot=snapshot, from_cache=False)
