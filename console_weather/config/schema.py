"""Pydantic v2 schema for user preferences and tool settings."""

from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from console_weather.config.defaults import (
    DEFAULT_CACHE_TTL_MINUTES,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    default_cache_dir,
)
from console_weather.models.common import DisplayMode, UnitSystem


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    directory: str | None = None
    ttl_minutes: int = Field(default=DEFAULT_CACHE_TTL_MINUTES, ge=0)

    @property
    def path(self) -> Path:
        return Path(self.directory) if self.directory else default_cache_dir()

    @property
    def freshness(self) -> timedelta:
        return timedelta(minutes=self.ttl_minutes)


class HttpConfig(BaseModel):
    model_config = {"extra": "forbid"}

    timeout_seconds: float = Field(default=DEFAULT_HTTP_TIMEOUT_SECONDS, gt=0.0)


class WeatherConfig(BaseModel):
    model_config = {"extra": "forbid"}

    location: str = ""
    display_mode: DisplayMode = DisplayMode.TEXT
    units: UnitSystem = UnitSystem.METRIC
    use_colors: bool = True
    cache: CacheConfig = CacheConfig()
    http: HttpConfig = HttpConfig()

    @field_validator("units", mode="before")
    @classmethod
    def _fallback_units(cls, value):
        return UnitSystem.parse(value if isinstance(value, str) else None)

    @field_validator("display_mode", mode="before")
    @classmethod
    def _fallback_display_mode(cls, value):
        if not value:
            return DisplayMode.TEXT
        return value
