"""Open-Meteo weather payload models.

Field aliases follow the Open-Meteo JSON names so a raw response body
validates directly and re-encodes (``by_alias=True``) to the same shape.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class CurrentWeather(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temperature: float
    wind_speed: float = Field(alias="windspeed")
    weather_code: int = Field(alias="weathercode")
    time: str


class _ParallelSeries(BaseModel):
    """Base for blocks of index-aligned sequences.

    Open-Meteo sends null for values a model has no data for.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def _check_aligned(self):
        lengths = {name: len(getattr(self, name)) for name in type(self).model_fields}
        if len(set(lengths.values())) > 1:
            raise ValueError(f"{type(self).__name__} sequences differ in length: {lengths}")
        return self


class DailySeries(_ParallelSeries):
    time: list[str] = []
    weather_code: list[int | None] = Field(default=[], alias="weathercode")
    temperature_max: list[float | None] = Field(default=[], alias="temperature_2m_max")
    temperature_min: list[float | None] = Field(default=[], alias="temperature_2m_min")
    precipitation_sum: list[float | None] = []


class HourlySeries(_ParallelSeries):
    time: list[str] = []
    temperature: list[float | None] = Field(default=[], alias="temperature_2m")
    precipitation: list[float | None] = []
    weather_code: list[int | None] = Field(default=[], alias="weathercode")


class WeatherSnapshot(BaseModel):
    """One decoded forecast response: current plus optional daily/hourly."""

    model_config = ConfigDict(populate_by_name=True)

    current: CurrentWeather = Field(alias="current_weather")
    daily: DailySeries | None = None
    hourly: HourlySeries | None = None


class CacheEntry(BaseModel):
    timestamp: datetime
    data: WeatherSnapshot

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


@dataclass(frozen=True)
class GeoLocation:
    latitude: float
    longitude: float
    name: str
    country: str
