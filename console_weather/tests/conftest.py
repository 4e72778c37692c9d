"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from console_weather.cache.store import CacheStore
from console_weather.models.weather import WeatherSnapshot

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def forecast_bytes() -> bytes:
    """Raw Open-Meteo response with current, daily and hourly blocks."""
    return (FIXTURE_DIR / "open_meteo_forecast.json").read_bytes()


@pytest.fixture
def current_only_bytes() -> bytes:
    """Raw imperial Open-Meteo response with only current conditions."""
    return (FIXTURE_DIR / "open_meteo_current_only.json").read_bytes()


@pytest.fixture
def snapshot(forecast_bytes: bytes) -> WeatherSnapshot:
    return WeatherSnapshot.model_validate_json(forecast_bytes)


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """An isolated cache directory that does not exist yet."""
    return tmp_path / "cache" / "weather-cache"


@pytest.fixture
def cache_store(cache_dir: Path) -> CacheStore:
    return CacheStore(cache_dir)


@pytest.fixture
def config_yaml_path(tmp_path: Path, cache_dir: Path) -> Path:
    """Write a minimal valid preferences YAML and return its path."""
    data = {
        "location": "New York",
        "units": "metric",
        "use_colors": False,
        "cache": {"directory": str(cache_dir)},
    }
    path = tmp_path / "weather_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
