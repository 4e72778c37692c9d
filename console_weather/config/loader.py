"""YAML preferences loader and writer."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from console_weather.config.schema import WeatherConfig

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> WeatherConfig:
    """Load preferences from a YAML file.

    A missing, unreadable or invalid file yields the defaults.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return WeatherConfig()
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read config %s, using defaults: %s", path, e)
        return WeatherConfig()

    if not isinstance(raw, dict):
        logger.warning("Config %s is not a mapping, using defaults", path)
        return WeatherConfig()

    try:
        return WeatherConfig.model_validate(raw)
    except ValidationError as e:
        logger.warning("Invalid config %s, using defaults: %s", path, e)
        return WeatherConfig()


def save_config(config: WeatherConfig, path: str | Path) -> None:
    """Write preferences as YAML, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.model_dump(mode="json"), f, sort_keys=False)
