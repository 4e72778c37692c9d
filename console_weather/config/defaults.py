"""Default locations for the preferences file and the forecast cache."""

import tempfile
from pathlib import Path

CONFIG_DIR_NAME = ".weather_config"
CONFIG_FILE_NAME = "weather_config.yaml"
CACHE_DIR_NAME = "weather-cache"
DEFAULT_CACHE_TTL_MINUTES = 60
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0


def default_config_path() -> Path:
    try:
        home = Path.home()
    except RuntimeError:
        return Path(".") / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    return home / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def default_cache_dir() -> Path:
    """Shared by every invocation on this machine."""
    return Path(tempfile.gettempdir()) / CACHE_DIR_NAME
