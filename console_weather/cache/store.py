"""File-backed cache of forecast snapshots with a fixed freshness window."""

import contextlib
import logging
import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

from pydantic import ValidationError

from console_weather.models.common import utc_now
from console_weather.models.weather import CacheEntry, WeatherSnapshot

logger = logging.getLogger(__name__)

DEFAULT_FRESHNESS = timedelta(hours=1)


class CacheError(Exception):
    """Base class for cache store failures."""


class MalformedPayloadError(CacheError):
    """Payload does not decode into a WeatherSnapshot."""


class CacheWriteError(CacheError):
    """Cache directory or file could not be written."""


class CacheStore:
    """One JSON file per key under ``cache_dir``.

    No locking: concurrent writers to the same key race and the last
    ``os.replace`` wins.
    """

    def __init__(
        self, cache_dir: str | Path, freshness: timedelta = DEFAULT_FRESHNESS
    ):
        self.cache_dir = Path(cache_dir)
        self.freshness = freshness

    def path_for(self, key: str) -> Path:
        return self.cache_dir / f"{key}.json"

    def lookup(
        self, key: str, now: datetime | None = None
    ) -> WeatherSnapshot | None:
        """Return the cached snapshot for ``key`` if present and fresh.

        Missing, undecodable and stale entries all return None.
        """
        if now is None:
            now = utc_now()
        path = self.path_for(key)
        try:
            raw = path.read_bytes()
        except OSError:
            logger.debug("Cache miss for %s", key)
            return None

        try:
            entry = CacheEntry.model_validate_json(raw)
        except ValidationError:
            logger.debug("Ignoring undecodable cache file %s", path)
            return None

        age = now - entry.timestamp
        if age > self.freshness:
            logger.debug(
                "Cache entry %s is stale (%.0fs old)", key, age.total_seconds()
            )
            return None

        logger.info("Cache hit for %s", key)
        return entry.data

    def store(
        self, key: str, raw_payload: bytes, now: datetime | None = None
    ) -> WeatherSnapshot:
        """Validate ``raw_payload`` and persist it with a timestamp.

        Raises MalformedPayloadError before touching disk if the payload is
        not a valid snapshot, and CacheWriteError if it cannot be written.
        Returns the decoded snapshot.
        """
        snapshot = decode_snapshot(raw_payload)
        entry = CacheEntry(timestamp=now or utc_now(), data=snapshot)
        body = entry.model_dump_json(by_alias=True)

        path = self.path_for(key)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            _atomic_write(path, body)
        except OSError as e:
            raise CacheWriteError(f"could not write {path}: {e}") from e

        logger.debug("Stored %s (%d bytes)", path, len(body))
        return snapshot


def decode_snapshot(raw_payload: bytes) -> WeatherSnapshot:
    """Decode a forecast response body, raising MalformedPayloadError."""
    try:
        return WeatherSnapshot.model_validate_json(raw_payload)
    except ValidationError as e:
        raise MalformedPayloadError(
            f"payload is not a valid weather snapshot: {e}"
        ) from e


def _atomic_write(path: Path, body: str) -> None:
    tmp = tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=path.parent, suffix=".tmp", delete=False
    )
    try:
        with tmp:
            tmp.write(body)
        os.replace(tmp.name, path)
    except OSError:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp.name)
        raise
