"""Tests for the file-backed snapshot cache."""

import json
import tempfile
from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from console_weather.cache.store import (
    DEFAULT_FRESHNESS,
    CacheStore,
    CacheWriteError,
    MalformedPayloadError,
)
from console_weather.models.weather import WeatherSnapshot

KEY = "0123456789abcdef0123456789abcdef"
NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=UTC)


class TestStore:
    def test_creates_missing_directory(
        self, cache_store: CacheStore, cache_dir: Path, forecast_bytes: bytes
    ):
        assert not cache_dir.exists()
        cache_store.store(KEY, forecast_bytes, now=NOW)
        assert (cache_dir / f"{KEY}.json").is_file()

    def test_file_layout(self, cache_store: CacheStore, forecast_bytes: bytes):
        cache_store.store(KEY, forecast_bytes, now=NOW)
        body = json.loads(cache_store.path_for(KEY).read_text())
        assert set(body) == {"timestamp", "data"}
        assert datetime.fromisoformat(body["timestamp"]) == NOW
        assert body["data"]["current_weather"]["temperature"] == 16.4
        assert body["data"]["daily"]["temperature_2m_max"][0] == 18.2

    def test_returns_decoded_snapshot(
        self, cache_store: CacheStore, forecast_bytes: bytes, snapshot: WeatherSnapshot
    ):
        assert cache_store.store(KEY, forecast_bytes, now=NOW) == snapshot

    def test_malformed_payload_rejected_before_write(
        self, cache_store: CacheStore, cache_dir: Path
    ):
        with pytest.raises(MalformedPayloadError):
            cache_store.store(KEY, b"<html>bad gateway</html>", now=NOW)
        assert not cache_dir.exists()

    def test_misaligned_series_rejected(self, cache_store: CacheStore):
        payload = {
            "current_weather": {
                "temperature": 1.0, "windspeed": 2.0, "weathercode": 0,
                "time": "2026-10-18T12:00",
            },
            "daily": {
                "time": ["2026-10-18", "2026-10-19"],
                "weathercode": [0],
                "temperature_2m_max": [1.0, 2.0],
                "temperature_2m_min": [0.0, 1.0],
                "precipitation_sum": [0.0, 0.0],
            },
        }
        with pytest.raises(MalformedPayloadError):
            cache_store.store(KEY, json.dumps(payload).encode(), now=NOW)

    def test_malformed_payload_leaves_existing_entry(
        self, cache_store: CacheStore, forecast_bytes: bytes
    ):
        cache_store.store(KEY, forecast_bytes, now=NOW)
        before = cache_store.path_for(KEY).read_bytes()

        with pytest.raises(MalformedPayloadError):
            cache_store.store(KEY, b'{"current_weather": {}}', now=NOW)

        assert cache_store.path_for(KEY).read_bytes() == before
        assert cache_store.lookup(KEY, now=NOW) is not None

    def test_overwrites_previous_entry(
        self, cache_store: CacheStore, forecast_bytes: bytes, current_only_bytes: bytes
    ):
        cache_store.store(KEY, forecast_bytes, now=NOW)
        cache_store.store(KEY, current_only_bytes, now=NOW + timedelta(minutes=5))
        result = cache_store.lookup(KEY, now=NOW + timedelta(minutes=5))
        assert result is not None
        assert result.daily is None
        assert result.current.temperature == 55.4

    def test_write_failure_raises_cache_write_error(
        self, tmp_path: Path, forecast_bytes: bytes
    ):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        store = CacheStore(blocker / "cache")
        with pytest.raises(CacheWriteError):
            store.store(KEY, forecast_bytes, now=NOW)

    def test_replace_failure_leaves_no_temp_file(
        self, cache_store: CacheStore, cache_dir: Path, forecast_bytes: bytes
    ):
        with patch("console_weather.cache.store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(CacheWriteError):
                cache_store.store(KEY, forecast_bytes, now=NOW)
        assert list(cache_dir.iterdir()) == []

    def test_write_failure_leaves_no_temp_file(
        self, cache_store: CacheStore, cache_dir: Path, forecast_bytes: bytes
    ):
        real_tempfile = tempfile.NamedTemporaryFile

        def full_disk(*args, **kwargs):
            tmp = real_tempfile(*args, **kwargs)
            tmp.write = MagicMock(side_effect=OSError("No space left on device"))
            return tmp

        with patch.object(tempfile, "NamedTemporaryFile", side_effect=full_disk):
            with pytest.raises(CacheWriteError):
                cache_store.store(KEY, forecast_bytes, now=NOW)
        assert list(cache_dir.iterdir()) == []

    def test_write_failure_keeps_previous_entry(
        self, cache_store: CacheStore, forecast_bytes: bytes, current_only_bytes: bytes
    ):
        cache_store.store(KEY, forecast_bytes, now=NOW)
        before = cache_store.path_for(KEY).read_bytes()
        with patch("console_weather.cache.store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(CacheWriteError):
                cache_store.store(KEY, current_only_bytes, now=NOW)
        assert cache_store.path_for(KEY).read_bytes() == before


class TestLookup:
    def test_missing_file(self, cache_store: CacheStore):
        assert cache_store.lookup(KEY, now=NOW) is None

    def test_round_trip(
        self, cache_store: CacheStore, forecast_bytes: bytes, snapshot: WeatherSnapshot
    ):
        cache_store.store(KEY, forecast_bytes, now=NOW)
        result = cache_store.lookup(KEY, now=NOW)
        assert result == snapshot
        assert result.daily is not None and result.hourly is not None
        assert len(result.daily.time) == len(result.daily.temperature_max) == 7
        assert len(result.hourly.time) == len(result.hourly.weather_code) == 4
        assert result.hourly.precipitation == [0.0, 0.0, 0.1, 0.4]

    def test_round_trip_with_real_clock(
        self, cache_store: CacheStore, forecast_bytes: bytes, snapshot: WeatherSnapshot
    ):
        cache_store.store(KEY, forecast_bytes)
        assert cache_store.lookup(KEY) == snapshot

    def test_within_window(self, cache_store: CacheStore, forecast_bytes: bytes):
        cache_store.store(KEY, forecast_bytes, now=NOW)
        later = NOW + timedelta(minutes=59)
        assert cache_store.lookup(KEY, now=later) is not None

    def test_boundary_exact(self, cache_store: CacheStore, forecast_bytes: bytes):
        cache_store.store(KEY, forecast_bytes, now=NOW)
        # Exactly one hour old = still fresh (> window is stale)
        assert cache_store.lookup(KEY, now=NOW + DEFAULT_FRESHNESS) is not None

    def test_stale(self, cache_store: CacheStore, forecast_bytes: bytes):
        cache_store.store(KEY, forecast_bytes, now=NOW)
        later = NOW + DEFAULT_FRESHNESS + timedelta(seconds=1)
        assert cache_store.lookup(KEY, now=later) is None

    def test_custom_freshness(self, cache_dir: Path, forecast_bytes: bytes):
        store = CacheStore(cache_dir, freshness=timedelta(minutes=10))
        store.store(KEY, forecast_bytes, now=NOW)
        assert store.lookup(KEY, now=NOW + timedelta(minutes=11)) is None

    def test_undecodable_file(self, cache_store: CacheStore, cache_dir: Path):
        cache_dir.mkdir(parents=True)
        cache_store.path_for(KEY).write_text("{not json")
        assert cache_store.lookup(KEY, now=NOW) is None

    def test_entry_missing_data(self, cache_store: CacheStore, cache_dir: Path):
        cache_dir.mkdir(parents=True)
        cache_store.path_for(KEY).write_text(json.dumps({"timestamp": NOW.isoformat()}))
        assert cache_store.lookup(KEY, now=NOW) is None

    def test_naive_timestamp_treated_as_utc(
        self, cache_store: CacheStore, cache_dir: Path, forecast_bytes: bytes
    ):
        cache_dir.mkdir(parents=True)
        entry = {
            "timestamp": "2026-10-18T11:30:00",
            "data": json.loads(forecast_bytes),
        }
        cache_store.path_for(KEY).write_text(json.dumps(entry))
        assert cache_store.lookup(KEY, now=NOW) is not None

    def test_keys_are_independent(self, cache_store: CacheStore, forecast_bytes: bytes):
        cache_store.store(KEY, forecast_bytes, now=NOW)
        assert cache_store.lookup("f" * 32, now=NOW) is None

    def test_round_trip_with_null_values(
        self, cache_store: CacheStore, forecast_bytes: bytes
    ):
        payload = json.loads(forecast_bytes)
        payload["daily"]["precipitation_sum"][-1] = None
        payload["daily"]["temperature_2m_max"][0] = None
        payload["hourly"]["weathercode"][2] = None

        stored = cache_store.store(KEY, json.dumps(payload).encode(), now=NOW)
        result = cache_store.lookup(KEY, now=NOW)

        assert result == stored
        assert result.daily.precipitation_sum[-1] is None
        assert result.daily.temperature_max[0] is None
        assert result.hourly.weather_code[2] is None
        assert len(result.daily.time) == len(result.daily.precipitation_sum) == 7
