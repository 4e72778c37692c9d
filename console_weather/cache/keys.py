"""Cache key generation for forecast requests."""

import hashlib


def generate_cache_key(
    latitude: float,
    longitude: float,
    want_daily: bool,
    want_hourly: bool,
    unit_system: str,
) -> str:
    """Generate a deterministic cache key for a forecast request.

    Coordinates are rounded to 4 decimal places (~11m), so locations that
    differ only beyond that share a key.
    """
    raw = (
        f"{latitude:.4f}-{longitude:.4f}"
        f"-d{str(want_daily).lower()}-h{str(want_hourly).lower()}-u{unit_system}"
    )
    return hashlib.md5(raw.encode(), usedforsecurity=False).hexdigest()
