"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from enum import StrEnum


class UnitSystem(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"

    @classmethod
    def parse(cls, value: str | None) -> "UnitSystem":
        """Map a raw unit identifier to a UnitSystem.

        Empty or unrecognized values fall back to METRIC.
        """
        if not value:
            return cls.METRIC
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.METRIC


class DisplayMode(StrEnum):
    TEXT = "text"
    TABLE = "table"


def utc_now() -> datetime:
    return datetime.now(UTC)
