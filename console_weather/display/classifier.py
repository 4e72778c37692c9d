"""Temperature severity tiers and their terminal colors."""

from enum import StrEnum

from console_weather.display.units import temperature_unit, to_celsius
from console_weather.models.common import UnitSystem


class SeverityTier(StrEnum):
    VERY_COLD = "very_cold"
    COLD = "cold"
    COOL = "cool"
    PLEASANT = "pleasant"
    WARM = "warm"
    HOT = "hot"
    VERY_HOT = "very_hot"


# (exclusive upper bound in °C, tier); anything >= 35 is VERY_HOT
TIER_THRESHOLDS: list[tuple[float, SeverityTier]] = [
    (-10.0, SeverityTier.VERY_COLD),
    (0.0, SeverityTier.COLD),
    (15.0, SeverityTier.COOL),
    (25.0, SeverityTier.PLEASANT),
    (30.0, SeverityTier.WARM),
    (35.0, SeverityTier.HOT),
]

ANSI_RESET = "\033[0m"

TIER_COLORS: dict[SeverityTier, str] = {
    SeverityTier.VERY_COLD: "\033[34m",  # blue
    SeverityTier.COLD: "\033[36m",  # cyan
    SeverityTier.COOL: "\033[37m",  # white
    SeverityTier.PLEASANT: "\033[32m",  # green
    SeverityTier.WARM: "\033[33m",  # yellow
    SeverityTier.HOT: "\033[35m",  # magenta
    SeverityTier.VERY_HOT: "\033[31m",  # red
}


def classify(celsius: float) -> SeverityTier:
    """Bucket a Celsius temperature into a severity tier."""
    for upper, tier in TIER_THRESHOLDS:
        if celsius < upper:
            return tier
    return SeverityTier.VERY_HOT


def colorize_temperature(value: float, unit_system: UnitSystem | str) -> str:
    """Format a temperature with its unit, wrapped in the tier's ANSI color."""
    color = TIER_COLORS[classify(to_celsius(value, unit_system))]
    return f"{color}{value:.1f}{temperature_unit(unit_system)}{ANSI_RESET}"
