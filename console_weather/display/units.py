"""Display units per unit system and Fahrenheit-to-Celsius normalization."""

from console_weather.models.common import UnitSystem

# (temperature, wind speed, precipitation)
_UNITS: dict[UnitSystem, tuple[str, str, str]] = {
    UnitSystem.METRIC: ("°C", "km/h", "mm"),
    UnitSystem.IMPERIAL: ("°F", "mph", "in"),
}

_NAMES = {
    UnitSystem.METRIC: "Metric (°C, km/h, mm)",
    UnitSystem.IMPERIAL: "Imperial (°F, mph, in)",
}


def _units_for(unit_system: UnitSystem | str | None) -> tuple[str, str, str]:
    return _UNITS[UnitSystem.parse(unit_system)]


def temperature_unit(unit_system: UnitSystem | str | None) -> str:
    return _units_for(unit_system)[0]


def wind_unit(unit_system: UnitSystem | str | None) -> str:
    return _units_for(unit_system)[1]


def precipitation_unit(unit_system: UnitSystem | str | None) -> str:
    return _units_for(unit_system)[2]


def unit_system_name(unit_system: UnitSystem | str | None) -> str:
    return _NAMES[UnitSystem.parse(unit_system)]


def to_celsius(value: float, unit_system: UnitSystem | str | None) -> float:
    """Normalize a temperature in ``unit_system`` units to Celsius."""
    if UnitSystem.parse(unit_system) == UnitSystem.IMPERIAL:
        return (value - 32) * 5 / 9
    return value
