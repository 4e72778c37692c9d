"""Text and table renderers for weather snapshots."""

from datetime import date, datetime

from console_weather.config.schema import WeatherConfig
from console_weather.display.classifier import colorize_temperature
from console_weather.display.units import (
    precipitation_unit,
    temperature_unit,
    unit_system_name,
    wind_unit,
)
from console_weather.display.weather_codes import describe
from console_weather.models.common import UnitSystem
from console_weather.models.weather import WeatherSnapshot

HOURLY_LIMIT = 24
MISSING = "N/A"
CONDITION_WIDTH = 15


def format_text(
    snapshot: WeatherSnapshot,
    show_daily: bool,
    show_hourly: bool,
    unit_system: UnitSystem,
    use_colors: bool,
    today: date | None = None,
) -> str:
    """Plain text rendering, one fact per line."""
    temp = _TempFormatter(unit_system, use_colors)
    precip = precipitation_unit(unit_system)
    current = snapshot.current

    lines = ["Current Weather:", f"  Temperature: {temp(current.temperature)}"]
    high_low = _todays_high_low(snapshot, today)
    if high_low is not None:
        high, low = high_low
        lines.append(f"  High/Low: {temp(high)}/{temp(low)}")
    lines.append(f"  Wind Speed: {current.wind_speed:.1f} {wind_unit(unit_system)}")
    lines.append(f"  Time: {format_clock(current.time)}")
    lines.append(f"  Weather: {describe(current.weather_code)}")

    daily = snapshot.daily
    if show_daily and daily is not None and daily.time:
        lines += ["", "7-Day Forecast:"]
        for i, day in enumerate(daily.time):
            lines.append(
                f"  {format_day(day)}: {describe(daily.weather_code[i])}, "
                f"{temp(daily.temperature_min[i])} to {temp(daily.temperature_max[i])}, "
                f"Precipitation: {_amount(daily.precipitation_sum[i], precip)}"
            )

    hourly = snapshot.hourly
    if show_hourly and hourly is not None and hourly.time:
        lines += ["", "Hourly Forecast (next 24h):"]
        for i, ts in enumerate(hourly.time[:HOURLY_LIMIT]):
            lines.append(
                f"  {format_clock(ts)}: {describe(hourly.weather_code[i])}, "
                f"{temp(hourly.temperature[i])}, "
                f"Precipitation: {_amount(hourly.precipitation[i], precip)}"
            )

    return "\n".join(lines)


def format_table(
    snapshot: WeatherSnapshot,
    show_daily: bool,
    show_hourly: bool,
    unit_system: UnitSystem,
    use_colors: bool,
    today: date | None = None,
) -> str:
    """Boxed table rendering. Column widths ignore ANSI color codes."""
    temp = _TempFormatter(unit_system, use_colors)
    precip = precipitation_unit(unit_system)
    current = snapshot.current

    high, low = _todays_high_low(snapshot, today) or (
        current.temperature,
        current.temperature,
    )
    sections = [
        "Current Weather:",
        _table(
            ["Temperature", "High/Low", "Wind", "Time", "Condition"],
            [11, 16, 12, 8, CONDITION_WIDTH],
            [[
                temp.cell(current.temperature),
                temp.pair_cell(high, low),
                _plain(f"{current.wind_speed:.1f} {wind_unit(unit_system)}"),
                _plain(format_clock(current.time)),
                _plain(truncate(describe(current.weather_code), CONDITION_WIDTH)),
            ]],
        ),
    ]

    daily = snapshot.daily
    if show_daily and daily is not None and daily.time:
        rows = [
            [
                _plain(format_day(day)),
                _plain(truncate(describe(daily.weather_code[i]), CONDITION_WIDTH)),
                temp.cell(daily.temperature_min[i]),
                temp.cell(daily.temperature_max[i]),
                _plain(_amount(daily.precipitation_sum[i], precip)),
            ]
            for i, day in enumerate(daily.time)
        ]
        sections += [
            "",
            "7-Day Forecast:",
            _table(
                ["Date", "Condition", "Min Temp", "Max Temp", "Precipitation"],
                [10, CONDITION_WIDTH, 12, 12, 13],
                rows,
            ),
        ]

    hourly = snapshot.hourly
    if show_hourly and hourly is not None and hourly.time:
        rows = [
            [
                _plain(format_clock(ts)),
                _plain(truncate(describe(hourly.weather_code[i]), CONDITION_WIDTH)),
                temp.cell(hourly.temperature[i]),
                _plain(_amount(hourly.precipitation[i], precip)),
            ]
            for i, ts in enumerate(hourly.time[:HOURLY_LIMIT])
        ]
        sections += [
            "",
            "Hourly Forecast (next 24h):",
            _table(
                ["Time", "Condition", "Temperature", "Precipitation"],
                [5, CONDITION_WIDTH, 12, 13],
                rows,
            ),
        ]

    return "\n".join(sections)


def format_saved_settings(config: WeatherConfig) -> str:
    return "\n".join([
        "All settings saved:",
        f"- Location: {config.location}",
        f"- Display mode: {config.display_mode}",
        f"- Unit system: {unit_system_name(config.units)}",
        f"- Colors: {config.use_colors}",
    ])


def format_clock(timestamp: str) -> str:
    """Render an Open-Meteo ``YYYY-MM-DDTHH:MM`` timestamp as ``HH:MM``."""
    try:
        return datetime.strptime(timestamp, "%Y-%m-%dT%H:%M").strftime("%H:%M")
    except ValueError:
        return timestamp


def format_day(day: str) -> str:
    """Render ``YYYY-MM-DD`` as e.g. ``Mon Jan 2``."""
    try:
        d = date.fromisoformat(day)
    except ValueError:
        return day
    return f"{d:%a %b} {d.day}"


def _amount(value: float | None, unit: str) -> str:
    if value is None:
        return MISSING
    return f"{value:.1f}{unit}"


def truncate(s: str, max_len: int) -> str:
    if len(s) <= max_len:
        return s
    return s[: max_len - 3] + "..."


def _todays_high_low(
    snapshot: WeatherSnapshot, today: date | None
) -> tuple[float | None, float | None] | None:
    daily = snapshot.daily
    if daily is None:
        return None
    key = (today or date.today()).isoformat()
    for i, day in enumerate(daily.time):
        if day == key:
            return daily.temperature_max[i], daily.temperature_min[i]
    return None


# A table cell: (rendered text, visible length)
_Cell = tuple[str, int]


def _plain(text: str) -> _Cell:
    return text, len(text)


class _TempFormatter:
    def __init__(self, unit_system: UnitSystem, use_colors: bool):
        self.unit_system = unit_system
        self.unit = temperature_unit(unit_system)
        self.use_colors = use_colors

    def __call__(self, value: float | None) -> str:
        if self.use_colors and value is not None:
            return colorize_temperature(value, self.unit_system)
        return _amount(value, self.unit)

    def cell(self, value: float | None) -> _Cell:
        return self(value), len(_amount(value, self.unit))

    def pair_cell(self, high: float | None, low: float | None) -> _Cell:
        visible = len(f"{_amount(high, self.unit)}/{_amount(low, self.unit)}")
        return f"{self(high)}/{self(low)}", visible


def _table(headers: list[str], widths: list[int], rows: list[list[_Cell]]) -> str:
    widths = [max(w, len(h)) for w, h in zip(widths, headers)]
    header = _row([_plain(h) for h in headers], widths)
    border = "+" + "-" * (len(header) - 2) + "+"
    lines = [border, header, border]
    lines += [_row(r, widths) for r in rows]
    lines.append(border)
    return "\n".join(lines)


def _row(cells: list[_Cell], widths: list[int]) -> str:
    parts = [
        text + " " * max(0, width - visible)
        for (text, visible), width in zip(cells, widths)
    ]
    return "| " + " | ".join(parts) + " |"
