"""CLI entry point for the console weather tool."""

import argparse
import logging
import sys
from pathlib import Path

import httpx

from console_weather.cache.store import CacheStore, MalformedPayloadError
from console_weather.config.defaults import default_cache_dir, default_config_path
from console_weather.config.loader import load_config, save_config
from console_weather.config.schema import WeatherConfig
from console_weather.display.formatters import (
    format_saved_settings,
    format_table,
    format_text,
)
from console_weather.ingest.open_meteo_client import (
    LocationNotFoundError,
    OpenMeteoClient,
)
from console_weather.models.common import DisplayMode, UnitSystem
from console_weather.pipeline.lookup import WeatherLookup

APP_NAME = "Weather Console"
APP_VERSION = "1.0.0"

EXAMPLES = """\
examples:
  show only current weather for the default location:
    wgo
  7-day forecast for a different location in imperial units:
    wgo --daily --zip 10001 --units imperial
  hourly forecast as a colored table, saving these settings:
    wgo --hourly --table --color --save
  save imperial as the default unit system:
    wgo --units imperial --save

configuration:
  preferences are stored in: {config}
  weather data is cached for one hour in: {cache}
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wgo",
        description=f"{APP_NAME} v{APP_VERSION} - command line weather information",
        epilog=EXAMPLES.format(
            config=default_config_path(), cache=default_cache_dir()
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument(
        "--help", "-?", action="help", help="Show this help message"
    )
    parser.add_argument(
        "--daily", "-d", action="store_true", help="Show 7-day forecast"
    )
    parser.add_argument(
        "--hourly", "-H", action="store_true",
        help="Show hourly forecast for the next 24 hours",
    )
    parser.add_argument(
        "--zip", "-z", metavar="LOCATION", default="",
        help="Override default location (ZIP code or city name)",
    )
    parser.add_argument(
        "--table", "-t", action="store_true", help="Display output as a table"
    )
    parser.add_argument(
        "--text", "-T", action="store_true", help="Display output as text"
    )
    parser.add_argument(
        "--units", "-u", metavar="SYSTEM", default="",
        help="Use specific units (metric or imperial)",
    )
    # Unset / True / False; the config value applies only when unset
    parser.add_argument(
        "--color", "-c", dest="use_colors", action="store_const", const=True,
        default=None, help="Enable colored output",
    )
    parser.add_argument(
        "--no-color", "-nc", dest="use_colors", action="store_const",
        const=False, help="Disable colored output",
    )
    parser.add_argument(
        "--save", "-s", action="store_true",
        help="Save current settings as defaults",
    )
    parser.add_argument(
        "--config", default=None, help="Preferences YAML path"
    )
    parser.add_argument(
        "--verbose", "-v", action="count", default=0,
        help="Log cache and API activity (-vv for debug)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {APP_VERSION}"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = Path(args.config) if args.config else default_config_path()
    config = load_config(config_path)

    try:
        return _cmd_weather(config, config_path, args)
    except (LocationNotFoundError, MalformedPayloadError, httpx.HTTPError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def resolve_display_mode(args: argparse.Namespace, config: WeatherConfig) -> DisplayMode:
    """--table or --text wins when given alone; both or neither defer to config."""
    if args.table and not args.text:
        return DisplayMode.TABLE
    if args.text and not args.table:
        return DisplayMode.TEXT
    return config.display_mode


def resolve_units(args: argparse.Namespace, config: WeatherConfig) -> UnitSystem:
    if args.units:
        return UnitSystem.parse(args.units)
    return config.units


def resolve_colors(args: argparse.Namespace, config: WeatherConfig) -> bool:
    if args.use_colors is not None:
        return args.use_colors
    return config.use_colors


def _prompt_location() -> str:
    try:
        return input("Enter your location (ZIP/postal code or city name): ").strip()
    except EOFError:
        return ""


def _cmd_weather(config: WeatherConfig, config_path: Path, args) -> int:
    display_mode = resolve_display_mode(args, config)
    units = resolve_units(args, config)
    use_colors = resolve_colors(args, config)

    location = args.zip or config.location or _prompt_location()

    if args.save:
        update: dict = {}
        if location and not location.startswith("-"):
            update["location"] = location
        if args.table or args.text:
            update["display_mode"] = display_mode
        if args.units:
            update["units"] = units
        if args.use_colors is not None:
            update["use_colors"] = args.use_colors
        config = config.model_copy(update=update)
        try:
            save_config(config, config_path)
        except OSError as e:
            print(f"Error: error saving config: {e}", file=sys.stderr)
            return 1
        print(format_saved_settings(config))

    if not location:
        print("Error: no location given", file=sys.stderr)
        return 1

    client = OpenMeteoClient(timeout=config.http.timeout_seconds)
    cache = CacheStore(config.cache.path, freshness=config.cache.freshness)

    geo = client.geocode(location)
    print(f"Location detected: {geo.name}, {geo.country}")

    result = WeatherLookup(client, cache).get(
        geo.latitude, geo.longitude, args.daily, args.hourly, units
    )
    if result.from_cache:
        print("Using cached weather data")

    render = format_table if display_mode == DisplayMode.TABLE else format_text
    print(render(result.snapshot, args.daily, args.hourly, units, use_colors))
    return 0
