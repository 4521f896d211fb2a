"""CLI entry point for the surf conditions forecaster."""

import argparse
import logging
import sys
from pathlib import Path

from surf_conditions.config import load_credentials
from surf_conditions.errors import InvalidInput, LocationNotFound
from surf_conditions.forecast import ForecastService, parse_request
from surf_conditions.models import ForecastType
from surf_conditions.output import print_json, spot_table, write_forecast
from surf_conditions.registry import default_spots

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    # Quiet noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def forecast_command(args) -> int:
    """Generate a forecast for one location."""
    setup_logging(args.verbose)

    credentials = load_credentials()
    if not credentials.has_weather:
        logger.warning("OPENWEATHER_API_KEY not set - only registry spots can be geocoded")

    service = ForecastService(credentials)

    try:
        request = parse_request(args.location, args.type)
        response = service.forecast(request)
    except (InvalidInput, LocationNotFound) as e:
        logger.error(str(e))
        return 1

    write_forecast(response, Path(args.output) if args.output else None)

    logger.info(
        f"Forecast complete: {response.surfability_score}/10, "
        f"{response.forecast_type} forecast, data quality {response.data_quality}"
    )
    return 0


def spots_command(args) -> int:
    """List the bundled spot registry."""
    setup_logging(args.verbose)
    print_json(spot_table(default_spots()))
    return 0


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="surf-conditions",
        description="Surf quality forecasts from marine and weather data"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Forecast command
    forecast_parser = subparsers.add_parser(
        "forecast",
        help="Forecast surf conditions for a location"
    )
    forecast_parser.add_argument("location", help="Spot or place name, e.g. 'Malibu'")
    forecast_parser.add_argument(
        "-t", "--type",
        choices=[t.value for t in ForecastType],
        default=ForecastType.AUTO.value,
        help="Preferred forecast type (default: auto)"
    )
    forecast_parser.add_argument(
        "-o", "--output",
        help="Write JSON to this file instead of stdout"
    )
    forecast_parser.set_defaults(func=forecast_command)

    # Spots command
    spots_parser = subparsers.add_parser(
        "spots",
        help="List known surf spots"
    )
    spots_parser.set_defaults(func=spots_command)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
