"""Command line entry point: download a YCharts series to a CSV file."""

import argparse
import random
import sys
import time
from typing import Callable, Optional, Sequence

from loguru import logger
from pydantic import ValidationError

from ..config.settings import Settings
from ..data.pull_series import pull_series
from ..errors import ParseError, YChartsError

TICKER_HELP = (
    "The YCharts-formatted ticker to pull data from. Examples are M:VFISX, VTIP, GOOG, ^SPY. "
    "YCharts doesn't follow consistent ticker formatting in its data endpoints. If your request "
    "doesn't work, check the correct formatting in the chart URL queries on the website."
)
SESSION_HELP = (
    "Optional YCharts session ID used to view premium content. It can be retrieved from your "
    "YCharts cookies once you've logged in."
)
INTERPOLATE_HELP = "Interpolate price data on missing days to ease data comparisons."
FAST_HELP = (
    "Skip the intentional delay after the download, which may cause your data usage to show up "
    "on YCharts metrics if you abuse this program."
)
PATH_HELP = (
    "Where to write the results file. Defaults to 'ycharts_TICKER_TIMESTAMP.csv' "
    "in the current directory."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ychartsdl", description="Download a YCharts price series to CSV.")
    _ = parser.add_argument("ticker", help=TICKER_HELP)
    _ = parser.add_argument("-s", "--session", default="", help=SESSION_HELP)
    _ = parser.add_argument("-i", "--interpolate", action="store_true", help=INTERPOLATE_HELP)
    _ = parser.add_argument("-f", "--fast", action="store_true", help=FAST_HELP)
    _ = parser.add_argument("-p", "--path", default=None, help=PATH_HELP)
    return parser


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format="<level>{level: <8}</level> {message}")


def throttle(
    settings: Settings,
    sleep: Callable[[float], None] = time.sleep,
    randint: Callable[[int, int], int] = random.randint,
) -> int:
    """Wait a random number of milliseconds so the downloads look less like a crawler.

    Returns:
        The delay in milliseconds
    """
    delay_millis = randint(settings.min_delay_millis, settings.max_delay_millis)
    logger.debug("Throttling for {} ms", delay_millis)
    sleep(delay_millis / 1000.0)
    return delay_millis


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings()
    except ValidationError as e:
        parser.error(f"invalid YCHARTS_* settings: {e}")

    configure_logging(settings.log_level)

    print(f"Pulling {args.ticker} from YCharts...")
    try:
        result = pull_series(
            args.ticker,
            settings,
            session_token=args.session,
            interpolate=args.interpolate,
            path=args.path,
        )
    except ParseError as e:
        logger.error(
            "Failed to parse the JSON data downloaded from YCharts. "
            "They may have changed their formatting. {}", e
        )
        return 1
    except YChartsError as e:
        logger.error("{}", e)
        return 1

    print(f"  Wrote {len(result.series)} points to {result.path}")
    if result.warnings:
        print(f"  Skipped {len(result.warnings)} malformed points")

    if not args.fast:
        throttle(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
