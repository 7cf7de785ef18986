r"""Download one month of daily adjusted closes for a ticker to a CSV file.

Usage:
    closefetch <TICKER> <YEAR> <MONTH> <FILENAME> [--config PATH] \
        [--log-level LEVEL]

Example:
    closefetch AAPL 2024 11 aapl-2024-11.csv
"""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

import httpx
from loguru import logger

from closefetch.adapters.yahoo import YahooChartAdapter
from closefetch.config import CONFIG_FILE, Settings, load_config
from closefetch.logging_config import LOG_LEVELS, setup_logging
from closefetch.models import Query
from closefetch.persistence import write_csv


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="closefetch",
        description="Fetch a month of daily adjusted closes into a CSV file.",
    )
    parser.add_argument("ticker", help="Ticker symbol, e.g. AAPL")
    parser.add_argument("year", type=int, help="Calendar year, e.g. 2024")
    parser.add_argument("month", type=int, help="Month number, 1-12")
    parser.add_argument("filename", type=Path, help="Path of the output CSV file")
    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_FILE,
        help=f"TOML settings file (default: {CONFIG_FILE})",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Console log level, overrides the configured one",
    )
    return parser


def _create_http_client(settings: Settings) -> httpx.Client:
    """Creates the client used for the single provider request."""
    return httpx.Client(
        timeout=settings.provider.timeout_seconds, follow_redirects=True
    )


def run(query: Query, filename: Path, settings: Settings) -> int:
    """Runs the fetch, parse and write pipeline once.

    Returns:
        The number of rows written.
    """
    with _create_http_client(settings) as client:
        adapter = YahooChartAdapter(
            client,
            user_agent=settings.provider.user_agent,
            host=settings.provider.host,
        )
        points = adapter.get_month_closes(query)
    return write_csv(points, filename)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the `closefetch` command.

    Returns:
        The process exit code. 0 for success, 1 for any failure.
    """
    args = build_parser().parse_args(argv)

    setup_logging(console_level=args.log_level or "INFO")

    query = Query(ticker=args.ticker, year=args.year, month=args.month)
    try:
        settings = load_config(args.config)
        general = settings.general
        setup_logging(
            console_level=args.log_level or general.log_level_console,
            file_level=general.log_level_file,
            log_dir=Path(general.log_directory) if general.log_directory else None,
        )
        run(query, args.filename, settings)
    except Exception:
        logger.exception(
            f"Failed to fetch {query.ticker} for {query.year}-{query.month}."
        )
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
