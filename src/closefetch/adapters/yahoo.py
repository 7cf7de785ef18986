from datetime import date, datetime, timedelta, timezone
from typing import Any

from loguru import logger

from closefetch.adapters.base import HistoryAdapter
from closefetch.models import (
    ChartResponse,
    MalformedResponseError,
    PricePoint,
    Query,
)

DEFAULT_HOST = "query2.finance.yahoo.com"


def trading_date(timestamp: int) -> date:
    """Converts a Yahoo chart timestamp to the trading day it belongs to.

    Yahoo reports some daily bars at 23:00 UTC of the previous day, an
    artifact of its exchange-timezone to UTC conversion. Such timestamps are
    moved forward one hour before truncating, so 1732662000
    (2024-11-26 23:00 UTC) maps to 2024-11-27. This correction is specific
    to this provider.
    """
    try:
        moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        err_msg = f"Timestamp '{timestamp}' is out of range."
        raise MalformedResponseError(err_msg) from e
    if moment.hour == 23:
        moment += timedelta(hours=1)
    return moment.date()


class YahooChartAdapter(HistoryAdapter):
    """Adapter for the Yahoo Finance v8 chart REST API."""

    def __init__(self, *args: Any, host: str = DEFAULT_HOST, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.host = host

    @property
    def venue_name(self) -> str:
        """Returns the unique, lowercase identifier for the provider."""
        return "yahoo"

    def build_url(self, query: Query) -> str:
        """Builds the daily, adjusted-close chart URL for one month."""
        period1, period2 = query.period
        return (
            f"https://{self.host}/v8/finance/chart/{query.ticker}"
            f"?period1={period1}&period2={period2}"
            "&interval=1d&events=history&includeAdjustedClose=true"
        )

    def _parse_response(self, document: Any) -> list[PricePoint]:
        chart = ChartResponse.from_json(document)
        logger.debug(
            f"[{self.venue_name}] Response holds {len(chart.timestamps)} points."
        )
        return [
            PricePoint(date=trading_date(ts), close=close)
            for ts, close in zip(chart.timestamps, chart.adjclose)
        ]
