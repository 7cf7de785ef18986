import abc
from typing import Any

import httpx
from loguru import logger

from closefetch.models import PricePoint, Query

DEFAULT_USER_AGENT = "curl/8.7.1"


class HistoryAdapter(abc.ABC):
    """An abstract base class for daily price history providers.

    The base class owns the single blocking request. Subclasses are
    responsible for the provider-specific details: the query URL and the
    normalization of the response body.

    Errors are never retried. Transport failures and non-success statuses
    surface as `httpx` exceptions, an undecodable body as a `ValueError`.
    """

    def __init__(
        self, http_client: httpx.Client, user_agent: str = DEFAULT_USER_AGENT
    ) -> None:
        """Initializes the adapter.

        Args:
            http_client: The httpx.Client used for the request.
            user_agent: The User-Agent header sent with the request. Some
                providers reject the default client user agents.
        """
        self.http_client = http_client
        self.user_agent = user_agent

    @property
    @abc.abstractmethod
    def venue_name(self) -> str:
        """A unique, lowercase identifier for the provider (e.g., 'yahoo')."""
        raise NotImplementedError

    @abc.abstractmethod
    def build_url(self, query: Query) -> str:
        """Returns the full query URL for `query`. Must not touch the network."""
        raise NotImplementedError

    @abc.abstractmethod
    def _parse_response(self, document: Any) -> list[PricePoint]:
        """Normalizes a decoded response body into PricePoint records.

        Args:
            document: The decoded JSON body.

        Returns:
            The points in provider order.
        """
        raise NotImplementedError

    def fetch_json(self, url: str) -> Any:
        """Issues one GET request for `url` and decodes the JSON body."""
        logger.debug(f"[{self.venue_name}] GET {url}")
        response = self.http_client.get(url, headers={"User-Agent": self.user_agent})
        response.raise_for_status()
        return response.json()

    def get_month_closes(self, query: Query) -> list[PricePoint]:
        """Fetches and parses one month of daily closes for `query`."""
        url = self.build_url(query)
        logger.info(
            f"[{self.venue_name}] Fetching {query.ticker} for "
            f"{query.year:04d}-{query.month:02d}"
        )
        points = self._parse_response(self.fetch_json(url))
        logger.success(
            f"[{self.venue_name}] Fetched {len(points)} daily closes for "
            f"{query.ticker}."
        )
        return points
