from dataclasses import dataclass
from datetime import date
from typing import Any

from closefetch.utils.time import month_bounds


class MalformedResponseError(ValueError):
    """Raised when a provider response does not match the expected schema."""


@dataclass(frozen=True)
class Query:
    """A request for one calendar month of daily prices."""

    ticker: str
    year: int
    month: int

    @property
    def period(self) -> tuple[int, int]:
        """The (period_start, period_end) epoch seconds for the month."""
        return month_bounds(self.year, self.month)


@dataclass(frozen=True)
class PricePoint:
    """A single trading day and its adjusted closing price."""

    date: date
    close: float


def _expect(value: Any, expected: type | tuple[type, ...], path: str) -> Any:
    """Returns `value` if it is an instance of `expected`, else raises."""
    # bool is a subclass of int, but JSON true/false is never a number here.
    if isinstance(value, bool) or not isinstance(value, expected):
        types = expected if isinstance(expected, tuple) else (expected,)
        expected_name = " or ".join(t.__name__ for t in types)
        err_msg = (
            f"Expected {expected_name} at '{path}', got {type(value).__name__}."
        )
        raise MalformedResponseError(err_msg)
    return value


def _child(container: Any, key: str | int, path: str) -> Any:
    """Looks up `key` in a JSON object or array, raising on a missing entry."""
    try:
        return container[key]
    except (KeyError, IndexError) as e:
        err_msg = f"Missing '{path}' in provider response."
        raise MalformedResponseError(err_msg) from e


@dataclass(frozen=True)
class ChartResponse:
    """The fields of a chart-data response the pipeline relies on.

    `timestamps` and `adjclose` are parallel arrays: entry *i* of one belongs
    to entry *i* of the other.
    """

    timestamps: list[int]
    adjclose: list[float]

    @classmethod
    def from_json(cls, document: Any) -> "ChartResponse":
        """Builds a ChartResponse from a decoded JSON document.

        Expected shape::

            {"chart": {"result": [{"timestamp": [int, ...],
                                   "indicators": {"adjclose": [
                                       {"adjclose": [number, ...]}]}}]}}

        Args:
            document: The decoded JSON body.

        Returns:
            The typed response.

        Raises:
            MalformedResponseError: On any deviation from the expected shape.
        """
        root = _expect(document, dict, "$")
        chart = _expect(_child(root, "chart", "chart"), dict, "chart")

        results = chart.get("result")
        if not isinstance(results, list) or not results:
            err_msg = "Provider response has no chart result."
            error = chart.get("error")
            if isinstance(error, dict):
                err_msg += (
                    f" Provider error: {error.get('code')}: "
                    f"{error.get('description')}"
                )
            raise MalformedResponseError(err_msg)

        result = _expect(results[0], dict, "chart.result[0]")
        indicators = _expect(
            _child(result, "indicators", "chart.result[0].indicators"),
            dict,
            "chart.result[0].indicators",
        )
        adjclose_list = _expect(
            _child(indicators, "adjclose", "indicators.adjclose"),
            list,
            "indicators.adjclose",
        )
        adjclose_obj = _expect(
            _child(adjclose_list, 0, "indicators.adjclose[0]"),
            dict,
            "indicators.adjclose[0]",
        )
        raw_closes = _expect(
            _child(adjclose_obj, "adjclose", "indicators.adjclose[0].adjclose"),
            list,
            "indicators.adjclose[0].adjclose",
        )
        raw_timestamps = _expect(
            _child(result, "timestamp", "chart.result[0].timestamp"),
            list,
            "chart.result[0].timestamp",
        )

        closes = [
            float(_expect(value, (int, float), f"adjclose[{i}]"))
            for i, value in enumerate(raw_closes)
        ]
        timestamps = [
            _expect(value, int, f"timestamp[{i}]")
            for i, value in enumerate(raw_timestamps)
        ]

        if len(timestamps) != len(closes):
            err_msg = (
                f"Provider returned {len(timestamps)} timestamps but "
                f"{len(closes)} adjusted closes."
            )
            raise MalformedResponseError(err_msg)

        return cls(timestamps=timestamps, adjclose=closes)
