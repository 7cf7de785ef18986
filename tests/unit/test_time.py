from datetime import date

import pandas as pd
import pytest

from closefetch.utils.time import days_in_month, month_bounds, to_epoch_seconds

YEARS = [1900, 1999, 2000, 2023, 2024, 2100]


@pytest.mark.parametrize("year", YEARS)
@pytest.mark.parametrize("month", range(1, 13))
def test_days_in_month_matches_pandas_calendar(year: int, month: int) -> None:
    """Day counts agree with the Gregorian calendar as computed by Pandas."""
    expected = pd.Period(year=year, month=month, freq="M").days_in_month
    assert days_in_month(year, month) == expected


@pytest.mark.parametrize(
    ("year", "expected"),
    [(2024, 29), (2023, 28), (2000, 29), (1900, 28)],
)
def test_days_in_month_february(year: int, expected: int) -> None:
    """Tests leap-year handling, including the century rules."""
    assert days_in_month(year, 2) == expected


@pytest.mark.parametrize("month", [0, 13, -1])
def test_days_in_month_rejects_invalid_month(month: int) -> None:
    """An out-of-range month fails instead of wrapping into another year."""
    with pytest.raises(ValueError, match="month"):
        days_in_month(2024, month)


def test_to_epoch_seconds_known_value() -> None:
    """2024-11-24 00:00:00 UTC is 1732406400."""
    assert to_epoch_seconds(date(2024, 11, 24)) == 1732406400
    assert to_epoch_seconds(date(1970, 1, 1)) == 0


def test_month_bounds_november_2024() -> None:
    """Bounds are UTC midnight of the first and the last day of the month."""
    assert month_bounds(2024, 11) == (1730419200, 1732924800)


@pytest.mark.parametrize("month", range(1, 13))
def test_month_bounds_match_pandas(month: int) -> None:
    """Bounds agree with Pandas' month start and end timestamps."""
    period = pd.Period(year=2024, month=month, freq="M")
    start = pd.Timestamp(period.start_time.strftime("%Y-%m-%d"), tz="UTC")
    end = pd.Timestamp(period.end_time.strftime("%Y-%m-%d"), tz="UTC")

    assert month_bounds(2024, month) == (int(start.timestamp()), int(end.timestamp()))


def test_month_bounds_december_rolls_into_next_year() -> None:
    """December ends on the 31st and never touches the following January."""
    start, end = month_bounds(2023, 12)
    assert end - start == 30 * 86400


def test_month_bounds_rejects_invalid_month() -> None:
    with pytest.raises(ValueError):
        month_bounds(2024, 13)


def test_december_of_last_representable_year() -> None:
    """December 9999 is a valid month even though January 10000 is not."""
    assert days_in_month(9999, 12) == 31
    assert month_bounds(9999, 12) == (253399622400, 253402214400)
