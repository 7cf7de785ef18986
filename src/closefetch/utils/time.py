from datetime import date, datetime, timedelta, timezone


def days_in_month(year: int, month: int) -> int:
    """Returns the number of days in the given calendar month.

    The last day is found by stepping back one day from the first day of the
    following month, which accounts for leap years. December needs no
    lookahead.

    Args:
        year: The calendar year.
        month: The month number (1-12).

    Returns:
        The day count, 28 to 31.

    Raises:
        ValueError: If `month` is outside 1-12.
    """
    first = date(year, month, 1)
    if month == 12:
        # December always has 31 days; year + 1 may be past date.max.
        last = date(year, 12, 31)
    else:
        last = date(year, month + 1, 1) - timedelta(days=1)
    return (last - first).days + 1


def to_epoch_seconds(day: date) -> int:
    """Returns UTC midnight of `day` as seconds since the Unix epoch."""
    midnight = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return int(midnight.timestamp())


def month_bounds(year: int, month: int) -> tuple[int, int]:
    """Returns the epoch seconds of the first and last day of a month.

    Both bounds are at UTC midnight, so the last day itself starts at
    `period_end`.

    Example: (2024, 11) -> (1730419200, 1732924800)

    Raises:
        ValueError: If `month` is outside 1-12.
    """
    first = date(year, month, 1)
    last = date(year, month, days_in_month(year, month))
    return to_epoch_seconds(first), to_epoch_seconds(last)
