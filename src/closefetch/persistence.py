import csv
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from closefetch.models import PricePoint

# --- Constants ---

# The header row of every generated CSV file.
CSV_HEADER: list[str] = ["Date", "Close"]

DATE_FORMAT = "%Y-%m-%d"


def _format_record_for_csv(point: PricePoint) -> list[str]:
    """Converts a PricePoint to a list of strings for CSV writing."""
    return [point.date.strftime(DATE_FORMAT), str(point.close)]


def write_csv(points: Iterable[PricePoint], path: Path) -> int:
    """Writes price points to a two-column CSV file.

    The file is created, or truncated if it exists. Closes use Python's
    default float formatting, so no fixed precision is applied.

    Args:
        points: The points to write, in output order.
        path: The destination file.

    Returns:
        The number of data rows written.

    Raises:
        OSError: If the file cannot be created or written.
    """
    rows = 0
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for point in points:
            writer.writerow(_format_record_for_csv(point))
            rows += 1
    logger.info(f"Wrote {rows} rows to '{path}'.")
    return rows
