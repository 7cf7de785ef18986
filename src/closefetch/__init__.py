# src/closefetch/__init__.py
"""closefetch: download a month of adjusted closing prices to CSV.

The package is a small sequential pipeline run once per invocation:

- `adapters`: Market-data provider clients that build the query, fetch it
  and parse the response into `PricePoint` records.
- `persistence`: The CSV writer.
- `utils`: Calendar and epoch helpers.
- `cli`: The command-line entry point.
"""

import importlib.metadata

try:
    __version__: str = importlib.metadata.version("closefetch")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0-dev"
