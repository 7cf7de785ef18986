# src/closefetch/adapters/__init__.py
"""This package contains the market-data provider adapters.

Each adapter is a self-contained module responsible for building the
provider's query URL, issuing the request and normalizing the response into
a list of `PricePoint` records.

All adapters inherit from the `HistoryAdapter` abstract base class defined
in `closefetch.adapters.base`.
"""
