# SPDX-License-Identifier: Apache-2.0
"""Network sources for localization CSV content.

Usage:
    from sheet_localizer.sources import CsvFetcher
    async with CsvFetcher() as fetcher:
        text = await fetcher.fetch_text(url)
"""

from sheet_localizer.errors import FetchError
from sheet_localizer.sources.fetcher import (
    CsvFetcher,
    SheetsApiClient,
    to_csv_export_url,
)

__all__ = [
    "CsvFetcher",
    "FetchError",
    "SheetsApiClient",
    "to_csv_export_url",
]
