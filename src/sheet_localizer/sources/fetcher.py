# SPDX-License-Identifier: Apache-2.0
"""Fetch localization CSV content over HTTP."""

from __future__ import annotations

import logging
import re
from typing import Any

import aiohttp

from sheet_localizer.core.csv_format import rows_to_csv
from sheet_localizer.errors import FetchError

logger = logging.getLogger(__name__)

_SPREADSHEET_ID = re.compile(r"/spreadsheets/d/([a-zA-Z0-9_-]+)")

SHEETS_EXPORT_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv"


def to_csv_export_url(url: str) -> str:
    """Convert a Google Sheets edit URL to its CSV export URL.

    Any other URL, including an existing export URL, is returned unchanged.
    """
    if "/edit" in url:
        match = _SPREADSHEET_ID.search(url)
        if match:
            return SHEETS_EXPORT_URL.format(sheet_id=match.group(1))
    return url


class _SessionOwner:
    """Lazily created aiohttp session shared by the HTTP sources."""

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> Any:
        """Enter async context manager."""
        await self._ensure_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None


class CsvFetcher(_SessionOwner):
    """Download raw CSV text from a URL."""

    async def fetch_text(self, url: str) -> str:
        """Fetch ``url`` and return its body as text.

        Google Sheets edit links are converted to CSV export links first.

        Raises:
            FetchError: On a transport failure or a non-200 response.
        """
        csv_url = to_csv_export_url(url)
        session = await self._ensure_session()
        logger.debug("Fetching CSV from %s", csv_url)

        try:
            async with session.get(csv_url) as response:
                if response.status != 200:
                    raise FetchError(f"HTTP {response.status}: {response.reason}")
                text = await response.text()
        except aiohttp.ClientError as e:
            raise FetchError(f"Network request failed: {e}", cause=e) from e

        logger.info("CSV loaded from %s (%d characters)", csv_url, len(text))
        return text


class SheetsApiClient(_SessionOwner):
    """Read cell values through the Google Sheets v4 API."""

    DEFAULT_API_URL = "https://sheets.googleapis.com/v4/spreadsheets"
    DEFAULT_RANGE = "A1:Z1000"

    def __init__(self, api_url: str | None = None, timeout: float = 30.0) -> None:
        """Initialize SheetsApiClient.

        Args:
            api_url: Base URL of the spreadsheets endpoint.
            timeout: Total request timeout in seconds.
        """
        super().__init__(timeout=timeout)
        self._api_url = (api_url or self.DEFAULT_API_URL).rstrip("/")

    async def fetch_values(
        self,
        sheet_id: str,
        api_key: str,
        cell_range: str = DEFAULT_RANGE,
    ) -> list[list[str]]:
        """Return the sheet's cell grid.

        Raises:
            FetchError: On request failure, an API error, or fewer than 2 rows.
        """
        if not sheet_id:
            raise FetchError("Spreadsheet ID is required")
        if not api_key:
            raise FetchError("Google Sheets API key is required")

        url = f"{self._api_url}/{sheet_id}/values/{cell_range}"
        session = await self._ensure_session()
        logger.debug("Loading from Google Sheets API: %s", url)

        try:
            async with session.get(url, params={"key": api_key}) as response:
                if response.status != 200:
                    detail = await self._error_detail(response)
                    raise FetchError(
                        f"Google Sheets API error {response.status}: {detail}"
                    )
                data = await response.json()
        except aiohttp.ClientError as e:
            raise FetchError(f"Google Sheets API request failed: {e}", cause=e) from e

        values = data.get("values") or []
        if len(values) < 2:
            raise FetchError("Sheet appears to be empty or has insufficient data")

        return [[str(cell) for cell in row] for row in values]

    async def fetch_csv(
        self,
        sheet_id: str,
        api_key: str,
        cell_range: str = DEFAULT_RANGE,
    ) -> str:
        """Return the sheet's cell grid converted to CSV text."""
        values = await self.fetch_values(sheet_id, api_key, cell_range)
        return rows_to_csv(values)

    @staticmethod
    async def _error_detail(response: aiohttp.ClientResponse) -> str:
        try:
            payload = await response.json()
        except (aiohttp.ContentTypeError, ValueError):
            return str(response.reason)
        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return str(response.reason)
