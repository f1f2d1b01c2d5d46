# SPDX-License-Identifier: Apache-2.0
"""Error definitions shared across the localizer."""

from __future__ import annotations

from enum import Enum


class LocalizerError(Exception):
    """Base exception for localizer errors."""

    def __init__(
        self,
        message: str,
        stage: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.cause = cause


class ParseErrorKind(str, Enum):
    """Structural problem found while parsing a localization CSV."""

    TOO_FEW_ROWS = "too_few_rows"
    TOO_FEW_COLUMNS = "too_few_columns"
    INVALID_KEY_COLUMN = "invalid_key_column"
    NO_LANGUAGES = "no_languages"


PARSE_ERROR_MESSAGES: dict[ParseErrorKind, str] = {
    ParseErrorKind.TOO_FEW_ROWS: "CSV must have at least 2 rows (header + data)",
    ParseErrorKind.TOO_FEW_COLUMNS: "CSV must have at least 2 columns (key + languages)",
    ParseErrorKind.INVALID_KEY_COLUMN: "First column must be 'key', 'keys', or 'id'",
    ParseErrorKind.NO_LANGUAGES: "No language columns found",
}


class ParseError(LocalizerError):
    """The CSV source is structurally invalid.

    The currently loaded table, if any, is left unchanged.
    """

    def __init__(self, kind: ParseErrorKind, message: str | None = None) -> None:
        super().__init__(message or PARSE_ERROR_MESSAGES[kind], stage="parse")
        self.kind = kind


class FetchError(LocalizerError):
    """Network or transport failure while obtaining CSV content."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message, stage="fetch", cause=cause)


class NoDataError(LocalizerError):
    """A localization operation ran before any table was loaded."""

    def __init__(self, message: str = "No localization data loaded", stage: str = "localize") -> None:
        super().__init__(message, stage=stage)


class LocalizationError(LocalizerError):
    """A localize or generate batch failed as a whole."""
