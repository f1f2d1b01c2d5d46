# SPDX-License-Identifier: Apache-2.0
"""Parse localization CSV text into a :class:`LocalizationTable`.

Expected layout::

    key,EN,FR,DE
    title,Hello,Bonjour,Hallo
    cta,"Buy now, pay later",Acheter,Kaufen

The first header cell must be ``key``, ``keys`` or ``id`` (any case). Every
other header cell names a language and is normalized to upper case.
"""

from __future__ import annotations

import logging
import re

from sheet_localizer.errors import ParseError, ParseErrorKind

from .csv_format import tokenize_line
from .table import LocalizationTable

logger = logging.getLogger(__name__)

KEY_COLUMN_NAMES: frozenset[str] = frozenset({"key", "keys", "id"})

_LINE_BREAK = re.compile(r"\r?\n")
_BOM = "\ufeff"


def split_lines(text: str) -> list[str]:
    """Split trimmed ``text`` on LF or CRLF line breaks.

    A leading byte-order mark, as written by spreadsheet "CSV UTF-8" exports,
    is dropped.
    """
    stripped = text.removeprefix(_BOM).strip()
    if not stripped:
        return []
    return _LINE_BREAK.split(stripped)


def parse_language_columns(header: list[str]) -> list[tuple[int, str]]:
    """Map header columns to language codes.

    Blank header cells are skipped and a repeated code keeps its first
    column, so the resulting codes are unique, upper-case and non-empty.

    Returns:
        ``(column_index, language_code)`` pairs in header order.
    """
    columns: list[tuple[int, str]] = []
    seen: set[str] = set()
    for index, cell in enumerate(header[1:], start=1):
        code = cell.strip().upper()
        if not code:
            continue
        if code in seen:
            logger.warning("Duplicate language column %r ignored (column %d)", code, index)
            continue
        seen.add(code)
        columns.append((index, code))
    return columns


def parse_csv(text: str) -> LocalizationTable:
    """Parse CSV text into a localization table.

    Data rows with fewer than two fields or a blank key are skipped. Value
    columns beyond the header are ignored and missing ones become ``""``.
    When a key repeats, the later row replaces the earlier one.

    Args:
        text: Raw CSV content.

    Returns:
        A new table.

    Raises:
        ParseError: If the header or overall shape is invalid.
    """
    lines = split_lines(text)
    if len(lines) < 2:
        raise ParseError(ParseErrorKind.TOO_FEW_ROWS)

    header = tokenize_line(lines[0])
    if len(header) < 2:
        raise ParseError(ParseErrorKind.TOO_FEW_COLUMNS)

    if header[0].strip().lower() not in KEY_COLUMN_NAMES:
        raise ParseError(ParseErrorKind.INVALID_KEY_COLUMN)

    columns = parse_language_columns(header)
    if not columns:
        raise ParseError(ParseErrorKind.NO_LANGUAGES)

    entries: dict[str, dict[str, str]] = {}
    skipped = 0
    for line_number, line in enumerate(lines[1:], start=2):
        values = tokenize_line(line)
        if len(values) < 2:
            skipped += 1
            continue

        key = values[0].strip()
        if not key:
            skipped += 1
            continue

        if len(values) > len(header):
            logger.debug(
                "Line %d: %d extra value column(s) ignored",
                line_number,
                len(values) - len(header),
            )

        if key in entries:
            logger.debug("Line %d: duplicate key %r replaces earlier row", line_number, key)
            # Re-insert so the key sits at its last position
            del entries[key]

        entries[key] = {
            language: values[index].strip() if index < len(values) else ""
            for index, language in columns
        }

    languages = tuple(language for _, language in columns)
    logger.debug(
        "Parsed %d keys for languages %s (%d rows skipped)",
        len(entries),
        ", ".join(languages),
        skipped,
    )
    return LocalizationTable(languages=languages, entries=entries)
