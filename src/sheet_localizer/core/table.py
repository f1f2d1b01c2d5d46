# SPDX-License-Identifier: Apache-2.0
"""In-memory localization table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .csv_format import rows_to_csv


@dataclass(frozen=True)
class LocalizationTable:
    """Translations keyed by string key and upper-case language code.

    A table is built in one piece by a successful parse and never modified
    afterwards; reloading produces a new table.

    Attributes:
        languages: Language codes in header order
        entries: key -> language -> translation
    """

    languages: tuple[str, ...]
    entries: dict[str, dict[str, str]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    @property
    def key_count(self) -> int:
        """Number of distinct keys."""
        return len(self.entries)

    @property
    def keys(self) -> list[str]:
        """Keys in insertion order."""
        return list(self.entries)

    def lookup(self, key: str, language: str) -> str | None:
        """Return the translation for ``key`` in ``language``, if any."""
        row = self.entries.get(key)
        if row is None:
            return None
        return row.get(language)

    def to_rows(self) -> list[list[str]]:
        """Return the table as a header row followed by one row per key."""
        rows: list[list[str]] = [["key", *self.languages]]
        for key, row in self.entries.items():
            rows.append([key, *(row.get(lang, "") for lang in self.languages)])
        return rows

    def to_csv(self) -> str:
        """Escape the table back to CSV text."""
        return rows_to_csv(self.to_rows())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "languages": list(self.languages),
            "entries": {key: dict(row) for key, row in self.entries.items()},
        }
