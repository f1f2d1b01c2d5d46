# SPDX-License-Identifier: Apache-2.0
"""Shared state: the current localization table and the load lease."""

from __future__ import annotations

import logging

from .table import LocalizationTable

logger = logging.getLogger(__name__)


class LocalizationStore:
    """Holds the current :class:`LocalizationTable`.

    The table is replaced as a whole and only after a parse succeeds, so a
    caller holding a snapshot always sees one complete table.
    """

    def __init__(self, table: LocalizationTable | None = None) -> None:
        self._table = table

    @property
    def is_loaded(self) -> bool:
        """Whether a table has been loaded."""
        return self._table is not None

    def snapshot(self) -> LocalizationTable | None:
        """Return the current table for the duration of one batch."""
        return self._table

    def replace(self, table: LocalizationTable) -> None:
        """Swap in ``table``, discarding the previous one."""
        previous = self._table
        self._table = table
        logger.info(
            "Localization table replaced: %d keys, languages %s (previously %s keys)",
            table.key_count,
            ", ".join(table.languages),
            previous.key_count if previous is not None else "no",
        )


class TaskLease:
    """Single-slot lease with acquire-or-reject semantics.

    Requests arriving while the lease is held are rejected, not queued, and
    the holder is never cancelled.
    """

    def __init__(self, name: str = "task") -> None:
        self._name = name
        self._held = False

    @property
    def held(self) -> bool:
        """Whether the lease is currently held."""
        return self._held

    def try_acquire(self) -> bool:
        """Take the lease if free.

        Returns:
            True if acquired, False if another holder has it.
        """
        if self._held:
            logger.debug("Lease %r busy, request rejected", self._name)
            return False
        self._held = True
        return True

    def release(self) -> None:
        """Give the lease back."""
        self._held = False
