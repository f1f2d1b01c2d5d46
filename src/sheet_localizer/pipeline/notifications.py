# SPDX-License-Identifier: Apache-2.0
"""One-way result channel for localizer operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Union, runtime_checkable

from sheet_localizer.core.models import SectionResult


@dataclass
class LoadingChanged:
    """A load started or finished."""

    is_loading: bool
    type: str = field(default="loading", init=False)


@dataclass
class CsvLoaded:
    """Outcome of one load attempt."""

    success: bool
    languages: list[str] = field(default_factory=list)
    key_count: int = 0
    error: str | None = None
    type: str = field(default="csv-loaded", init=False)


@dataclass
class SectionReport:
    """Localization result for one section."""

    name: str
    language: str
    result: SectionResult

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"name": self.name, "language": self.language, **self.result.to_dict()}


@dataclass
class LocalizationComplete:
    """A localize-all or localize-selected batch finished."""

    message: str
    sections: list[SectionReport] = field(default_factory=list)
    type: str = field(default="localization-complete", init=False)


@dataclass
class GenerationComplete:
    """A generate-all-languages batch finished or was refused."""

    success: bool
    message: str = ""
    error: str | None = None
    master_language: str | None = None
    generated_languages: list[str] = field(default_factory=list)
    sections: list[SectionReport] = field(default_factory=list)
    type: str = field(default="generation-complete", init=False)

    @property
    def sections_created(self) -> int:
        """Number of generated sections."""
        return len(self.generated_languages)


@dataclass
class ErrorNotice:
    """A top-level operation failed."""

    message: str
    stage: str = ""
    type: str = field(default="error", init=False)


Notification = Union[
    LoadingChanged,
    CsvLoaded,
    LocalizationComplete,
    GenerationComplete,
    ErrorNotice,
]


@runtime_checkable
class NotificationSink(Protocol):
    """Receiver of localizer notifications."""

    def __call__(self, notification: Notification) -> None: ...
