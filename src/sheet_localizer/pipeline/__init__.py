# SPDX-License-Identifier: Apache-2.0
"""Localization pipeline package."""

from .localization_pipeline import (
    GenerateConfig,
    LoadResult,
    LoadStatus,
    LocalizationService,
)
from .notifications import (
    CsvLoaded,
    ErrorNotice,
    GenerationComplete,
    LoadingChanged,
    LocalizationComplete,
    Notification,
    NotificationSink,
    SectionReport,
)

__all__ = [
    "CsvLoaded",
    "ErrorNotice",
    "GenerateConfig",
    "GenerationComplete",
    "LoadResult",
    "LoadStatus",
    "LoadingChanged",
    "LocalizationComplete",
    "LocalizationService",
    "Notification",
    "NotificationSink",
    "SectionReport",
]
