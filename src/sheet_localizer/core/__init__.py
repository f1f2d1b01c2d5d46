# SPDX-License-Identifier: Apache-2.0
"""Core localization modules."""

from .applier import LocalizeOptions, localize_section
from .csv_format import escape_cell, rows_to_csv, tokenize_line
from .csv_parser import parse_csv
from .models import (
    ContainerNode,
    Document,
    FitErrorKind,
    FitResult,
    FontName,
    Metric,
    MetricUnit,
    Node,
    Section,
    SectionResult,
    TextNode,
)
from .section_matcher import classify, find_sections, find_text_leaves, sections_from_selection
from .store import LocalizationStore, TaskLease
from .table import LocalizationTable
from .text_fit import FitOptions, TextFitEngine

__all__ = [
    "ContainerNode",
    "Document",
    "FitErrorKind",
    "FitOptions",
    "FitResult",
    "FontName",
    "LocalizationStore",
    "LocalizationTable",
    "LocalizeOptions",
    "Metric",
    "MetricUnit",
    "Node",
    "Section",
    "SectionResult",
    "TaskLease",
    "TextFitEngine",
    "TextNode",
    "classify",
    "escape_cell",
    "find_sections",
    "find_text_leaves",
    "localize_section",
    "parse_csv",
    "rows_to_csv",
    "sections_from_selection",
    "tokenize_line",
]
