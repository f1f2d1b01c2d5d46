# SPDX-License-Identifier: Apache-2.0
"""Spreadsheet-driven localization for document trees."""

__version__ = "0.1.0"
