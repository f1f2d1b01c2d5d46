# SPDX-License-Identifier: Apache-2.0
"""Apply translations to the text nodes of one language section."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .models import FitErrorKind, Section, SectionResult
from .section_matcher import find_text_leaves
from .table import LocalizationTable
from .text_fit import DEFAULT_MIN_FONT_SIZE, FitOptions, TextFitEngine

if TYPE_CHECKING:
    from sheet_localizer.host.base import DocumentHost

logger = logging.getLogger(__name__)


@dataclass
class LocalizeOptions:
    """Localization settings for one batch."""

    autosize_enabled: bool = False
    min_font_size: float = DEFAULT_MIN_FONT_SIZE


async def localize_section(
    section: Section,
    table: LocalizationTable,
    host: DocumentHost,
    options: LocalizeOptions | None = None,
    fit_engine: TextFitEngine | None = None,
) -> SectionResult:
    """Replace the text of every text node in ``section``.

    Each text node's trimmed name is its key. Problems with a single node
    are recorded as warnings and never stop the rest of the section.

    Args:
        section: Section to localize.
        table: Table snapshot to read translations from.
        host: Host performing the edits.
        options: Localization settings.
        fit_engine: Engine used when autosize is enabled.

    Returns:
        Counts and warnings for the section.
    """
    options = options or LocalizeOptions()
    if options.autosize_enabled and fit_engine is None:
        fit_engine = TextFitEngine(host)
    fit_options = FitOptions(min_font_size=options.min_font_size)

    leaves = find_text_leaves(section.root)
    result = SectionResult(total_text_nodes=len(leaves))
    language = section.language

    for leaf in leaves:
        try:
            key = leaf.name.strip()
            translation = table.lookup(key, language)

            if translation is None:
                result.warnings.append(f"Key '{key}' not found for language '{language}'")
                continue

            if not translation.strip():
                result.warnings.append(
                    f"Empty translation for key '{key}' in language '{language}'"
                )
                continue

            await host.load_font(leaf.font)
            host.set_characters(leaf, translation)
            result.localized_count += 1

            if options.autosize_enabled and fit_engine is not None:
                fit_result = await fit_engine.fit(leaf, fit_options)
                if fit_result.applied:
                    result.autosized_count += 1
                elif fit_result.error not in (None, FitErrorKind.NO_CONTAINER):
                    result.warnings.append(
                        f"Autosize failed for '{leaf.name}': {fit_result.message}"
                    )
        except Exception as exc:
            logger.debug("Error localizing '%s'", leaf.name, exc_info=True)
            result.warnings.append(f"Error localizing '{leaf.name}': {exc}")

    logger.info(
        "Section '%s' (%s): %d/%d localized, %d autosized, %d warning(s)",
        section.name,
        language,
        result.localized_count,
        result.total_text_nodes,
        result.autosized_count,
        len(result.warnings),
    )
    return result
