# SPDX-License-Identifier: Apache-2.0
"""Tests for localize_section."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from sheet_localizer.core.applier import LocalizeOptions, localize_section
from sheet_localizer.core.csv_parser import parse_csv
from sheet_localizer.core.models import (
    ContainerNode,
    Document,
    FitErrorKind,
    FitResult,
    FontName,
    Section,
    TextNode,
)
from sheet_localizer.core.text_fit import TextFitEngine
from sheet_localizer.host.memory import InMemoryHost

CSV = """key,EN,FR
title,Hello,Bonjour
subtitle,Welcome,
body,Read more,"Lire la suite, maintenant"
"""


def make_section(*names: str, width: float | None = None) -> tuple[InMemoryHost, Section]:
    frame = ContainerNode(
        name="FR",
        children=[TextNode(name=name, characters="placeholder") for name in names],
        width=width,
        height=100 if width is not None else None,
    )
    host = InMemoryHost(Document(page=ContainerNode(name="Page", children=[frame])))
    return host, Section(root=frame, language="FR", name="FR")


class TestLocalizeSection:
    """Tests for localize_section."""

    @pytest.mark.asyncio
    async def test_translations_applied(self) -> None:
        host, section = make_section("title", " body ")
        table = parse_csv(CSV)

        result = await localize_section(section, table, host)

        assert result.localized_count == 2
        assert result.total_text_nodes == 2
        assert result.warnings == []
        leaves = section.root.children  # type: ignore[union-attr]
        assert leaves[0].characters == "Bonjour"
        assert leaves[1].characters == "Lire la suite, maintenant"

    @pytest.mark.asyncio
    async def test_missing_key_warns_without_mutation(self) -> None:
        host, section = make_section("title", "unknown", "other")
        table = parse_csv(CSV)

        result = await localize_section(section, table, host)

        assert result.localized_count == 1
        assert result.total_text_nodes == 3
        assert "Key 'unknown' not found for language 'FR'" in result.warnings
        assert "Key 'other' not found for language 'FR'" in result.warnings
        assert section.root.children[1].characters == "placeholder"  # type: ignore[union-attr]

    @pytest.mark.asyncio
    async def test_missing_language_column_warns(self) -> None:
        host, section = make_section("title")
        section.language = "DE"
        table = parse_csv(CSV)

        result = await localize_section(section, table, host)

        assert result.localized_count == 0
        assert result.warnings == ["Key 'title' not found for language 'DE'"]

    @pytest.mark.asyncio
    async def test_empty_translation_warns(self) -> None:
        host, section = make_section("subtitle")
        table = parse_csv(CSV)

        result = await localize_section(section, table, host)

        assert result.localized_count == 0
        assert result.warnings == ["Empty translation for key 'subtitle' in language 'FR'"]

    @pytest.mark.asyncio
    async def test_localized_count_is_n_minus_missing(self) -> None:
        names = ["title", "body", "gone1", "gone2", "title"]
        host, section = make_section(*names)
        table = parse_csv(CSV)

        result = await localize_section(section, table, host)

        assert result.localized_count == len(names) - 2
        assert len(result.warnings) >= 2

    @pytest.mark.asyncio
    async def test_node_error_becomes_warning(self) -> None:
        frame = ContainerNode(
            name="FR",
            children=[
                TextNode(name="title", font=FontName("Missing", "Bold")),
                TextNode(name="body"),
            ],
        )
        host = InMemoryHost(
            Document(page=ContainerNode(name="Page", children=[frame])),
            available_fonts={FontName()},
        )
        section = Section(root=frame, language="FR", name="FR")

        result = await localize_section(section, parse_csv(CSV), host)

        assert result.localized_count == 1
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("Error localizing 'title':")
        assert frame.children[1].characters == "Lire la suite, maintenant"  # type: ignore[union-attr]

    @pytest.mark.asyncio
    async def test_autosize_counts_applied_fits(self) -> None:
        host, section = make_section("title", "body", width=120)
        table = parse_csv(CSV)
        engine = TextFitEngine(host, yield_delay=0)

        result = await localize_section(
            section,
            table,
            host,
            LocalizeOptions(autosize_enabled=True, min_font_size=6),
            fit_engine=engine,
        )

        # "Bonjour" fits at 16; "Lire la suite, maintenant" needs shrinking
        assert result.localized_count == 2
        assert result.autosized_count == 1
        assert result.warnings == []

    @pytest.mark.asyncio
    async def test_fit_failure_becomes_warning(self) -> None:
        host, section = make_section("title")
        engine = MagicMock()
        engine.fit = AsyncMock(
            return_value=FitResult(
                applied=False,
                original_font_size=16.0,
                new_font_size=10.0,
                error=FitErrorKind.BELOW_MINIMUM,
                message="Cannot fit with minimum font size",
            )
        )

        result = await localize_section(
            section,
            parse_csv(CSV),
            host,
            LocalizeOptions(autosize_enabled=True),
            fit_engine=engine,
        )

        assert result.localized_count == 1
        assert result.autosized_count == 0
        assert result.warnings == [
            "Autosize failed for 'title': Cannot fit with minimum font size"
        ]

    @pytest.mark.asyncio
    async def test_fit_exception_does_not_abort(self) -> None:
        host, section = make_section("title", "body")
        engine = MagicMock()
        engine.fit = AsyncMock(side_effect=[RuntimeError("layout crashed"), FitResult(applied=True)])

        result = await localize_section(
            section,
            parse_csv(CSV),
            host,
            LocalizeOptions(autosize_enabled=True),
            fit_engine=engine,
        )

        assert result.localized_count == 2
        assert result.autosized_count == 1
        assert result.warnings == ["Error localizing 'title': layout crashed"]

    @pytest.mark.asyncio
    async def test_autosize_disabled_skips_engine(self) -> None:
        host, section = make_section("title")
        engine = MagicMock()
        engine.fit = AsyncMock()

        await localize_section(section, parse_csv(CSV), host, fit_engine=engine)

        engine.fit.assert_not_called()
