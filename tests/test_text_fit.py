# SPDX-License-Identifier: Apache-2.0
"""Tests for TextFitEngine."""

from __future__ import annotations

from typing import Any

import pytest

from sheet_localizer.core.models import (
    ContainerNode,
    Document,
    FitErrorKind,
    FontName,
    Metric,
    MetricUnit,
    TextNode,
)
from sheet_localizer.core.text_fit import FitOptions, TextFitEngine
from sheet_localizer.host.memory import InMemoryHost


def make_fixture(
    text: str,
    width: float | None,
    height: float | None,
    **text_kwargs: Any,
) -> tuple[InMemoryHost, TextNode]:
    node = TextNode(name="label", characters=text, **text_kwargs)
    frame = ContainerNode(name="EN", children=[node], width=width, height=height)
    host = InMemoryHost(Document(page=ContainerNode(name="Page", children=[frame])))
    return host, node


class TestTextFitEngine:
    """Tests for TextFitEngine.fit."""

    @pytest.mark.asyncio
    async def test_text_already_fits(self) -> None:
        host, node = make_fixture("short", 200, 50)
        engine = TextFitEngine(host, yield_delay=0)

        result = await engine.fit(node, FitOptions(min_font_size=10))

        assert result.applied is False
        assert result.error is None
        assert result.original_font_size == 16.0
        assert result.new_font_size == 16.0
        assert node.font_size == 16.0

    @pytest.mark.asyncio
    async def test_shrinks_until_fit(self) -> None:
        # 12 chars * 0.55 * size <= 100 first holds at size 15
        host, node = make_fixture("a" * 12, 100, 50)
        engine = TextFitEngine(host, yield_delay=0)

        result = await engine.fit(node, FitOptions(min_font_size=10))

        assert result.applied is True
        assert result.error is None
        assert result.new_font_size == 15.0
        assert node.font_size == 15.0
        assert node.auto_resize == "NONE"

    @pytest.mark.asyncio
    async def test_below_minimum_stops_and_keeps_last_size(self) -> None:
        host, node = make_fixture("a" * 20, 10, 50)
        engine = TextFitEngine(host, yield_delay=0)

        result = await engine.fit(node, FitOptions(min_font_size=10))

        assert result.applied is False
        assert result.error == FitErrorKind.BELOW_MINIMUM
        assert result.new_font_size == 10.0
        assert node.font_size == 10.0
        assert len(host.notifications) == 1
        assert "minimum font size 10px" in host.notifications[0]

    @pytest.mark.asyncio
    async def test_unfittable_terminates_within_iteration_cap(self) -> None:
        host, node = make_fixture("a" * 20, 1, 1)
        calls = 0
        measure = host.measure

        def counting_measure(target: TextNode) -> tuple[float, float]:
            nonlocal calls
            calls += 1
            return measure(target)

        host.measure = counting_measure  # type: ignore[method-assign]
        engine = TextFitEngine(host, yield_delay=0)

        result = await engine.fit(node, FitOptions(min_font_size=1))

        assert result.error == FitErrorKind.BELOW_MINIMUM
        assert calls <= 50

    @pytest.mark.asyncio
    async def test_max_iterations_exceeded(self) -> None:
        host, node = make_fixture("a" * 20, 1, 1, font_size=100.0)
        engine = TextFitEngine(host, yield_delay=0)

        result = await engine.fit(node, FitOptions(min_font_size=1))

        assert result.applied is False
        assert result.error == FitErrorKind.MAX_ITERATIONS_EXCEEDED
        assert result.original_font_size == 100.0
        assert result.new_font_size == 75.0
        assert node.font_size == 75.0

    @pytest.mark.asyncio
    async def test_pixel_metrics_scale_with_font_size(self) -> None:
        host, node = make_fixture(
            "a" * 12,
            100,
            50,
            line_height=Metric(20.0, MetricUnit.PIXELS),
            letter_spacing=Metric(0.0, MetricUnit.PERCENT),
        )
        engine = TextFitEngine(host, yield_delay=0)

        result = await engine.fit(node, FitOptions(min_font_size=10))

        assert result.new_font_size == 15.0
        assert node.line_height == Metric(18.75, MetricUnit.PIXELS)
        assert node.letter_spacing == Metric(0.0, MetricUnit.PERCENT)

    @pytest.mark.asyncio
    async def test_relative_metrics_untouched(self) -> None:
        host, node = make_fixture(
            "a" * 12,
            100,
            50,
            line_height=Metric(150.0, MetricUnit.PERCENT),
            letter_spacing=Metric(0.0, MetricUnit.AUTO),
        )
        engine = TextFitEngine(host, yield_delay=0)

        await engine.fit(node, FitOptions(min_font_size=10))

        assert node.line_height == Metric(150.0, MetricUnit.PERCENT)
        assert node.letter_spacing == Metric(0.0, MetricUnit.AUTO)

    @pytest.mark.asyncio
    async def test_no_parent(self) -> None:
        node = TextNode(name="orphan", characters="text")
        host = InMemoryHost(Document(page=ContainerNode(name="Page")))
        engine = TextFitEngine(host, yield_delay=0)

        result = await engine.fit(node)

        assert result.applied is False
        assert result.error == FitErrorKind.NO_CONTAINER

    @pytest.mark.asyncio
    async def test_parent_without_fixed_bounds(self) -> None:
        host, node = make_fixture("a" * 50, None, None)
        engine = TextFitEngine(host, yield_delay=0)

        result = await engine.fit(node)

        assert result.error == FitErrorKind.NO_CONTAINER
        assert node.font_size == 16.0

    @pytest.mark.asyncio
    async def test_host_failure_is_reported(self) -> None:
        node = TextNode(name="label", characters="a" * 30, font=FontName("Missing", "Bold"))
        frame = ContainerNode(name="EN", children=[node], width=10, height=10)
        host = InMemoryHost(
            Document(page=ContainerNode(name="Page", children=[frame])),
            available_fonts={FontName()},
        )
        engine = TextFitEngine(host, yield_delay=0)

        result = await engine.fit(node)

        assert result.applied is False
        assert result.error == FitErrorKind.FAILED
        assert "Missing Bold" in result.message

    @pytest.mark.asyncio
    async def test_never_grows_text(self) -> None:
        host, node = make_fixture("a", 1000, 1000, font_size=8.0)
        engine = TextFitEngine(host, yield_delay=0)

        result = await engine.fit(node, FitOptions(min_font_size=10))

        assert result.applied is False
        assert node.font_size == 8.0
