# SPDX-License-Identifier: Apache-2.0
"""Shrink text until it fits inside its parent container.

Measurement comes from the host's layout pass, so after each size change
the engine yields briefly and measures again instead of computing bounds
itself. Text is only ever made smaller.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .models import ContainerNode, FitErrorKind, FitResult, TextNode

if TYPE_CHECKING:
    from sheet_localizer.host.base import DocumentHost

logger = logging.getLogger(__name__)

DEFAULT_MIN_FONT_SIZE = 10.0


@dataclass
class FitOptions:
    """Per-call fit settings."""

    min_font_size: float = DEFAULT_MIN_FONT_SIZE


class TextFitEngine:
    """Iteratively reduce font size until text fits its container."""

    def __init__(
        self,
        host: DocumentHost,
        step: float = 0.5,
        max_iterations: int = 50,
        yield_delay: float = 0.01,
    ) -> None:
        """Initialize TextFitEngine.

        Args:
            host: Host that applies sizes and measures text.
            step: Font size decrement per iteration.
            max_iterations: Hard cap on measure/shrink iterations.
            yield_delay: Seconds to wait for the host to re-layout after each change.
        """
        self._host = host
        self._step = float(step)
        self._max_iterations = int(max_iterations)
        self._yield_delay = float(yield_delay)

    async def fit(self, node: TextNode, options: FitOptions | None = None) -> FitResult:
        """Fit ``node`` inside its parent's fixed bounds.

        Size changes are kept even when fitting fails; the returned
        ``new_font_size`` is the last size actually applied.

        Args:
            node: Text node to shrink.
            options: Fit settings.

        Returns:
            Outcome of the attempt. Errors are reported in the result, not raised.
        """
        options = options or FitOptions()
        parent = node.parent
        if not isinstance(parent, ContainerNode) or not parent.has_fixed_bounds:
            return FitResult(
                applied=False,
                error=FitErrorKind.NO_CONTAINER,
                message="No fixed container found",
            )

        try:
            return await self._fit_in(node, parent, options)
        except Exception as exc:
            logger.warning("Autosize failed for '%s': %s", node.name, exc)
            return FitResult(
                applied=False,
                original_font_size=node.font_size,
                new_font_size=node.font_size,
                error=FitErrorKind.FAILED,
                message=f"Autosize failed: {exc}",
            )

    async def _fit_in(
        self,
        node: TextNode,
        container: ContainerNode,
        options: FitOptions,
    ) -> FitResult:
        host = self._host
        await host.load_font(node.font)

        if node.auto_resize != "NONE":
            host.set_auto_resize(node, "NONE")

        original_size = node.font_size
        original_line_height = node.line_height
        original_letter_spacing = node.letter_spacing
        max_width = float(container.width)  # type: ignore[arg-type]
        max_height = float(container.height)  # type: ignore[arg-type]

        current_size = original_size
        for iteration in range(self._max_iterations):
            width, height = host.measure(node)
            if width <= max_width and height <= max_height:
                if iteration > 0:
                    logger.debug(
                        "'%s' fitted: %.1f -> %.1f after %d step(s)",
                        node.name,
                        original_size,
                        current_size,
                        iteration,
                    )
                return FitResult(
                    applied=iteration > 0,
                    original_font_size=original_size,
                    new_font_size=current_size,
                )

            candidate = current_size - self._step
            if candidate < options.min_font_size:
                host.notify(
                    f'Text "{node.name}" cannot fit container with minimum '
                    f"font size {options.min_font_size:g}px"
                )
                return FitResult(
                    applied=False,
                    original_font_size=original_size,
                    new_font_size=current_size,
                    error=FitErrorKind.BELOW_MINIMUM,
                    message="Cannot fit with minimum font size",
                )

            host.set_font_size(node, candidate)
            current_size = candidate

            # Only absolute metrics follow the font size
            ratio = candidate / original_size
            if original_line_height.is_absolute:
                host.set_line_height(node, original_line_height.scaled(ratio))
            if original_letter_spacing.is_absolute:
                host.set_letter_spacing(node, original_letter_spacing.scaled(ratio))

            await asyncio.sleep(self._yield_delay)

        logger.debug("'%s' still overflows after %d iterations", node.name, self._max_iterations)
        return FitResult(
            applied=False,
            original_font_size=original_size,
            new_font_size=current_size,
            error=FitErrorKind.MAX_ITERATIONS_EXCEEDED,
            message="Max iterations reached",
        )
