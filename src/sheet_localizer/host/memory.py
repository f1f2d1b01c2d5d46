# SPDX-License-Identifier: Apache-2.0
"""Headless document host backed by the JSON document model.

Text bounds are estimated from character count and font size rather than
real glyph metrics, which is enough to drive the fit engine outside of a
design tool.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator, Sequence

from sheet_localizer.core.models import (
    ContainerNode,
    Document,
    FontName,
    Metric,
    MetricUnit,
    Node,
    TextNode,
    node_from_dict,
)

logger = logging.getLogger(__name__)

LATIN_WIDTH_FACTOR = 0.55
CJK_WIDTH_FACTOR = 0.9
AUTO_LINE_HEIGHT_FACTOR = 1.2

# (start, end) code point ranges rendered at roughly full width
_WIDE_RANGES: tuple[tuple[int, int], ...] = (
    (0x1100, 0x115F),  # Hangul Jamo
    (0x2E80, 0x303E),  # CJK radicals, punctuation
    (0x3041, 0x33FF),  # Kana, CJK symbols
    (0x3400, 0x4DBF),  # CJK Extension A
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0xAC00, 0xD7A3),  # Hangul syllables
    (0xF900, 0xFAFF),  # CJK compatibility ideographs
    (0xFF00, 0xFF60),  # Fullwidth forms
)


def is_wide_char(char: str) -> bool:
    """Whether ``char`` is a full-width (CJK) character."""
    code = ord(char)
    return any(start <= code <= end for start, end in _WIDE_RANGES)


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield ``root`` and its descendants in depth-first pre-order."""
    yield root
    if isinstance(root, ContainerNode):
        for child in root.children:
            yield from iter_nodes(child)


class InMemoryHost:
    """Document host operating on a :class:`Document`.

    Attributes:
        notifications: Advisories passed to :meth:`notify`, oldest first.
    """

    def __init__(
        self,
        document: Document,
        available_fonts: set[FontName] | None = None,
        require_loaded_fonts: bool = True,
    ) -> None:
        """Initialize InMemoryHost.

        Args:
            document: Document to operate on.
            available_fonts: Fonts that can be loaded. None allows any font.
            require_loaded_fonts: Reject text edits on fonts not yet loaded.
        """
        self._document = document
        self._available_fonts = available_fonts
        self._require_loaded_fonts = require_loaded_fonts
        self._loaded_fonts: set[FontName] = set()
        self._selection: list[Node] = self._resolve_selection(document.selection)
        self.notifications: list[str] = []

        for node in iter_nodes(document.page):
            if isinstance(node, TextNode):
                self._remeasure(node)

    @property
    def document(self) -> Document:
        """The underlying document."""
        return self._document

    @property
    def page(self) -> ContainerNode:
        return self._document.page

    @property
    def selection(self) -> list[Node]:
        return list(self._selection)

    @property
    def viewport_width(self) -> float:
        return self._document.viewport_width

    @property
    def loaded_fonts(self) -> frozenset[FontName]:
        """Fonts loaded so far."""
        return frozenset(self._loaded_fonts)

    async def load_font(self, font: FontName) -> None:
        if self._available_fonts is not None and font not in self._available_fonts:
            raise RuntimeError(f"Font '{font.family} {font.style}' is not available")
        await asyncio.sleep(0)
        self._loaded_fonts.add(font)

    def set_characters(self, node: TextNode, text: str) -> None:
        self._check_font(node)
        node.characters = text
        self._remeasure(node)

    def set_font_size(self, node: TextNode, size: float) -> None:
        self._check_font(node)
        if size <= 0:
            raise ValueError(f"Font size must be positive, got {size}")
        node.font_size = size
        self._remeasure(node)

    def set_line_height(self, node: TextNode, metric: Metric) -> None:
        self._check_font(node)
        node.line_height = metric
        self._remeasure(node)

    def set_letter_spacing(self, node: TextNode, metric: Metric) -> None:
        self._check_font(node)
        node.letter_spacing = metric
        self._remeasure(node)

    def set_auto_resize(self, node: TextNode, mode: str) -> None:
        node.auto_resize = mode

    def measure(self, node: TextNode) -> tuple[float, float]:
        return node.width, node.height

    def clone(self, node: Node) -> Node:
        copy = node_from_dict(node.to_dict())
        for descendant in iter_nodes(copy):
            if isinstance(descendant, TextNode):
                self._remeasure(descendant)
        return copy

    def append_child(self, parent: ContainerNode, node: Node) -> None:
        parent.append(node)

    def move(self, node: Node, x: float, y: float) -> None:
        node.x = x
        node.y = y

    def rename(self, node: Node, name: str) -> None:
        node.name = name

    def select(self, nodes: Sequence[Node]) -> None:
        self._selection = list(nodes)
        self._document.selection = [node.name for node in nodes]

    def scroll_into_view(self, nodes: Sequence[Node]) -> None:
        logger.debug("Scrolled %d node(s) into view", len(nodes))

    def notify(self, message: str) -> None:
        logger.warning(message)
        self.notifications.append(message)

    def estimate_size(self, node: TextNode) -> tuple[float, float]:
        """Estimate the rendered ``(width, height)`` of ``node``."""
        size = node.font_size
        spacing = self._letter_spacing_px(node.letter_spacing, size)
        lines = node.characters.split("\n") if node.characters else [""]

        width = 0.0
        for line in lines:
            line_width = sum(
                size * (CJK_WIDTH_FACTOR if is_wide_char(char) else LATIN_WIDTH_FACTOR)
                for char in line
            )
            line_width += spacing * max(len(line) - 1, 0)
            width = max(width, line_width)

        height = len(lines) * self._line_height_px(node.line_height, size)
        return round(width, 4), round(height, 4)

    def _remeasure(self, node: TextNode) -> None:
        node.width, node.height = self.estimate_size(node)

    def _check_font(self, node: TextNode) -> None:
        if self._require_loaded_fonts and node.font not in self._loaded_fonts:
            raise RuntimeError(
                f"Cannot edit '{node.name}' before font "
                f"'{node.font.family} {node.font.style}' is loaded"
            )

    @staticmethod
    def _line_height_px(metric: Metric, font_size: float) -> float:
        if metric.unit == MetricUnit.PIXELS:
            return metric.value
        if metric.unit == MetricUnit.PERCENT:
            return font_size * metric.value / 100.0
        return font_size * AUTO_LINE_HEIGHT_FACTOR

    @staticmethod
    def _letter_spacing_px(metric: Metric, font_size: float) -> float:
        if metric.unit == MetricUnit.PIXELS:
            return metric.value
        if metric.unit == MetricUnit.PERCENT:
            return font_size * metric.value / 100.0
        return 0.0

    def _resolve_selection(self, names: Sequence[str]) -> list[Node]:
        wanted = list(names)
        if not wanted:
            return []
        by_name: dict[str, Node] = {}
        for node in iter_nodes(self._document.page):
            if node is self._document.page:
                continue
            by_name.setdefault(node.name, node)
        missing = [name for name in wanted if name not in by_name]
        if missing:
            logger.warning("Selected node(s) not found: %s", ", ".join(missing))
        return [by_name[name] for name in wanted if name in by_name]
