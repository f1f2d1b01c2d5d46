# SPDX-License-Identifier: Apache-2.0
"""Protocol for the document host the localizer mutates."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from sheet_localizer.core.models import ContainerNode, FontName, Metric, Node, TextNode


@runtime_checkable
class DocumentHost(Protocol):
    """Protocol for a document tree owner.

    The host performs every mutation and measurement. Size-dependent
    properties of a text node may only be read or written after its font
    has been loaded with :meth:`load_font`.
    """

    @property
    def page(self) -> ContainerNode:
        """Root container of the current page."""
        ...

    @property
    def selection(self) -> list[Node]:
        """Currently selected nodes."""
        ...

    @property
    def viewport_width(self) -> float:
        """Width of the visible canvas area."""
        ...

    async def load_font(self, font: FontName) -> None:
        """Load ``font`` so text using it can be edited and measured."""
        ...

    def set_characters(self, node: TextNode, text: str) -> None:
        """Replace the text content of ``node``."""
        ...

    def set_font_size(self, node: TextNode, size: float) -> None:
        """Apply a uniform font size to ``node``."""
        ...

    def set_line_height(self, node: TextNode, metric: Metric) -> None:
        """Apply a line height to ``node``."""
        ...

    def set_letter_spacing(self, node: TextNode, metric: Metric) -> None:
        """Apply a letter spacing to ``node``."""
        ...

    def set_auto_resize(self, node: TextNode, mode: str) -> None:
        """Change how ``node`` resizes around its content."""
        ...

    def measure(self, node: TextNode) -> tuple[float, float]:
        """Return the current ``(width, height)`` of ``node``."""
        ...

    def clone(self, node: Node) -> Node:
        """Return a detached deep copy of ``node``."""
        ...

    def append_child(self, parent: ContainerNode, node: Node) -> None:
        """Attach ``node`` as the last child of ``parent``."""
        ...

    def move(self, node: Node, x: float, y: float) -> None:
        """Position ``node``."""
        ...

    def rename(self, node: Node, name: str) -> None:
        """Rename ``node``."""
        ...

    def select(self, nodes: Sequence[Node]) -> None:
        """Replace the selection."""
        ...

    def scroll_into_view(self, nodes: Sequence[Node]) -> None:
        """Bring ``nodes`` into the viewport."""
        ...

    def notify(self, message: str) -> None:
        """Show a short non-blocking advisory to the user."""
        ...
