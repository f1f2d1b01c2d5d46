# SPDX-License-Identifier: Apache-2.0
"""Data models for document trees and localization results.

This module defines the document node variants the localizer walks, the
text metrics the fit engine rescales, and the per-call result records.
Documents can be serialized to and from JSON so a tree can be localized
outside of a design tool.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Union

SCHEMA_VERSION = "1.0.0"

DEFAULT_FONT_SIZE = 16.0


class MetricUnit(str, Enum):
    """Unit of a line-height or letter-spacing value."""

    PIXELS = "PIXELS"
    PERCENT = "PERCENT"
    AUTO = "AUTO"


class FitErrorKind(str, Enum):
    """Reason a fit attempt did not reach its target."""

    BELOW_MINIMUM = "below_minimum"
    MAX_ITERATIONS_EXCEEDED = "max_iterations_exceeded"
    NO_CONTAINER = "no_container"
    FAILED = "failed"


@dataclass
class Metric:
    """A size-linked text metric such as line height.

    Attributes:
        value: Numeric value (ignored for AUTO)
        unit: Unit of the value
    """

    value: float = 0.0
    unit: MetricUnit = MetricUnit.AUTO

    @property
    def is_absolute(self) -> bool:
        """Whether the value scales with font size when shrinking."""
        return self.unit == MetricUnit.PIXELS

    def scaled(self, ratio: float) -> Metric:
        """Return a copy with the value multiplied by ``ratio``."""
        return Metric(value=self.value * ratio, unit=self.unit)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"value": self.value, "unit": self.unit.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Metric:
        """Create from dictionary."""
        return cls(
            value=float(data.get("value", 0.0)),
            unit=MetricUnit(data.get("unit", MetricUnit.AUTO.value)),
        )


@dataclass(frozen=True)
class FontName:
    """Font family and style pair."""

    family: str = "Inter"
    style: str = "Regular"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"family": self.family, "style": self.style}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FontName:
        """Create from dictionary."""
        return cls(
            family=data.get("family", "Inter"),
            style=data.get("style", "Regular"),
        )


@dataclass(eq=False)
class ContainerNode:
    """A node that groups other nodes (page, frame, group).

    Attributes:
        name: Layer name
        children: Ordered child nodes
        x: Left position
        y: Top position
        width: Fixed width, or None when the node has no fixed bounds
        height: Fixed height, or None when the node has no fixed bounds
        parent: Back reference, set when attached to a parent
    """

    name: str
    children: list[Node] = field(default_factory=list)
    x: float = 0.0
    y: float = 0.0
    width: float | None = None
    height: float | None = None
    parent: ContainerNode | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    @property
    def has_fixed_bounds(self) -> bool:
        """Whether both width and height are known."""
        return self.width is not None and self.height is not None

    def append(self, child: Node) -> None:
        """Attach ``child`` as the last child."""
        if child.parent is not None and child.parent is not self:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {
            "type": "container",
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "children": [child.to_dict() for child in self.children],
        }
        if self.width is not None:
            data["width"] = self.width
        if self.height is not None:
            data["height"] = self.height
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContainerNode:
        """Create from dictionary."""
        width = data.get("width")
        height = data.get("height")
        return cls(
            name=data.get("name", ""),
            children=[node_from_dict(child) for child in data.get("children", [])],
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            width=float(width) if width is not None else None,
            height=float(height) if height is not None else None,
        )


@dataclass(eq=False)
class TextNode:
    """A node holding directly editable character content.

    Attributes:
        name: Layer name, used as the localization key
        characters: Text content
        font: Font used by the content
        font_size: Uniform font size
        line_height: Line height metric
        letter_spacing: Letter spacing metric
        auto_resize: Host auto-resize mode ("NONE", "WIDTH_AND_HEIGHT", "HEIGHT")
        width: Last measured width
        height: Last measured height
        parent: Back reference, set when attached to a parent
    """

    name: str
    characters: str = ""
    font: FontName = field(default_factory=FontName)
    font_size: float = DEFAULT_FONT_SIZE
    line_height: Metric = field(default_factory=Metric)
    letter_spacing: Metric = field(default_factory=lambda: Metric(0.0, MetricUnit.PERCENT))
    auto_resize: str = "WIDTH_AND_HEIGHT"
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    parent: ContainerNode | None = field(default=None, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": "text",
            "name": self.name,
            "characters": self.characters,
            "font": self.font.to_dict(),
            "font_size": self.font_size,
            "line_height": self.line_height.to_dict(),
            "letter_spacing": self.letter_spacing.to_dict(),
            "auto_resize": self.auto_resize,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TextNode:
        """Create from dictionary."""
        return cls(
            name=data.get("name", ""),
            characters=data.get("characters", ""),
            font=FontName.from_dict(data.get("font", {})),
            font_size=float(data.get("font_size", DEFAULT_FONT_SIZE)),
            line_height=Metric.from_dict(data.get("line_height", {})),
            letter_spacing=Metric.from_dict(
                data.get("letter_spacing", {"value": 0.0, "unit": "PERCENT"})
            ),
            auto_resize=data.get("auto_resize", "WIDTH_AND_HEIGHT"),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            width=float(data.get("width", 0.0)),
            height=float(data.get("height", 0.0)),
        )


Node = Union[ContainerNode, TextNode]


def node_from_dict(data: dict[str, Any]) -> Node:
    """Create a node of the variant named by ``data["type"]``.

    Raises:
        ValueError: If the type tag is unknown.
    """
    node_type = data.get("type", "container")
    if node_type == "text":
        return TextNode.from_dict(data)
    if node_type == "container":
        return ContainerNode.from_dict(data)
    raise ValueError(f"Unknown node type: {node_type!r}")


@dataclass
class Section:
    """A subtree classified as belonging to one language."""

    root: Node
    language: str
    name: str


@dataclass
class FitResult:
    """Outcome of one fit attempt on one text node.

    Attributes:
        applied: True when the text fits after at least one shrink step
        original_font_size: Font size before fitting
        new_font_size: Last font size actually applied
        error: Failure reason, None on success
        message: Human readable detail for ``error``
    """

    applied: bool
    original_font_size: float | None = None
    new_font_size: float | None = None
    error: FitErrorKind | None = None
    message: str = ""


@dataclass
class SectionResult:
    """Counts and warnings produced by localizing one section."""

    localized_count: int = 0
    autosized_count: int = 0
    warnings: list[str] = field(default_factory=list)
    total_text_nodes: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "localized": self.localized_count,
            "autosized": self.autosized_count,
            "warnings": list(self.warnings),
            "total_text_nodes": self.total_text_nodes,
        }


@dataclass
class Document:
    """A page tree with an optional selection.

    Attributes:
        page: Root container of the document
        selection: Names of selected top-level-or-nested nodes
        viewport_width: Width of the visible canvas area
    """

    page: ContainerNode
    selection: list[str] = field(default_factory=list)
    viewport_width: float = 1920.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "schema_version": SCHEMA_VERSION,
            "viewport_width": self.viewport_width,
            "selection": list(self.selection),
            "page": self.page.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Document:
        """Create from dictionary."""
        page = node_from_dict(data["page"])
        if not isinstance(page, ContainerNode):
            raise ValueError("Document page must be a container node")
        return cls(
            page=page,
            selection=list(data.get("selection", [])),
            viewport_width=float(data.get("viewport_width", 1920.0)),
        )

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @classmethod
    def from_json(cls, text: str) -> Document:
        """Deserialize from a JSON string."""
        return cls.from_dict(json.loads(text))

    def save(self, path: Path) -> None:
        """Write the document to ``path`` as JSON."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> Document:
        """Read a document from a JSON file."""
        return cls.from_json(path.read_text(encoding="utf-8"))
