# SPDX-License-Identifier: Apache-2.0
"""Map document nodes to language sections.

A node belongs to a language when its trimmed, upper-cased name equals a
language code, or else contains one. Substring matching follows the
declared language order, so with ``[EN, FR]`` a frame named
``"FRENCH"`` matches ``EN`` first. Short codes can also match unrelated
words (``"HEADER"`` contains ``DE``); name sections accordingly.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .models import ContainerNode, Node, Section, TextNode

logger = logging.getLogger(__name__)


def classify(name: str, languages: Sequence[str]) -> str | None:
    """Return the language code a node name refers to, if any."""
    clean_name = name.strip().upper()
    if clean_name in languages:
        return clean_name

    for language in languages:
        if language in clean_name:
            return language

    return None


def find_sections(root: ContainerNode, languages: Sequence[str]) -> list[Section]:
    """Find language sections below ``root`` in depth-first pre-order.

    ``root`` itself (normally the page) is not a candidate. A matching node
    becomes a section and its subtree is not searched for further sections.
    """
    sections: list[Section] = []

    def visit(node: Node) -> None:
        language = classify(node.name, languages)
        if language is not None:
            sections.append(Section(root=node, language=language, name=node.name))
        elif isinstance(node, ContainerNode):
            for child in node.children:
                visit(child)

    for child in root.children:
        visit(child)

    logger.debug("Found %d language section(s)", len(sections))
    return sections


def sections_from_selection(
    nodes: Iterable[Node],
    languages: Sequence[str],
) -> list[Section]:
    """Classify each selected node directly, without descending."""
    sections: list[Section] = []
    for node in nodes:
        language = classify(node.name, languages)
        if language is not None:
            sections.append(Section(root=node, language=language, name=node.name))
    return sections


def find_text_leaves(root: Node) -> list[TextNode]:
    """Collect every text node under ``root`` (inclusive) in depth-first order."""
    leaves: list[TextNode] = []

    def visit(node: Node) -> None:
        if isinstance(node, TextNode):
            leaves.append(node)
        elif isinstance(node, ContainerNode):
            for child in node.children:
                visit(child)

    visit(root)
    return leaves
