# SPDX-License-Identifier: Apache-2.0
"""Tests for language classification and tree traversal."""

from __future__ import annotations

from sheet_localizer.core.models import ContainerNode, TextNode
from sheet_localizer.core.section_matcher import (
    classify,
    find_sections,
    find_text_leaves,
    sections_from_selection,
)

LANGUAGES = ("EN", "FR", "DE")


class TestClassify:
    """Tests for classify."""

    def test_exact_match(self) -> None:
        assert classify("fr", LANGUAGES) == "FR"

    def test_exact_match_trims(self) -> None:
        assert classify("  de  ", LANGUAGES) == "DE"

    def test_substring_match(self) -> None:
        assert classify("FR_Hero", LANGUAGES) == "FR"

    def test_no_match(self) -> None:
        assert classify("Banner", LANGUAGES) is None

    def test_declaration_order_wins(self) -> None:
        assert classify("DE-FR variant", LANGUAGES) == "FR"
        assert classify("DE-FR variant", ("DE", "FR")) == "DE"

    def test_exact_match_beats_earlier_substring(self) -> None:
        assert classify("ENG", ("EN", "ENG")) == "ENG"

    def test_short_code_matches_inside_word(self) -> None:
        # "HEADER" contains "DE"
        assert classify("Header", LANGUAGES) == "DE"
        assert classify("Header", ("EN", "FR")) is None

    def test_empty_languages(self) -> None:
        assert classify("EN", ()) is None


def build_page() -> ContainerNode:
    return ContainerNode(
        name="Page 1",
        children=[
            ContainerNode(
                name="EN",
                children=[
                    TextNode(name="title"),
                    ContainerNode(name="FR nested", children=[TextNode(name="body")]),
                ],
            ),
            ContainerNode(
                name="Group",
                children=[
                    ContainerNode(name="fr_landing", children=[TextNode(name="title")]),
                    TextNode(name="loose"),
                ],
            ),
            TextNode(name="caption"),
            TextNode(name="DE"),
        ],
    )


class TestFindSections:
    """Tests for find_sections."""

    def test_sections_in_preorder(self) -> None:
        sections = find_sections(build_page(), LANGUAGES)
        assert [(s.name, s.language) for s in sections] == [
            ("EN", "EN"),
            ("fr_landing", "FR"),
            ("DE", "DE"),
        ]

    def test_matching_section_is_not_descended(self) -> None:
        sections = find_sections(build_page(), LANGUAGES)
        assert "FR nested" not in [s.name for s in sections]

    def test_page_itself_is_not_a_candidate(self) -> None:
        page = ContainerNode(name="EN page", children=[])
        assert find_sections(page, LANGUAGES) == []

    def test_section_root_is_the_node(self) -> None:
        page = build_page()
        sections = find_sections(page, LANGUAGES)
        assert sections[0].root is page.children[0]


class TestSectionsFromSelection:
    """Tests for sections_from_selection."""

    def test_classifies_without_descending(self) -> None:
        page = build_page()
        group = page.children[1]
        en = page.children[0]
        sections = sections_from_selection([group, en], LANGUAGES)
        assert [s.name for s in sections] == ["EN"]


class TestFindTextLeaves:
    """Tests for find_text_leaves."""

    def test_collects_all_text_in_order(self) -> None:
        page = build_page()
        leaves = find_text_leaves(page)
        assert [leaf.name for leaf in leaves] == [
            "title",
            "body",
            "title",
            "loose",
            "caption",
            "DE",
        ]

    def test_text_root_is_included(self) -> None:
        node = TextNode(name="solo")
        assert find_text_leaves(node) == [node]

    def test_empty_container(self) -> None:
        assert find_text_leaves(ContainerNode(name="empty")) == []
