"""Tests for front-matter parsing."""

from datetime import date

import pytest

from studiosite.domain.frontmatter import parse_frontmatter, string_field


class TestParseFrontmatter:
    def test_basic_parse(self) -> None:
        content = "---\ntitle: Getting Started\ndescription: Intro\n---\nBody text here."
        fm, body = parse_frontmatter(content)
        assert fm == {"title": "Getting Started", "description": "Intro"}
        assert body == "Body text here."

    def test_blank_line_after_block_is_dropped(self) -> None:
        fm, body = parse_frontmatter("---\ntitle: A\n---\n\n# Heading\n")
        assert fm["title"] == "A"
        assert body == "# Heading\n"

    def test_no_frontmatter(self) -> None:
        content = "# Just a heading\n\nPlain text."
        fm, body = parse_frontmatter(content)
        assert fm == {}
        assert body == content

    def test_empty_content(self) -> None:
        assert parse_frontmatter("") == ({}, "")

    def test_missing_closing_delimiter(self) -> None:
        content = "---\ntitle: test\nNo closing delimiter"
        fm, body = parse_frontmatter(content)
        assert fm == {}
        assert body == content

    def test_crlf_line_endings(self) -> None:
        fm, body = parse_frontmatter("---\r\ntitle: Windows\r\n---\r\nLine 1\r\nLine 2")
        assert fm["title"] == "Windows"
        assert body == "Line 1\nLine 2"

    def test_key_order_preserved(self) -> None:
        fm, _body = parse_frontmatter("---\nzeta: 1\nalpha: 2\ntitle: T\n---\n")
        assert list(fm) == ["zeta", "alpha", "title"]

    def test_unknown_keys_pass_through(self) -> None:
        fm, _body = parse_frontmatter("---\ntitle: T\nsidebar: false\norder: 3\n---\n")
        assert fm["sidebar"] is False
        assert fm["order"] == 3

    def test_date_values_are_native(self) -> None:
        fm, _body = parse_frontmatter("---\npublishedAt: 2025-04-18\n---\n")
        assert fm["publishedAt"] == date(2025, 4, 18)

    def test_malformed_yaml_degrades_to_empty(self) -> None:
        fm, body = parse_frontmatter("---\ntitle: [unclosed\n---\nStill rendered.")
        assert fm == {}
        assert body == "Still rendered."

    @pytest.mark.parametrize("stamp", ["2025-02-30", "2025-13-01"])
    def test_off_calendar_date_degrades_to_empty(self, stamp: str) -> None:
        fm, body = parse_frontmatter(f"---\ntitle: A\npublishedAt: {stamp}\n---\nBody")
        assert fm == {}
        assert body == "Body"

    def test_non_mapping_yaml_degrades_to_empty(self) -> None:
        fm, body = parse_frontmatter("---\n- just\n- a list\n---\nBody")
        assert fm == {}
        assert body == "Body"

    def test_input_not_mutated(self) -> None:
        content = "---\ntitle: T\n---\nBody"
        parse_frontmatter(content)
        assert content == "---\ntitle: T\n---\nBody"


class TestStringField:
    def test_string_value(self) -> None:
        assert string_field({"title": "  Hello  "}, "title") == "Hello"

    def test_missing_and_blank(self) -> None:
        assert string_field({}, "title") is None
        assert string_field({"title": "   "}, "title") is None
        assert string_field({"title": None}, "title") is None

    def test_scalar_is_stringified(self) -> None:
        assert string_field({"title": 2025}, "title") == "2025"

    def test_collections_are_unusable(self) -> None:
        assert string_field({"title": ["a"]}, "title") is None
        assert string_field({"title": {"a": 1}}, "title") is None
