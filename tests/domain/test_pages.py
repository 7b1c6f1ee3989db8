"""Tests for changelog entry and doc page models and their helpers."""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from studiosite.domain.pages import (
    ChangelogEntry,
    DocPage,
    coerce_published_at,
    display_version,
    extract_summary,
    format_date_label,
    natural_key,
    resolve_published_at,
    sort_entries,
)


def _entry(slug: str, published_at: datetime) -> ChangelogEntry:
    return ChangelogEntry(
        slug=slug,
        display_version=display_version(slug),
        html="",
        published_at=published_at,
    )


class TestDisplayVersion:
    def test_adds_prefix(self) -> None:
        assert display_version("1.2.0") == "v1.2.0"

    def test_keeps_existing_prefix(self) -> None:
        assert display_version("v2.0.0") == "v2.0.0"


class TestExtractSummary:
    def test_skips_headings_and_blank_lines(self) -> None:
        markdown = "# 1.2.0\n\n## Highlights\n\n  Faster queries.  \nMore text."
        assert extract_summary(markdown) == "Faster queries."

    def test_list_item_counts_as_content(self) -> None:
        assert extract_summary("# Title\n- Fixed a bug") == "- Fixed a bug"

    def test_headings_only(self) -> None:
        assert extract_summary("# 1.0.0\n\n## Notes\n") == ""

    def test_empty(self) -> None:
        assert extract_summary("") == ""


class TestCoercePublishedAt:
    def test_date(self) -> None:
        assert coerce_published_at(date(2025, 3, 4)) == datetime(2025, 3, 4, tzinfo=UTC)

    def test_naive_datetime_is_utc(self) -> None:
        assert coerce_published_at(datetime(2025, 3, 4, 10, 30)) == datetime(
            2025, 3, 4, 10, 30, tzinfo=UTC
        )

    def test_aware_datetime_is_converted(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        value = datetime(2025, 3, 4, 10, 0, tzinfo=plus_two)
        assert coerce_published_at(value) == datetime(2025, 3, 4, 8, 0, tzinfo=UTC)

    def test_iso_string(self) -> None:
        assert coerce_published_at("2025-03-04") == datetime(2025, 3, 4, tzinfo=UTC)

    def test_iso_string_with_zulu(self) -> None:
        assert coerce_published_at("2025-03-04T12:00:00Z") == datetime(
            2025, 3, 4, 12, tzinfo=UTC
        )

    @pytest.mark.parametrize("value", ["not a date", "", "   ", 42, None, ["2025-01-01"]])
    def test_unusable_values(self, value: object) -> None:
        assert coerce_published_at(value) is None


class TestResolvePublishedAt:
    def test_declared_date_wins(self) -> None:
        mtime = datetime(2020, 1, 1, tzinfo=UTC).timestamp()
        resolved = resolve_published_at("2025-03-04", mtime)
        assert resolved == datetime(2025, 3, 4, tzinfo=UTC)

    def test_falls_back_to_mtime(self) -> None:
        mtime = datetime(2024, 6, 1, 8, 0, tzinfo=UTC).timestamp()
        assert resolve_published_at(None, mtime) == datetime(2024, 6, 1, 8, 0, tzinfo=UTC)

    def test_invalid_string_falls_back_to_mtime(self) -> None:
        mtime = datetime(2024, 6, 1, tzinfo=UTC).timestamp()
        assert resolve_published_at("sometime soon", mtime) == datetime(2024, 6, 1, tzinfo=UTC)


class TestChangelogEntry:
    def test_derived_dates(self) -> None:
        entry = _entry("1.0.0", datetime(2025, 3, 5, 23, 0, tzinfo=UTC))
        assert entry.published_at_iso == "2025-03-05"
        assert entry.published_at_label == "Mar 05, 2025"

    def test_frozen(self) -> None:
        entry = _entry("1.0.0", datetime(2025, 3, 5, tzinfo=UTC))
        with pytest.raises(Exception):
            entry.slug = "2.0.0"  # type: ignore[misc]


class TestDocPage:
    def test_output_path_mirrors_source(self) -> None:
        page = DocPage(relative_path="guide/a.md", title="A", html="", image="x")
        assert page.output_path == "guide/a.html"

    def test_output_path_uppercase_extension(self) -> None:
        page = DocPage(relative_path="README.MD", title="Readme", html="", image="x")
        assert page.output_path == "README.html"

    def test_description_defaults_empty(self) -> None:
        page = DocPage(relative_path="a.md", title="A", html="", image="x")
        assert page.description == ""


class TestFormatDateLabel:
    def test_pads_day(self) -> None:
        assert format_date_label(datetime(2024, 1, 2, tzinfo=UTC)) == "Jan 02, 2024"

    def test_december(self) -> None:
        assert format_date_label(datetime(2023, 12, 31, tzinfo=UTC)) == "Dec 31, 2023"


class TestNaturalOrdering:
    def test_numeric_chunks(self) -> None:
        slugs = ["2.0.0", "10.0.0", "1.5.0"]
        assert sorted(slugs, key=natural_key, reverse=True) == ["10.0.0", "2.0.0", "1.5.0"]

    def test_prefixed_versions(self) -> None:
        assert natural_key("v2.0.0") > natural_key("v1.9.0")

    def test_case_insensitive(self) -> None:
        assert natural_key("Beta") == natural_key("beta")

    def test_text_slugs_alphabetical(self) -> None:
        slugs = ["apple", "cherry", "banana"]
        assert sorted(slugs, key=natural_key) == ["apple", "banana", "cherry"]


class TestSortEntries:
    def test_newest_first(self) -> None:
        old = _entry("9.0.0", datetime(2024, 1, 1, tzinfo=UTC))
        new = _entry("1.0.0", datetime(2025, 1, 1, tzinfo=UTC))
        assert [e.slug for e in sort_entries([old, new])] == ["1.0.0", "9.0.0"]

    def test_ties_break_by_descending_slug(self) -> None:
        same = datetime(2025, 1, 1, tzinfo=UTC)
        entries = [_entry(slug, same) for slug in ("2.0.0", "10.0.0", "1.5.0")]
        assert [e.slug for e in sort_entries(entries)] == ["10.0.0", "2.0.0", "1.5.0"]
