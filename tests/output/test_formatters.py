"""Tests for ServiceResult formatting."""

import json

from studiosite.output.formatters import OutputSettings, format_result
from studiosite.services.result import ServiceResult


def _site_result() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="build_site",
        data={
            "page_count": 3,
            "steps": {
                "build_changelog": {"page_count": 2, "pages": ["changelog/index.html"]},
                "build_docs": {"page_count": 1, "pages": ["docs/index.html"]},
            },
        },
        meta={"duration_ms": 12.5},
    )


class TestJson:
    def test_round_trips_fields(self) -> None:
        payload = json.loads(format_result(_site_result(), json_output=True))
        assert payload["ok"] is True
        assert payload["op"] == "build_site"
        assert payload["data"]["page_count"] == 3
        assert payload["meta"]["duration_ms"] == 12.5


class TestQuiet:
    def test_ok(self) -> None:
        out = format_result(_site_result(), settings=OutputSettings(quiet=True))
        assert out == "OK: build_site"

    def test_error(self) -> None:
        result = ServiceResult.failure("build_docs", "MISSING_TITLE", "no title")
        out = format_result(result, settings=OutputSettings(quiet=True))
        assert out.startswith("ERROR: build_docs")
        assert "no title" in out


class TestRich:
    def test_site_table(self) -> None:
        out = format_result(_site_result())
        assert "OK" in out
        assert "build_site" in out
        assert "build_changelog" in out
        assert "build_docs" in out
        assert "docs/index.html" not in out

    def test_site_verbose_lists_pages(self) -> None:
        out = format_result(_site_result(), settings=OutputSettings(verbose=True))
        assert "docs/index.html" in out
        assert "duration_ms" in out

    def test_builder_fields(self) -> None:
        result = ServiceResult(
            ok=True,
            op="build_changelog",
            data={"output_dir": "/tmp/public/changelog", "entry_count": 2, "page_count": 3},
        )
        out = format_result(result)
        assert "entry_count: 2" in out
        assert "page_count: 3" in out
        assert "/tmp/public/changelog" in out

    def test_skipped_builder(self) -> None:
        result = ServiceResult(
            ok=True, op="build_docs", data={"skipped": "missing_docs_dir", "page_count": 0}
        )
        assert "skipped: missing_docs_dir" in format_result(result)

    def test_error_detail_only_when_verbose(self) -> None:
        result = ServiceResult.failure("build_docs", "MISSING_TITLE", "no title", path="a.md")
        assert "path: a.md" not in format_result(result)
        verbose = format_result(result, settings=OutputSettings(verbose=True))
        assert "ERROR" in verbose
        assert "path: a.md" in verbose

    def test_unknown_op_uses_builder_layout(self) -> None:
        result = ServiceResult(ok=True, op="custom", data={"page_count": 4, "other": "x"})
        out = format_result(result)
        assert "custom" in out
        assert "page_count: 4" in out
        assert "other" not in out
