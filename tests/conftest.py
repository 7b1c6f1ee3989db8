"""Shared pytest fixtures and test helpers for studiosite tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from studiosite.config.settings import SiteSettings
from studiosite.infrastructure.site import Site
from studiosite.services.frontend import FrontendBuildError

LAYOUT = """\
<!DOCTYPE html>
<html lang="en">
<head>
<title>Shell title</title>
<meta name="description" content="Shell description">
<meta property="og:image" content="https://example.test/shell.png">
<meta name="twitter:card" content="summary">
</head>
<body>
<span data-slot="heading">Shell heading</span>
<main data-slot="content"><p>placeholder</p></main>
</body>
</html>
"""

_ENV_VARS = (
    "STUDIOSITE_CONFIG",
    "STUDIOSITE_SITE_ROOT",
    "STUDIOSITE_API_KEY",
    "STUDIOSITE_CONNECTION_STRING",
    "MONGOOSE_STUDIO_API_KEY",
    "MONGODB_CONNECTION_STRING",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of settings resolution."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_log_handlers() -> Iterator[None]:
    """Drop handlers bound to a finished CliRunner's streams."""
    yield
    logging.getLogger().handlers.clear()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary site checkout with a layout and empty content directories.

    This is the single source of truth for the site directory layout.
    """
    content = tmp_path / "site"
    (content / "changelog").mkdir(parents=True)
    (content / "docs").mkdir()
    (content / "layout.html").write_text(LAYOUT, encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(site_root: Path) -> SiteSettings:
    return SiteSettings.from_cli(site_root=site_root)


@pytest.fixture
def site(settings: SiteSettings) -> Site:
    return Site(settings)


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp site root so the CLI builds the isolated site.

    Use via ``@pytest.mark.usefixtures("_isolated_site")`` on command test
    classes.
    """
    monkeypatch.chdir(site_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_source(path: Path, text: str, *, mtime: datetime | None = None) -> Path:
    """Write a Markdown source, optionally pinning its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    if mtime is not None:
        stamp = mtime.timestamp()
        os.utime(path, (stamp, stamp))
    return path


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=UTC)


def install_frontend_assets(site_root: Path, files: Mapping[str, str] | None = None) -> Path:
    """Lay out a fake ``@mongoosejs/studio`` install with prebuilt assets."""
    public = site_root / "node_modules" / "@mongoosejs" / "studio" / "frontend" / "public"
    for name, content in (files or {"index.html": "<html></html>", "app.js": "1;"}).items():
        target = public / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return public


class FakeFrontendBuilder:
    """Records build calls; raises when constructed with *error*."""

    def __init__(self, error: str | None = None) -> None:
        self.error = error
        self.calls: list[tuple[str, bool, dict[str, Any]]] = []

    async def build(
        self,
        mount_path: str,
        enable_static_export: bool,
        options: Mapping[str, Any],
    ) -> None:
        self.calls.append((mount_path, enable_static_export, dict(options)))
        if self.error is not None:
            raise FrontendBuildError(self.error)
