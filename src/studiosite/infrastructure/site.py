"""Site — per-build handle on content, output, and rendering collaborators.

Created once per CLI invocation from :class:`SiteSettings`. Services take
a Site at construction time and never reach for settings or globals
directly. The shared shell is loaded lazily, at most once per build.
"""

from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING

from studiosite.infrastructure.layout import PageLayout, load_layout
from studiosite.infrastructure.markdown import MarkdownRenderer, RendererConfig
from studiosite.infrastructure.templates import build_template_environment

if TYPE_CHECKING:
    from jinja2 import Environment

    from studiosite.config.settings import SiteSettings

TEMPLATE_OVERRIDE_DIR = "_templates"


class Site:
    """Resolved paths plus the renderer, shell, and fragment templates."""

    def __init__(self, settings: SiteSettings, *, renderer: MarkdownRenderer | None = None) -> None:
        self.settings = settings
        self.renderer = renderer or MarkdownRenderer(
            RendererConfig(
                languages=dict(settings.markdown.highlight_languages),
                plugins=tuple(settings.markdown.plugins),
                escape_html=settings.markdown.escape_html,
            )
        )

    @property
    def root(self) -> Path:
        return self.settings.site_root

    @property
    def layout_path(self) -> Path:
        return self.settings.layout_path

    @property
    def changelog_dir(self) -> Path:
        return self.settings.changelog_dir

    @property
    def docs_dir(self) -> Path:
        return self.settings.docs_dir

    @property
    def public_dir(self) -> Path:
        return self.settings.public_dir

    @cached_property
    def layout(self) -> PageLayout | None:
        """The shared shell, or None when the layout file is missing."""
        return load_layout(self.layout_path)

    def templates(self, group: str) -> Environment:
        """Jinja2 environment for one fragment group (``changelog``, ``docs``)."""
        return build_template_environment(
            group, override_root=self.settings.content_dir / TEMPLATE_OVERRIDE_DIR
        )
