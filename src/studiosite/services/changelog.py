"""ChangelogService — release notes to per-version pages plus an index.

Pipeline per entry: parse front matter, render the body, derive the slug
and display version, pick a teaser, and resolve the publish date (declared
``publishedAt`` first, file mtime otherwise). Entries are ordered newest
first with a natural descending slug tie-break, then written as
``changelog/<slug>.html`` and ``changelog/index.html``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from studiosite.domain.frontmatter import parse_frontmatter, string_field
from studiosite.domain.pages import (
    ChangelogEntry,
    display_version,
    extract_summary,
    resolve_published_at,
    sort_entries,
)
from studiosite.infrastructure.filesystem import (
    UnreadableSourceError,
    collect_markdown,
    write_page,
)
from studiosite.infrastructure.layout import PageSlots
from studiosite.services.base import BaseService
from studiosite.services.result import ServiceResult

if TYPE_CHECKING:
    from studiosite.infrastructure.filesystem import SourceFile

logger = logging.getLogger(__name__)

OUTPUT_SUBDIR = "changelog"
INDEX_PAGE = "index.html"


class ChangelogService(BaseService):
    """Builds the changelog section of the site."""

    def build(self) -> ServiceResult:
        """Render every changelog entry and the index page.

        A missing shell skips the builder. A missing or empty changelog
        directory still produces an index page with no entries.
        """
        op = "build_changelog"
        layout = self._site.layout
        if layout is None:
            return self._skipped(
                op,
                "missing_layout",
                f"Missing layout at {self._site.layout_path}, skipping changelog build.",
            )

        sources = collect_markdown(self._site.changelog_dir, recursive=False)
        if not sources.exists:
            logger.info("No changelog entries found at %s", self._site.changelog_dir)

        try:
            entries = sort_entries([self._render_entry(source) for source in sources])
        except UnreadableSourceError as exc:
            msg = f"Cannot read changelog/{exc.relative_path} as UTF-8: {exc.reason}"
            logger.error(msg)
            return ServiceResult.failure(op, "UNREADABLE_SOURCE", msg, path=exc.relative_path)

        output_dir = self._site.public_dir / OUTPUT_SUBDIR
        site = self._site.settings.site
        env = self._site.templates("changelog")
        entry_template = env.get_template("entry.html.j2")
        written: list[str] = []

        for entry in entries:
            title = f"{site.product_name} {entry.display_version}"
            fragment = entry_template.render(entry=entry, product_name=site.product_name)
            page = layout.render(
                PageSlots(
                    page_title=title,
                    content=fragment,
                    description=entry.description,
                    meta=self._social_meta(title, entry.description),
                )
            )
            write_page(output_dir / f"{entry.slug}.html", page)
            written.append(f"{OUTPUT_SUBDIR}/{entry.slug}.html")

        index_title = f"{site.product_name} Changelog"
        index = layout.render(
            PageSlots(
                page_title=index_title,
                content=env.get_template("index.html.j2").render(
                    entries=entries,
                    product_name=site.product_name,
                    base_url=site.changelog_url,
                ),
                meta={"twitter:title": index_title},
            )
        )
        write_page(output_dir / INDEX_PAGE, index)
        written.append(f"{OUTPUT_SUBDIR}/{INDEX_PAGE}")

        noun = "entry" if len(entries) == 1 else "entries"
        logger.info("Built %d changelog %s.", len(entries), noun)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "output_dir": str(output_dir),
                "entry_count": len(entries),
                "page_count": len(written),
                "pages": written,
            },
        )

    def _render_entry(self, source: SourceFile) -> ChangelogEntry:
        metadata, body = parse_frontmatter(source.read_text())
        slug = source.stem
        return ChangelogEntry(
            slug=slug,
            display_version=display_version(slug),
            html=self._site.renderer.render(body),
            summary=extract_summary(body),
            description=string_field(metadata, "description"),
            published_at=resolve_published_at(metadata.get("publishedAt"), source.mtime()),
        )

    def _social_meta(self, title: str, description: str | None) -> dict[str, str]:
        meta = {"twitter:title": title}
        if description:
            meta["twitter:description"] = description
        return meta
