"""DocsService — nested topic pages to a mirrored HTML tree.

``docs/guide/install.md`` becomes ``public/docs/guide/install.html``.
Every page must declare a ``title`` in its front matter; one missing title
fails the whole build. Pages are rendered and validated before anything is
written, so a failed build leaves no partial output behind.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from studiosite.domain.frontmatter import KNOWN_KEYS, parse_frontmatter, string_field
from studiosite.domain.pages import DocPage
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

OUTPUT_SUBDIR = "docs"


class MissingTitleError(ValueError):
    """A docs page has no ``title`` in its front matter."""

    def __init__(self, relative_path: str) -> None:
        self.relative_path = relative_path
        super().__init__(f"Missing required front matter field 'title' in docs/{relative_path}")


class DocsService(BaseService):
    """Builds the documentation section of the site."""

    def build(self) -> ServiceResult:
        op = "build_docs"
        layout = self._site.layout
        if layout is None:
            return self._skipped(
                op,
                "missing_layout",
                f"Missing layout at {self._site.layout_path}, skipping docs build.",
            )

        sources = collect_markdown(self._site.docs_dir)
        if not sources.exists:
            return self._skipped(
                op,
                "missing_docs_dir",
                f"No docs found at {self._site.docs_dir}, skipping docs build.",
            )

        try:
            pages = [self._render_page(source) for source in sources]
        except MissingTitleError as exc:
            logger.error("%s", exc)
            return ServiceResult.failure(
                op,
                "MISSING_TITLE",
                str(exc),
                path=exc.relative_path,
            )
        except UnreadableSourceError as exc:
            msg = f"Cannot read docs/{exc.relative_path} as UTF-8: {exc.reason}"
            logger.error(msg)
            return ServiceResult.failure(op, "UNREADABLE_SOURCE", msg, path=exc.relative_path)

        output_dir = self._site.public_dir / OUTPUT_SUBDIR
        site = self._site.settings.site
        page_template = self._site.templates("docs").get_template("page.html.j2")
        written: list[str] = []

        for page in pages:
            fragment = page_template.render(page=page, base_url=site.docs_url)
            html = layout.render(
                PageSlots(
                    page_title=f"{page.title} - {site.product_name} Docs",
                    content=fragment,
                    description=page.description,
                    meta=self._social_meta(page),
                )
            )
            write_page(output_dir / Path(page.output_path), html)
            written.append(f"{OUTPUT_SUBDIR}/{page.output_path}")

        noun = "page" if len(pages) == 1 else "pages"
        logger.info("Built %d docs %s.", len(pages), noun)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "output_dir": str(output_dir),
                "page_count": len(written),
                "pages": written,
            },
        )

    def _render_page(self, source: SourceFile) -> DocPage:
        metadata, body = parse_frontmatter(source.read_text())
        title = string_field(metadata, "title")
        if title is None:
            raise MissingTitleError(source.relative_path)

        return DocPage(
            relative_path=source.relative_path,
            title=title,
            description=string_field(metadata, "description") or "",
            html=self._site.renderer.render(body),
            image=self._resolve_image(metadata.get("image")),
            metadata={k: v for k, v in metadata.items() if k not in KNOWN_KEYS},
        )

    def _resolve_image(self, declared: Any) -> str:
        """Declared image URL when it is a non-blank string, else the default asset."""
        if isinstance(declared, str) and declared.strip():
            return declared
        return self._site.settings.site.default_image

    def _social_meta(self, page: DocPage) -> dict[str, str]:
        meta = {
            "og:image": page.image,
            "twitter:image": page.image,
            "twitter:card": self._site.settings.site.twitter_card,
            "twitter:title": page.title,
        }
        if page.description:
            meta["twitter:description"] = page.description
        return meta
