"""Page template engine — fills the shared HTML shell.

The shell is kept as a string and parsed fresh for every page, so values
written into one page's tree can never leak into the next. Slots:

- ``<title>``: replaced with the page title (plain text)
- ``[data-slot="heading"]``: text replaced with the heading
- ``[data-slot="content"]``: inner HTML replaced verbatim (trusted)
- social ``<meta>`` tags: ``content`` updated per supplied key

Slots without a value keep whatever the shell shipped with.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

HEADING_SLOT = '[data-slot="heading"]'
CONTENT_SLOT = '[data-slot="content"]'

_PARSER = "html.parser"


@dataclass(frozen=True)
class PageSlots:
    """Values to inject into one page. ``None`` or empty means "leave as is"."""

    page_title: str | None = None
    heading: str | None = None
    content: str | None = None
    description: str | None = None
    meta: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


def _set_meta(soup: BeautifulSoup, key: str, value: str) -> None:
    tag = soup.find("meta", attrs={"property": key}) or soup.find("meta", attrs={"name": key})
    if tag is not None:
        tag["content"] = value
        return

    head = soup.head
    if head is None:
        logger.debug("Template has no <head>, dropping meta %s", key)
        return
    attr = "property" if key.startswith("og:") else "name"
    head.append(soup.new_tag("meta", attrs={attr: key, "content": value}))


def apply_template(template: str, slots: PageSlots) -> str:
    """Return a full HTML document built from *template* and *slots*.

    *slots.content* is inserted as-is; escaping anything untrusted in it
    is the caller's job.
    """
    soup = BeautifulSoup(template, _PARSER)

    if slots.page_title:
        title = soup.find("title")
        if title is not None:
            title.string = slots.page_title

    if slots.heading:
        heading = soup.select_one(HEADING_SLOT)
        if heading is not None:
            heading.string = slots.heading

    if slots.content:
        container = soup.select_one(CONTENT_SLOT)
        if container is None:
            logger.warning("Template has no content slot; page body dropped")
        else:
            container.clear()
            fragment = BeautifulSoup(slots.content, _PARSER)
            for child in list(fragment.contents):
                container.append(child.extract())

    if slots.description:
        _set_meta(soup, "description", slots.description)

    for key, value in slots.meta.items():
        if value:
            _set_meta(soup, key, value)

    return str(soup)


@dataclass(frozen=True)
class PageLayout:
    """The shared shell, loaded once per build."""

    template: str
    path: Path | None = None

    def render(self, slots: PageSlots) -> str:
        return apply_template(self.template, slots)


def load_layout(path: Path) -> PageLayout | None:
    """Load the shell at *path*, or None when it does not exist."""
    if not path.is_file():
        return None
    return PageLayout(template=path.read_text(encoding="utf-8"), path=path)
