"""Page models — changelog entries and documentation pages.

Both models are frozen: a builder derives every field up front from the
source file and its front matter, then hands the model to a template.
The pure helpers below (version labels, teaser extraction, publish-date
resolution, natural ordering) carry the changelog's rules so they can be
tested without touching the filesystem.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, time
from pathlib import PurePosixPath
from typing import Any

from pydantic import BaseModel, Field, computed_field

_MONTHS: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_NATURAL_CHUNK = re.compile(r"(\d+)")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ChangelogEntry(BaseModel):
    """One rendered release note.

    INVARIANT: ``published_at`` is always set and timezone-aware.
    """

    model_config = {"frozen": True}

    slug: str
    display_version: str
    html: str
    summary: str = ""
    description: str | None = None
    published_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def published_at_iso(self) -> str:
        return self.published_at.date().isoformat()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def published_at_label(self) -> str:
        return format_date_label(self.published_at)


class DocPage(BaseModel):
    """One rendered documentation page.

    ``metadata`` holds the front-matter keys the builder does not interpret
    itself (for example ``order`` or ``sidebar``). The packaged template
    ignores them; site overrides reach them as ``page.metadata``.
    """

    model_config = {"frozen": True}

    relative_path: str
    title: str
    description: str = ""
    html: str
    image: str
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def output_path(self) -> str:
        """Mirrored output path with the ``.md`` extension swapped for ``.html``."""
        return str(PurePosixPath(self.relative_path).with_suffix(".html"))


# ---------------------------------------------------------------------------
# Changelog helpers
# ---------------------------------------------------------------------------


def display_version(slug: str) -> str:
    """Return *slug* with a leading ``v``, added only when missing."""
    return slug if slug.startswith("v") else f"v{slug}"


def extract_summary(markdown: str) -> str:
    """First trimmed, non-blank line that is not a heading, else ``""``."""
    for line in markdown.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            return stripped
    return ""


def coerce_published_at(value: Any) -> datetime | None:
    """Interpret a declared ``publishedAt`` value as an aware datetime.

    Accepts ``datetime``, ``date``, and ISO-8601 strings (a trailing ``Z``
    included). Naive values are taken as UTC. Returns None for anything
    that does not parse, so the caller can fall back to file mtime.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def resolve_published_at(declared: Any, mtime: float) -> datetime:
    """Declared publish date when usable, otherwise the file's mtime (UTC)."""
    resolved = coerce_published_at(declared)
    if resolved is not None:
        return resolved
    return datetime.fromtimestamp(mtime, tz=UTC)


def format_date_label(moment: datetime) -> str:
    """Human label such as ``Mar 05, 2025``."""
    return f"{_MONTHS[moment.month - 1]} {moment.day:02d}, {moment.year}"


def natural_key(text: str) -> tuple[tuple[int, int, str], ...]:
    """Case-insensitive, numeric-aware sort key.

    Digit runs compare as integers and sort before letters, so ``10.0.0``
    ranks above ``2.0.0``.

    Examples:
        >>> sorted(["10.0.0", "2.0.0", "1.5.0"], key=natural_key)
        ['1.5.0', '2.0.0', '10.0.0']
    """
    parts: list[tuple[int, int, str]] = []
    for chunk in _NATURAL_CHUNK.split(text):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk), ""))
        else:
            parts.append((1, 0, chunk.casefold()))
    return tuple(parts)


def sort_entries(entries: list[ChangelogEntry]) -> list[ChangelogEntry]:
    """Newest first; equal timestamps fall back to descending natural slug order."""
    return sorted(
        entries,
        key=lambda entry: (entry.published_at, natural_key(entry.slug)),
        reverse=True,
    )
