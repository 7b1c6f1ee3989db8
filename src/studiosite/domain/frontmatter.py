"""Front-matter parsing for Markdown sources.

A source may open with a YAML block fenced by ``---`` lines::

    ---
    title: Getting Started
    description: Connect Studio to your cluster
    ---

    # Body starts here

Parsing is permissive: a missing or unterminated block leaves the text
untouched, and YAML that fails to parse (or is not a mapping) yields empty
metadata. Keys the build does not recognize are kept as-is.
"""

from __future__ import annotations

import logging
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"

# Keys read by the builders; anything else passes through untouched.
KNOWN_KEYS: tuple[str, ...] = ("title", "description", "image", "publishedAt")


def _new_yaml() -> YAML:
    """Create a fresh safe YAML loader.

    ruamel.yaml's YAML object is stateful, so a new instance per call keeps
    one malformed document from affecting the next.
    """
    return YAML(typ="safe", pure=True)


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split *content* into ``(metadata, body)``.

    Expects the file to start with ``---`` on the first line. The next
    ``---`` line closes the YAML block and everything after is the body
    (one leading blank line is dropped). Handles ``\\r\\n`` line endings.

    Returns:
        ``({}, content)`` when there is no complete front-matter block.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return {}, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return {}, content

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])
    if body.startswith("\n"):
        body = body[1:]

    try:
        loaded = _new_yaml().load(yaml_block)
    except (YAMLError, ValueError) as exc:
        # ruamel raises a bare ValueError for off-calendar dates such as 2025-02-30.
        logger.debug("Unparseable front matter, ignoring block: %s", exc)
        return {}, body

    if not isinstance(loaded, dict):
        return {}, body
    return {str(key): value for key, value in loaded.items()}, body


def string_field(metadata: dict[str, Any], key: str) -> str | None:
    """Return ``metadata[key]`` as a stripped string, or None when unusable.

    Non-string scalars (numbers, booleans) are stringified; mappings,
    sequences, and blank strings count as absent.
    """
    value = metadata.get(key)
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None
