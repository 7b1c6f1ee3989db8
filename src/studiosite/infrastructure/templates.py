"""Shared Jinja2 template loading with per-site override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(group: str, *, override_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with site overrides before packaged defaults.

    Overrides are loaded from *override_root* (the site's ``_templates/``
    directory). Both a namespaced directory (for example
    ``_templates/changelog/``) and the shared root are supported so page
    fragments can be organized without breaking a flat override layout.
    """

    loaders: list[BaseLoader] = []
    if override_root is not None:
        loaders.append(FileSystemLoader([str(override_root / group), str(override_root)]))

    loaders.append(PackageLoader("studiosite", f"templates/{group}"))
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=True,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
