"""AppContext — the object every command receives via ``@click.pass_obj``.

Built once by the root group from :class:`SiteSettings`. It configures
logging, owns the per-invocation :class:`Site`, and turns a
ServiceResult into CLI output and an exit status.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from studiosite.config.logging import configure_logging
from studiosite.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from studiosite.config.settings import SiteSettings
    from studiosite.infrastructure.site import Site
    from studiosite.services.result import ServiceResult


class AppContext:
    """Per-invocation state shared by the build commands."""

    def __init__(self, settings: SiteSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @cached_property
    def site(self) -> Site:
        """Resolved site, built on first use so ``--help`` stays cheap."""
        from studiosite.infrastructure.site import Site

        return Site(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result goes to stderr and exits with status 1.

        Skip warnings are repeated on stderr in human modes. The JSON
        payload already carries them.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
