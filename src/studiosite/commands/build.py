"""Commands: site build (full pipeline) and the individual builders."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import click

from studiosite.commands._base import SiteCommand

if TYPE_CHECKING:
    from studiosite.commands._context import AppContext


@click.command(
    cls=SiteCommand,
    examples="""\
  studiosite build
  studiosite build --skip-frontend
  studiosite --json build
  MONGOOSE_STUDIO_API_KEY=... studiosite -v build""",
)
@click.option(
    "--skip-frontend",
    is_flag=True,
    help="Skip the Studio frontend build and asset copy.",
)
@click.pass_obj
def build(app: AppContext, skip_frontend: bool) -> None:
    """Build the frontend, then the changelog and docs pages."""
    from studiosite.services.pipeline import BuildPipeline

    pipeline = BuildPipeline(app.site, skip_frontend=skip_frontend)
    app.emit(asyncio.run(pipeline.run()))


@click.command(
    cls=SiteCommand,
    examples="""\
  studiosite changelog
  studiosite -v changelog""",
)
@click.pass_obj
def changelog(app: AppContext) -> None:
    """Build only the changelog pages."""
    from studiosite.services.changelog import ChangelogService

    app.emit(ChangelogService(app.site).build())


@click.command(
    cls=SiteCommand,
    examples="""\
  studiosite docs
  studiosite --json docs""",
)
@click.pass_obj
def docs(app: AppContext) -> None:
    """Build only the documentation pages."""
    from studiosite.services.docs import DocsService

    app.emit(DocsService(app.site).build())


@click.command(
    cls=SiteCommand,
    examples="""\
  studiosite frontend
  MONGOOSE_STUDIO_API_KEY=... studiosite frontend""",
)
@click.pass_obj
def frontend(app: AppContext) -> None:
    """Build the Studio frontend and copy its static assets."""
    from studiosite.services.frontend import FrontendService

    app.emit(asyncio.run(FrontendService(app.site).build()))
