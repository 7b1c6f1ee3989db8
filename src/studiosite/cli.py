"""Root CLI group for studiosite with global flags and command registration."""

from __future__ import annotations

import click

from studiosite import __version__
from studiosite.commands import register_commands
from studiosite.commands._base import SiteGroup
from studiosite.commands._context import AppContext
from studiosite.config.settings import SiteSettings


@click.group(
    cls=SiteGroup,
    invoke_without_command=True,
    examples="""\
  studiosite build
  studiosite --json build --skip-frontend
  studiosite -c deploy/studiosite.toml docs""",
)
@click.version_option(version=__version__, prog_name="studiosite")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """studiosite — build the Mongoose Studio website."""
    ctx.ensure_object(dict)
    settings = SiteSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
