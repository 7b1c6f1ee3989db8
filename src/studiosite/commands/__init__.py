"""Subcommand modules for studiosite.

Provides register_commands() which uses deferred imports to keep
``studiosite --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from studiosite.commands.build import build, changelog, docs, frontend

    cli.add_command(build)
    cli.add_command(changelog)
    cli.add_command(docs)
    cli.add_command(frontend)
