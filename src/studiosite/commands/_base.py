"""Click base classes carrying an ``--examples`` flag.

``--help`` stays short; ``studiosite build --examples`` prints the
example invocations registered on the command and exits.
"""

from __future__ import annotations

from typing import Any

import click


def examples_option(examples: str) -> click.Option:
    """Eager flag that prints *examples* for the current command."""

    def _print(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value and not ctx.resilient_parsing:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
            ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        is_eager=True,
        expose_value=False,
        callback=_print,
        help="Show usage examples.",
    )


class _ExamplesMixin:
    """Pops the ``examples`` keyword before Click sees it."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(examples_option(examples))


class SiteCommand(_ExamplesMixin, click.Command):
    """Command accepting ``examples=`` in its decorator."""


class SiteGroup(_ExamplesMixin, click.Group):
    """Group accepting ``examples=``; its subcommands default to SiteCommand."""

    command_class = SiteCommand
