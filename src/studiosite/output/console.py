"""Rich console for building CLI output as a string.

Renderers draw onto an off-screen Console and the CLI echoes the captured
text, so ``format_result`` stays a pure ``ServiceResult -> str`` function.
Rich drops colour codes when the target is not a terminal, which covers
CliRunner and piped output.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SITE_THEME = Theme(
    {
        "site.ok": "bold green",
        "site.error": "bold red",
        "site.op": "bold cyan",
        "site.key": "dim",
        "site.path": "dim",
        "site.count": "magenta",
    }
)

DEFAULT_WIDTH = 120


def create_console(width: int = DEFAULT_WIDTH) -> Console:
    """Off-screen Console with the site theme and a fixed width."""
    return Console(file=StringIO(), theme=SITE_THEME, highlight=False, width=width)


def get_output(console: Console) -> str:
    """Text drawn so far on a Console made by :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console was not created by create_console()")
    return buffer.getvalue()
