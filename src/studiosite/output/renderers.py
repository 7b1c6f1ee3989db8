"""Rich renderers for build results.

``render_result`` picks a renderer by ``result.op``; ops without a
dedicated renderer are listed like a single builder. Everything is drawn
on an off-screen console and returned as text.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from studiosite.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from studiosite.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console", bool], None]

# Builder fields shown in human output, in display order.
_BUILDER_FIELDS = ("skipped", "output_dir", "asset_dir", "entry_count", "page_count", "file_count")


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Human-readable text for *result* (no ANSI codes outside a terminal)."""
    console = create_console()
    if result.ok:
        _OP_RENDERERS.get(result.op, _render_builder)(result, console, verbose)
    else:
        _render_error(result, console, verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Single status line for ``--quiet``."""
    if result.ok:
        return f"OK: {result.op}"
    message = result.error.message if result.error else "Unknown error"
    return f"ERROR: {result.op} — {message}"


def _headline(console: Console, status: str, style: str, op: str, message: str = "") -> None:
    line = Text.assemble((status, style), (f"  {op}", "site.op"))
    if message:
        line.append(f" — {message}")
    console.print(line)


def _field(console: Console, key: str, value: Any) -> None:
    style = ""
    if key.endswith("_dir") or key == "path":
        style = "site.path"
    elif key.endswith("_count"):
        style = "site.count"
    console.print(Text.assemble((f"  {key}: ", "site.key"), (str(value), style)))


def _pages(console: Console, pages: Iterable[str]) -> None:
    for page in pages:
        console.print(Text(f"    {page}", style="site.path"))


def _mapping(console: Console, title: str, values: dict[str, Any]) -> None:
    console.print(Text(f"  {title}:", style="dim"))
    for key, value in values.items():
        console.print(Text(f"    {key}: {value}"))


def _render_error(result: ServiceResult, console: Console, verbose: bool) -> None:
    error = result.error
    message = error.message if error else "Unknown error"
    _headline(console, "ERROR", "site.error", result.op, message)
    if verbose and error is not None and error.detail:
        _mapping(console, "detail", error.detail)


def _render_builder(result: ServiceResult, console: Console, verbose: bool) -> None:
    """One builder: changelog, docs, or frontend."""
    _headline(console, "OK", "site.ok", result.op)
    for key in _BUILDER_FIELDS:
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _pages(console, result.data.get("pages", []))


def _render_site(result: ServiceResult, console: Console, verbose: bool) -> None:
    """Full pipeline: total page count plus a row per step."""
    steps: dict[str, dict[str, Any]] = result.data.get("steps", {})
    _headline(console, "OK", "site.ok", result.op)
    _field(console, "page_count", result.data.get("page_count", 0))

    table = Table(show_header=True, pad_edge=False)
    table.add_column("Step", style="site.op", no_wrap=True)
    table.add_column("Pages", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("Note", style="dim")
    for step, data in steps.items():
        table.add_row(
            step,
            str(data.get("page_count", "")),
            str(data.get("file_count", "")),
            str(data.get("skipped", "")),
        )
    console.print(table)

    if verbose:
        for data in steps.values():
            _pages(console, data.get("pages", []))
        if result.meta:
            _mapping(console, "meta", result.meta)


_OP_RENDERERS: dict[str, Renderer] = {
    "build_site": _render_site,
    "build_changelog": _render_builder,
    "build_docs": _render_builder,
    "build_frontend": _render_builder,
}
