"""Markdown to HTML rendering with Pygments highlighting for fenced code.

The renderer is configured once through an explicit, frozen
:class:`RendererConfig` and passed to whoever needs it; nothing is
registered globally. Only the languages in ``RendererConfig.languages``
are highlighted. Every other fence, and any fence whose highlighting
raises, is emitted as escaped plain text.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGES: Mapping[str, str] = MappingProxyType(
    {
        "js": "javascript",
        "javascript": "javascript",
        "ts": "typescript",
        "typescript": "typescript",
    }
)

DEFAULT_PLUGINS: tuple[str, ...] = ("table", "strikethrough", "url")

_LANGUAGE_PREFIX = "language-"


@dataclass(frozen=True)
class RendererConfig:
    """Immutable renderer settings, built once per process.

    Attributes:
        languages: Lower-case fence tag -> canonical language name. The
            canonical names double as Pygments lexer aliases.
        plugins: mistune plugin names.
        escape_html: Escape raw HTML in Markdown instead of passing it through.
    """

    languages: Mapping[str, str] = field(default_factory=lambda: DEFAULT_LANGUAGES)
    plugins: tuple[str, ...] = DEFAULT_PLUGINS
    escape_html: bool = False

    def normalize_language(self, info: str | None) -> str | None:
        """Canonical language for a fence info string, or None."""
        words = (info or "").split()
        if not words:
            return None
        tag = words[0].lower()
        if tag.startswith(_LANGUAGE_PREFIX):
            tag = tag[len(_LANGUAGE_PREFIX) :]
        return self.languages.get(tag)


def highlight_code(code: str, language: str | None) -> str:
    """Highlighted HTML spans for *code*, or escaped text if that is not possible."""
    if language is None:
        return mistune.escape(code)
    try:
        lexer = get_lexer_by_name(language, stripnl=False, ensurenl=False)
        return highlight(code, lexer, HtmlFormatter(nowrap=True))
    except Exception:
        logger.debug("Highlighting failed for %s block, using plain text", language, exc_info=True)
        return mistune.escape(code)


class HighlightingRenderer(mistune.HTMLRenderer):
    """HTML renderer whose fenced code blocks carry ``language-*`` classes."""

    def __init__(self, config: RendererConfig) -> None:
        super().__init__(escape=config.escape_html)
        self._config = config

    def block_code(self, code: str, info: str | None = None) -> str:
        language = self._config.normalize_language(info)
        highlighted = highlight_code(code.rstrip("\n"), language)
        class_attr = f' class="{_LANGUAGE_PREFIX}{language}"' if language else ""
        return f"<pre{class_attr}><code{class_attr}>{highlighted}\n</code></pre>\n"


class MarkdownRenderer:
    """Renders Markdown text to an HTML fragment.

    Usage::

        renderer = MarkdownRenderer(RendererConfig())
        html = renderer.render("# Hello")
    """

    def __init__(self, config: RendererConfig | None = None) -> None:
        self.config = config or RendererConfig()
        self._markdown = mistune.create_markdown(
            renderer=HighlightingRenderer(self.config),
            plugins=list(self.config.plugins),
        )

    def render(self, markdown: str) -> str:
        return str(self._markdown(markdown))
