"""Filesystem access for site content and build output.

INVARIANT: Source files are never modified. The build only reads from the
content directory and only writes under the public directory.

:class:`MarkdownCollection` is a lazy, restartable view over a content
root: every iteration walks the tree again, and the walk itself is
injectable so the collector can be driven from an in-memory fixture.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

MARKDOWN_SUFFIX = ".md"
HTML_SUFFIX = ".html"

Walker = Callable[[Path, bool], Iterable[Path]]


class UnreadableSourceError(ValueError):
    """A content file is not valid UTF-8 text."""

    def __init__(self, relative_path: str, reason: str) -> None:
        self.relative_path = relative_path
        self.reason = reason
        super().__init__(f"Cannot read {relative_path} as UTF-8: {reason}")


@dataclass(frozen=True)
class SourceFile:
    """A Markdown file and its location relative to the collection root."""

    path: Path
    relative_path: str

    @property
    def stem(self) -> str:
        return self.path.stem

    def read_text(self) -> str:
        """File contents; raises :class:`UnreadableSourceError` on invalid UTF-8."""
        try:
            return self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise UnreadableSourceError(self.relative_path, exc.reason) from exc

    def mtime(self) -> float:
        return self.path.stat().st_mtime


def walk_files(root: Path, recursive: bool) -> Iterator[Path]:
    """Yield regular files under *root* (descending into subdirectories if *recursive*)."""
    candidates = root.rglob("*") if recursive else root.iterdir()
    for path in candidates:
        if path.is_file():
            yield path


def is_markdown(path: Path) -> bool:
    return path.name.lower().endswith(MARKDOWN_SUFFIX)


@dataclass(frozen=True)
class MarkdownCollection:
    """Markdown sources beneath *root*, ordered by relative path.

    A missing root is not an error: the collection is simply empty and
    :attr:`exists` is False so callers can log a skip.
    """

    root: Path
    recursive: bool = True
    walk: Walker = field(default=walk_files, repr=False)
    root_exists: Callable[[Path], bool] = field(default=Path.is_dir, repr=False)

    @property
    def exists(self) -> bool:
        return self.root_exists(self.root)

    def __iter__(self) -> Iterator[SourceFile]:
        if not self.exists:
            return iter(())
        sources = [
            SourceFile(path=path, relative_path=path.relative_to(self.root).as_posix())
            for path in self.walk(self.root, self.recursive)
            if is_markdown(path)
        ]
        return iter(sorted(sources, key=lambda source: source.relative_path))


def collect_markdown(root: Path, *, recursive: bool = True) -> MarkdownCollection:
    """Collect Markdown files under *root*."""
    return MarkdownCollection(root=root, recursive=recursive)


def read_text_if_exists(path: Path) -> str | None:
    """Return the file's text, or None when it is not a regular file."""
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


def write_page(path: Path, html: str) -> None:
    """Write an HTML page, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")


def copy_tree(source: Path, destination: Path) -> int:
    """Copy *source* into *destination*, overwriting existing files.

    Returns the number of files copied.
    """
    destination.mkdir(parents=True, exist_ok=True)
    shutil.copytree(source, destination, dirs_exist_ok=True)
    return sum(1 for path in source.rglob("*") if path.is_file())
