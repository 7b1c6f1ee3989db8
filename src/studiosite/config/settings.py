"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``STUDIOSITE_*`` prefix, plus the two deployment
     secrets ``MONGOOSE_STUDIO_API_KEY`` and ``MONGODB_CONNECTION_STRING``
  3. TOML file    — ``studiosite.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`studiosite.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from studiosite.config.discovery import find_config
from studiosite.config.models import (
    FrontendConfig,
    MarkdownConfig,
    PathsConfig,
    SiteSection,
)


TOML_SECTIONS = ("paths", "site", "frontend", "markdown")


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Section tables from ``studiosite.toml``.

    Only the known ``[paths]``, ``[site]``, ``[frontend]`` and ``[markdown]``
    tables are read; anything else in the file is left for other tools.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self.toml_path = toml_path
        self._sections = self._read(toml_path) if toml_path is not None else {}

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        try:
            with path.open("rb") as fh:
                data = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc
        return {name: data[name] for name in TOML_SECTIONS if name in data}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._sections.get(field_name), field_name, field_name in self._sections

    def __call__(self) -> dict[str, Any]:
        return dict(self._sections)


# Config file chosen by from_cli(), visible to settings_customise_sources().
_construction = threading.local()


class SiteSettings(BaseSettings):
    """Unified settings for the studiosite CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.  Stored on the
    :class:`~studiosite.commands._context.AppContext` at the CLI root.

    Attributes:
        site_root: Resolved site directory (parent of ``studiosite.toml``,
            or CWD if no config found).
        config_path: The TOML file that was loaded, or None.
        api_key: Opaque Studio API key handed to the frontend build.
        connection_string: Opaque database URI handed to the frontend build.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "STUDIOSITE_",
        "env_nested_delimiter": "__",
        "populate_by_name": True,
    }

    # --- Resolved path (not in TOML — derived from config location) ---
    site_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    paths: PathsConfig = Field(default_factory=PathsConfig)
    site: SiteSection = Field(default_factory=SiteSection)
    frontend: FrontendConfig = Field(default_factory=FrontendConfig)
    markdown: MarkdownConfig = Field(default_factory=MarkdownConfig)

    # --- Deployment secrets (never logged) ---
    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("MONGOOSE_STUDIO_API_KEY", "STUDIOSITE_API_KEY"),
    )
    connection_string: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("MONGODB_CONNECTION_STRING", "STUDIOSITE_CONNECTION_STRING"),
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_construction, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        site_root: Path | None = None,
        **cli_flags: Any,
    ) -> SiteSettings:
        """Settings for one CLI invocation.

        An explicit *config_path* must exist. Otherwise ``studiosite.toml`` is
        discovered by walking up from *site_root* (or the cwd). Without an
        explicit *site_root*, the config file's directory becomes the root.
        *cli_flags* override every other source.
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                raise click.ClickException(f"Config file not found: {config_path}")
        else:
            toml_path = find_config(site_root)

        if site_root is None:
            site_root = toml_path.parent if toml_path is not None else Path.cwd()

        _construction.toml_path = toml_path
        try:
            return cls(site_root=site_root, config_path=toml_path, **cli_flags)
        finally:
            _construction.toml_path = None

    # --- Derived paths ---

    @property
    def content_dir(self) -> Path:
        return self.site_root / self.paths.content_dir

    @property
    def layout_path(self) -> Path:
        return self.content_dir / self.paths.layout

    @property
    def changelog_dir(self) -> Path:
        return self.content_dir / self.paths.changelog

    @property
    def docs_dir(self) -> Path:
        return self.content_dir / self.paths.docs

    @property
    def public_dir(self) -> Path:
        return self.site_root / self.paths.public_dir

    @property
    def frontend_package_dir(self) -> Path:
        """Install location of the Studio package inside ``node_modules``."""
        return self.site_root / self.frontend.node_modules / self.frontend.package
