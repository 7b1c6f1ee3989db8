"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, studiosite.toml only contains
overrides. A checkout that follows the default layout needs no config file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- studiosite.toml sections ---


class PathsConfig(BaseModel):
    """[paths] section.

    ``layout``, ``changelog`` and ``docs`` are relative to ``content_dir``;
    ``content_dir`` and ``public_dir`` are relative to the site root.
    """

    model_config = {"frozen": True}

    content_dir: str = "site"
    layout: str = "layout.html"
    changelog: str = "changelog"
    docs: str = "docs"
    public_dir: str = "public"


class SiteSection(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    product_name: str = "Mongoose Studio"
    default_image: str = "https://studio.mongoosejs.io/images/studio-social.png"
    twitter_card: str = "summary_large_image"
    changelog_url: str = "/changelog"
    docs_url: str = "/docs"


class FrontendConfig(BaseModel):
    """[frontend] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    mount_path: str = "/.netlify/functions/studio"
    package: str = "@mongoosejs/studio"
    node_modules: str = "node_modules"
    asset_subdir: str = "imdb"
    node_binary: str = "node"


class MarkdownConfig(BaseModel):
    """[markdown] section."""

    model_config = {"frozen": True}

    highlight_languages: dict[str, str] = Field(
        default_factory=lambda: {
            "js": "javascript",
            "javascript": "javascript",
            "ts": "typescript",
            "typescript": "typescript",
        }
    )
    plugins: list[str] = Field(default_factory=lambda: ["table", "strikethrough", "url"])
    escape_html: bool = False

