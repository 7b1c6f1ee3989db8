"""Frontend assets — the boundary with the Mongoose Studio Node package.

The Studio package ships a factory, ``require('@mongoosejs/studio/frontend')``,
that builds the admin GUI for a given API mount path. The build here awaits
that factory, then copies the package's prebuilt ``frontend/public`` tree
into the site's public directory. The package itself is never reimplemented.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from studiosite.infrastructure.filesystem import copy_tree
from studiosite.services.base import BaseService
from studiosite.services.result import ServiceResult

if TYPE_CHECKING:
    from studiosite.infrastructure.site import Site

logger = logging.getLogger(__name__)

# Runs under ``node -e``; process.argv is [node, factory, mountPath, staticExport, options].
_NODE_SCRIPT = """\
const [factory, mountPath, staticExport, options] = process.argv.slice(1);
require(factory)(mountPath, JSON.parse(staticExport), JSON.parse(options))
  .then(() => process.exit(0))
  .catch(err => { console.error(err); process.exit(1); });
"""

_STDERR_TAIL = 2000


class FrontendBuildError(RuntimeError):
    """The external frontend build rejected or could not be started."""


class FrontendBuilder(Protocol):
    """Awaitable wrapper around the Studio frontend factory."""

    async def build(
        self,
        mount_path: str,
        enable_static_export: bool,
        options: Mapping[str, Any],
    ) -> None:
        """Complete the build, or raise :class:`FrontendBuildError`."""
        ...


class NodeFrontendBuilder:
    """Invoke the Studio factory in a ``node`` subprocess.

    *env* is merged over the current environment; it is how opaque values
    such as the database connection string reach the package.
    """

    def __init__(
        self,
        *,
        package: str,
        cwd: Path,
        node_binary: str = "node",
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._factory = f"{package}/frontend"
        self._cwd = cwd
        self._node_binary = node_binary
        self._env = dict(env or {})

    async def build(
        self,
        mount_path: str,
        enable_static_export: bool,
        options: Mapping[str, Any],
    ) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                self._node_binary,
                "-e",
                _NODE_SCRIPT,
                self._factory,
                mount_path,
                json.dumps(enable_static_export),
                json.dumps(dict(options)),
                cwd=str(self._cwd),
                env={**os.environ, **self._env},
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            msg = f"Could not start {self._node_binary!r}: {exc}"
            raise FrontendBuildError(msg) from exc

        stdout, stderr = await proc.communicate()
        if stdout:
            logger.debug("frontend build output:\n%s", stdout.decode("utf-8", "replace"))
        if proc.returncode != 0:
            detail = stderr.decode("utf-8", "replace").strip()[-_STDERR_TAIL:]
            msg = f"{self._factory} exited with status {proc.returncode}"
            if detail:
                msg = f"{msg}: {detail}"
            raise FrontendBuildError(msg)


class FrontendService(BaseService):
    """Builds the Studio frontend and copies its static assets."""

    def __init__(self, site: Site, *, builder: FrontendBuilder | None = None) -> None:
        super().__init__(site)
        self._builder = builder or self._default_builder()

    def _default_builder(self) -> NodeFrontendBuilder:
        settings = self._site.settings
        env: dict[str, str] = {}
        if settings.connection_string is not None:
            env["MONGODB_CONNECTION_STRING"] = settings.connection_string.get_secret_value()
        return NodeFrontendBuilder(
            package=settings.frontend.package,
            cwd=self._site.root,
            node_binary=settings.frontend.node_binary,
            env=env,
        )

    def _options(self) -> dict[str, Any]:
        api_key = self._site.settings.api_key
        return {"apiKey": api_key.get_secret_value() if api_key is not None else None}

    @property
    def asset_source(self) -> Path:
        return self._site.settings.frontend_package_dir / "frontend" / "public"

    @property
    def asset_destination(self) -> Path:
        return self._site.public_dir / self._site.settings.frontend.asset_subdir

    async def build(self) -> ServiceResult:
        """Await the external build, then copy its prebuilt assets."""
        op = "build_frontend"
        mount_path = self._site.settings.frontend.mount_path
        options = self._options()
        logger.info(
            "Creating Mongoose Studio frontend at %s (options: %s)",
            mount_path,
            ", ".join(sorted(options)),
        )

        try:
            await self._builder.build(mount_path, True, options)
        except FrontendBuildError as exc:
            logger.error("Failed to build Mongoose Studio frontend: %s", exc)
            return ServiceResult.failure(op, "FRONTEND_BUILD_FAILED", str(exc))

        source = self.asset_source
        if not source.is_dir():
            msg = f"Frontend build finished but {source} does not exist"
            logger.error(msg)
            return ServiceResult.failure(op, "ASSETS_MISSING", msg, path=str(source))

        file_count = copy_tree(source, self.asset_destination)
        logger.info("Copied %d frontend assets to %s", file_count, self.asset_destination)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "mount_path": mount_path,
                "asset_dir": str(self.asset_destination),
                "file_count": file_count,
            },
        )
