"""BuildPipeline — the top-level site build.

Order is fixed: frontend build (awaited) → asset copy → changelog → docs.
The first failing step ends the run and its error becomes the pipeline's
error. There are no retries; the whole build is meant to be re-run, and a
re-run overwrites the previous output.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

import structlog

from studiosite.services.changelog import ChangelogService
from studiosite.services.docs import DocsService
from studiosite.services.frontend import FrontendService
from studiosite.services.result import ServiceResult

if TYPE_CHECKING:
    from studiosite.infrastructure.site import Site
    from studiosite.services.frontend import FrontendBuilder

log = structlog.get_logger("studiosite.pipeline")


class BuildPipeline:
    """Runs every builder for one site in sequence."""

    def __init__(
        self,
        site: Site,
        *,
        frontend_builder: FrontendBuilder | None = None,
        skip_frontend: bool = False,
    ) -> None:
        self._site = site
        self._frontend_builder = frontend_builder
        self._skip_frontend = skip_frontend or not site.settings.frontend.enabled

    async def run(self) -> ServiceResult:
        op = "build_site"
        started = time.perf_counter()
        steps: dict[str, dict[str, Any]] = {}
        warnings: list[str] = []

        if self._skip_frontend:
            log.info("frontend.skipped")
        else:
            frontend = FrontendService(self._site, builder=self._frontend_builder)
            result = await frontend.build()
            if not result.ok:
                return self._failed(op, result, steps)
            steps[result.op] = result.data

        for result in self._static_pages():
            warnings.extend(result.warnings)
            if not result.ok:
                return self._failed(op, result, steps)
            steps[result.op] = result.data

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        page_count = sum(step.get("page_count", 0) for step in steps.values())
        log.info("build.complete", page_count=page_count, duration_ms=duration_ms)
        return ServiceResult(
            ok=True,
            op=op,
            data={"page_count": page_count, "steps": steps},
            warnings=warnings,
            meta={"duration_ms": duration_ms},
        )

    def _static_pages(self) -> Iterator[ServiceResult]:
        """Yield builder results lazily so a failure stops later builders."""
        yield ChangelogService(self._site).build()
        yield DocsService(self._site).build()

    def _failed(
        self,
        op: str,
        result: ServiceResult,
        steps: dict[str, dict[str, Any]],
    ) -> ServiceResult:
        message = result.error.message if result.error else None
        log.error("build.failed", step=result.op, error=message)
        return ServiceResult(
            ok=False,
            op=op,
            data={"failed_step": result.op, "steps": steps},
            warnings=result.warnings,
            error=result.error,
        )
