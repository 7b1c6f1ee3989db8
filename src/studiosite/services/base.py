"""BaseService — foundation for the build services.

Every service receives a :class:`Site` at construction time. The Site
provides resolved paths, the Markdown renderer, the shared shell, and the
fragment templates.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from studiosite.services.result import ServiceResult

if TYPE_CHECKING:
    from studiosite.infrastructure.site import Site

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class DocsService(BaseService):
            def build(self) -> ServiceResult:
                layout = self._site.layout
                ...
    """

    def __init__(self, site: Site) -> None:
        self._site = site

    def _skipped(self, op: str, reason: str, message: str, **data: Any) -> ServiceResult:
        """Successful no-op: nothing to build is not an error."""
        logger.warning(message)
        return ServiceResult(
            ok=True,
            op=op,
            data={"skipped": reason, "page_count": 0, **data},
            warnings=[message],
        )
