"""Logging setup: stdlib loggers rendered through structlog.

Modules log with ``logging.getLogger(__name__)`` (or
``structlog.get_logger`` for key/value events); both end up on one stderr
handler whose formatter is a structlog ``ProcessorFormatter``. The
console renderer is the default and ``--log-json`` switches to JSON lines.

Build progress (pages written, skipped builders) is logged at INFO, so a
plain ``studiosite build`` reads like a build log.
"""

from __future__ import annotations

import logging
import sys

import structlog

APP_LOGGER = "studiosite"
_QUIET_LOGGERS = ("asyncio",)

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler and set levels. Safe to call repeatedly.

    Args:
        verbose: Log ``studiosite`` at DEBUG instead of INFO.
        log_json: Render JSON lines instead of console output.
    """
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.INFO)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
