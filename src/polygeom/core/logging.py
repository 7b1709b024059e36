"""
Structured logging for polygeom.

polygeom emits a small set of event records, each with key/value context:

- ``cache_computed`` (DEBUG, core.memo): a mesh computed a derived value for
  the first time; carries ``key`` and ``duration_ms``
- ``builder_frozen`` (DEBUG, geometry.builder): a TriMeshBuilder handed its
  buffers to a mesh; carries ``vertices`` and ``faces``
- ``coplanar_merge_complete`` (INFO, geometry.operations): carries
  ``faces_before``, ``faces_after`` and ``tolerance``

Applications (and the ``polygeom`` CLI) call :func:`configure_logging` once to
route these records through stdlib handlers.

Usage::

    from polygeom.core.logging import configure_logging, get_logger

    configure_logging(level="DEBUG")
    logger = get_logger(__name__)
    logger.info("coplanar_merge_complete", faces_before=30, faces_after=15)
"""

import logging
import sys
from typing import Optional

import structlog

from polygeom.core.config import LoggingSettings

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """
    Route polygeom's event records through stdlib logging handlers.

    At the default INFO level only ``coplanar_merge_complete`` is shown; use
    DEBUG to trace cache fills and builder freezes.

    Args:
        level: Minimum log level name; unknown names fall back to INFO.
        json_output: Render JSON lines instead of colored console lines.
        log_file: Optional file to receive records in addition to stderr.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=handlers,
        force=True,
    )

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def configure_from_settings(settings: LoggingSettings) -> None:
    """Apply a validated ``logging`` settings section."""
    configure_logging(
        level=settings.level,
        json_output=settings.json_output,
        log_file=settings.log_file,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger for ``name`` (typically ``__name__``)."""
    return structlog.get_logger(name)
