"""Structured logging via structlog.

Configures structlog once at CLI startup. Modules keep using
`logging.getLogger(__name__)`; their records are rendered through the same
structlog processors so CLI and library logs look alike.

Renderer selection:
  debug=True: `ConsoleRenderer` for local development.
  debug=False: `JSONRenderer` for machine-parseable logs.

Logs go to stderr so they never mix with findings printed on stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

import structlog

# Root of the package logger hierarchy that receives the handler.
PACKAGE_LOGGER = "prefer_bind"


def configure_structlog(
    debug: bool = False,
    level: Optional[int] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Configure structlog and the package's stdlib loggers.

    Calling multiple times is safe; the previous handler is replaced.
    """
    stream = stream or sys.stderr
    if level is None:
        level = logging.DEBUG if debug else logging.WARNING

    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )

    # Route stdlib records from our modules through the same renderer.
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            *shared_processors,
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    handler.set_name("prefer_bind.structlog")

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if existing.get_name() == handler.get_name():
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
