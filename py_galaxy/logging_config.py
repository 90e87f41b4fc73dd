"""Structured logging setup shared by the CLI and scripts."""

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", fmt: str = "plain") -> None:
    """
    Configure structlog on top of stdlib logging.

    Library modules only call ``structlog.get_logger()``; applications call
    this once at startup.

    Args:
        level: Stdlib level name (DEBUG, INFO, WARNING, ...)
        fmt: ``json`` for machine-readable lines, ``plain`` for the console
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
