"""structlog configuration for constagg.

The library logs through stdlib ``constagg.*`` loggers wrapped by structlog, so nothing is
printed unless the application (or :func:`configure_logging`) enables them.

Two output modes for :func:`configure_logging`:
- Human (default): console renderer to stderr
- JSON (``log_json=True``): structured JSON lines to stderr
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from constagg.config.settings import ConstaggSettings

LOGGER_NAME = "constagg"

_shared_processors: list[structlog.types.Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def get_logger(name: str = LOGGER_NAME) -> Any:
    """Return a structlog bound logger forwarding to the stdlib logger ``name``.

    Events below the stdlib logger's level are dropped before any processing.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
    )


def configure_logging(
    *,
    verbose: bool | None = None,
    log_json: bool | None = None,
    settings: ConstaggSettings | None = None,
) -> logging.Handler:
    """Route the ``constagg`` logger to stderr.

    Only the ``constagg`` logger is touched: the root logger and the global structlog
    configuration belong to the application.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+. Defaults to the settings.
        log_json: Use JSON renderer instead of console renderer. Defaults to the settings.
        settings: Settings to read the defaults from. Defaults to :func:`get_settings`.

    Returns:
        logging.Handler: The installed handler.
    """
    if settings is None:
        from constagg.config.settings import get_settings

        settings = get_settings()
    verbose = settings.verbose if verbose is None else verbose
    log_json = settings.log_json if log_json is None else log_json

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        if getattr(existing, "_constagg_handler", False):
            logger.removeHandler(existing)
    handler._constagg_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return handler
