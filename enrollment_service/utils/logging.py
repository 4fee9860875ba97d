# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Structured logging for the enrollment service.

Modules log with ``logging.getLogger(__name__)``. setup_logging installs a
single root handler whose structlog ProcessorFormatter renders those stdlib
records, so request context bound with bind_context (request id, method,
path) lands on every line. Output is JSON in production and colored
console text in development.

Example:
    >>> setup_logging(get_settings())
    >>> bind_context(request_id="abc-123")
    >>> logging.getLogger("enrollment_service.x").info("Enrolled: id=%s", "e-1")
"""

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from enrollment_service.core.config.settings import Settings

# Name of the root handler owned by setup_logging
LOG_HANDLER_NAME = "enrollment_service"

NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "httpcore",
    "sqlalchemy",
    "asyncio",
)


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def build_formatter(json_output: bool) -> structlog.stdlib.ProcessorFormatter:
    """Build the formatter that renders both stdlib and structlog records.

    Args:
        json_output: Render JSON lines instead of console text.
    """
    if json_output:
        renderers: list[Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=True)]

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *renderers,
        ],
    )


def setup_logging(settings: "Settings", stream: TextIO | None = None) -> None:
    """Configure stdlib logging and structlog to share one rendering pipeline.

    Calling it again replaces the handler it installed earlier.

    Args:
        settings: Application settings containing log_level and environment.
        stream: Output stream, stdout by default.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    json_output = not (settings.is_development or settings.debug)

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(LOG_HANDLER_NAME)
    handler.setFormatter(build_formatter(json_output))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == LOG_HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.getLogger("enrollment_service").setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger that renders through the root handler.

    Args:
        name: Usually __name__ of the calling module.
    """
    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Bind context variables to all subsequent log lines in this context.

    Example:
        >>> bind_context(request_id="abc-123")
        >>> logger.info("Processing request")  # Will include request_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
