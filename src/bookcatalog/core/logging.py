"""Structured logging for BookCatalog.

structlog is wired into the standard library ``logging`` module so that
our own events and third-party records (uvicorn, redis) come out of the
same handler in the same format:

- ``LOG_FORMAT=json`` (or production) renders one JSON object per line
- ``LOG_FORMAT=console`` renders coloured key=value lines for development

Request-scoped values live in structlog's context variables. The HTTP
middleware binds the request id as ``correlation_id``; the book service
binds ``book_id`` around updates. Both appear on every event emitted
inside that scope.

Usage:
    from bookcatalog.core.logging import configure_logging, get_logger

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info("book_created", book_id="...", isbn="978-0132350884")
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from bookcatalog.config import Settings

CORRELATION_ID_KEY = "correlation_id"

# stdlib loggers that are too chatty at INFO
NOISY_LOGGERS: dict[str, int] = {
    "uvicorn.access": logging.WARNING,
    "redis": logging.WARNING,
    "asyncio": logging.WARNING,
}


# =============================================================================
# Correlation ID
# =============================================================================


def get_correlation_id() -> str | None:
    """Return the correlation ID bound to the current context, if any."""
    return structlog.contextvars.get_contextvars().get(CORRELATION_ID_KEY)


def set_correlation_id(correlation_id: str) -> None:
    """Bind a correlation ID to every event logged in the current context."""
    structlog.contextvars.bind_contextvars(**{CORRELATION_ID_KEY: correlation_id})


def clear_correlation_id() -> None:
    structlog.contextvars.unbind_contextvars(CORRELATION_ID_KEY)


# =============================================================================
# Processors
# =============================================================================


class AddServiceInfo:
    """Structlog processor stamping the service name and version on events."""

    def __init__(self, name: str, version: str) -> None:
        self.name = name
        self.version = version

    def __call__(
        self, logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("service", self.name)
        event_dict.setdefault("version", self.version)
        return event_dict


def build_shared_processors(settings: Settings) -> list[Processor]:
    """Processors run for both structlog events and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        AddServiceInfo(settings.app_name.lower(), settings.app_version),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def build_renderer(settings: Settings) -> Processor:
    """Pick the final renderer for the configured log format."""
    if settings.use_json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=settings.is_development)


# =============================================================================
# Configuration
# =============================================================================


def configure_logging(settings: Settings) -> None:
    """Configure structlog and the root stdlib logger.

    Safe to call more than once; each call replaces the root handler.

    Args:
        settings: Application settings (log level, format, service name)
    """
    log_level = logging.getLevelNamesMapping().get(
        settings.log_level.value, logging.INFO
    )
    shared_processors = build_shared_processors(settings)

    # structlog events are handed to stdlib as-is and rendered once, by the
    # ProcessorFormatter on the root handler
    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            build_renderer(settings),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for name, level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(max(level, log_level))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, typically ``get_logger(__name__)``."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """Context manager binding values to all logs within the context.

    Example:
        with log_context(book_id="0b7a..."):
            logger.info("book_updated")  # Includes book_id
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
