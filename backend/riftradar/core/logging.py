"""Logging configuration using structlog.

All modules log through ``structlog.get_logger(__name__)``. Output is one
JSON object per line; ``console=True`` switches to the human-readable
renderer for local development. Request-scoped values (request id, path)
are bound with contextvars and merged into every event of that request.
"""

import logging
from typing import Any

import structlog
from structlog import contextvars as structlog_contextvars


def setup_logging(log_level: str = "INFO", console: bool = False) -> None:
    """
    Configure structlog on top of the standard library logging module.

    :param log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :param console: Render colored key/value lines instead of JSON
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", level=level)

    # httpx logs every request at INFO; upstream calls are logged by the client
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))

    renderer: Any = (
        structlog.dev.ConsoleRenderer()
        if console
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog_contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_request_context(**values: Any) -> None:
    """Attach values to every log event emitted for the current request."""
    structlog_contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    """Drop all request-scoped logging context."""
    structlog_contextvars.clear_contextvars()

