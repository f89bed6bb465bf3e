"""Process-wide logging setup for the gateway and the weather orchestrator.

Everything a service emits, including uvicorn's own server messages, leaves
the process as one JSON object per line on stdout, stamped with the trace ID
of the request being handled.

Two third-party loggers are tuned on top of that:
- ``uvicorn.access`` is silenced, since ASGITracingMiddleware already writes
  one JSON access line per request with its duration and trace ID.
- ``httpx``/``httpcore`` are raised to WARNING. httpx logs every request URL
  at INFO, and WeatherAPI URLs carry the API key in the query string.

Example:
    >>> from libs.common.logging.config import configure_logging
    >>> configure_logging(service_name="weather-orchestrator", log_level="INFO")
"""

import logging
import sys

from libs.common.logging.context import get_trace_id
from libs.common.logging.formatter import JSONFormatter

# Server loggers re-routed through the root JSON handler
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error")

# Replaced by the tracing middleware's access line
_ACCESS_LOGGER = "uvicorn.access"

# Would log outbound URLs (and with them the WeatherAPI key) at INFO
_HTTP_CLIENT_LOGGERS = ("httpx", "httpcore")


class TraceIDFilter(logging.Filter):
    """Stamps each record with the trace ID of the request in progress.

    Records emitted outside a request (startup, shutdown) get ``None``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id()
        return True


def configure_logging(
    service_name: str,
    log_level: str = "INFO",
    include_context: bool = True,
) -> logging.Logger:
    """Install JSON logging on the root logger and tune server/client loggers.

    Safe to call more than once; each call replaces the previous root handler.

    Args:
        service_name: Written to the "service" field of every line
        log_level: Root level name, case-insensitive
        include_context: Whether to emit the "context" object

    Returns:
        The root logger

    Raises:
        ValueError: If log_level is not a standard level name
    """
    level = logging.getLevelNamesMapping().get(log_level.upper())
    if level is None:
        raise ValueError(f"Invalid log level: {log_level}")

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter(service_name=service_name, include_context=include_context))
    handler.addFilter(TraceIDFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    access_logger = logging.getLogger(_ACCESS_LOGGER)
    access_logger.handlers.clear()
    access_logger.propagate = False
    access_logger.disabled = True

    for name in _HTTP_CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return root_logger


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context_fields: object,
) -> None:
    """Log ``message`` with ``context_fields`` as the JSON "context" object.

    Fields whose value is None are dropped.

    Example:
        >>> log_with_context(logger, "INFO", "City resolved", cep="01001000", city="São Paulo")
    """
    context = {key: value for key, value in context_fields.items() if value is not None}
    logger.log(
        logging.getLevelNamesMapping()[level.upper()],
        message,
        extra={"context": context},
        stacklevel=2,
    )
