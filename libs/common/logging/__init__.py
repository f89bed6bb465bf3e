"""Centralized structured logging library.

This package provides structured JSON logging with trace ID support
so log lines from the gateway and the weather orchestrator can be joined
with the distributed trace of the same request.

Usage:
    # At service startup
    from libs.common.logging import configure_logging
    configure_logging(service_name="cep-gateway", log_level="INFO")

    # In request handlers
    import logging
    from libs.common.logging import log_with_context
    logger = logging.getLogger(__name__)
    log_with_context(logger, "INFO", "Forwarding request", cep="01001000")
"""

from libs.common.logging.config import (
    configure_logging,
    log_with_context,
)
from libs.common.logging.context import (
    TRACE_ID_HEADER,
    clear_trace_id,
    get_trace_id,
    set_trace_id,
)
from libs.common.logging.formatter import JSONFormatter

__all__ = [
    # Configuration
    "configure_logging",
    "log_with_context",
    # Trace ID management
    "get_trace_id",
    "set_trace_id",
    "clear_trace_id",
    "TRACE_ID_HEADER",
    # Formatter (for advanced usage)
    "JSONFormatter",
]
