"""Distributed tracing on top of the OpenTelemetry SDK.

Usage:
    # At service startup
    from libs.common.tracing import add_tracing_middleware, configure_tracing, get_traced_client
    tracing = configure_tracing("weather-orchestrator", "1.0.0", zipkin_endpoint)
    add_tracing_middleware(app, tracing)
    http_client = get_traced_client(tracing)

    # At shutdown
    tracing.shutdown()
"""

from libs.common.tracing.http_client import TracedHTTPXClient, get_traced_client
from libs.common.tracing.middleware import ASGITracingMiddleware, add_tracing_middleware
from libs.common.tracing.provider import Tracing, configure_tracing

__all__ = [
    "Tracing",
    "configure_tracing",
    "ASGITracingMiddleware",
    "add_tracing_middleware",
    "TracedHTTPXClient",
    "get_traced_client",
]
