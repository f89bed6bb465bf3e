"""ASGI middleware opening one server span per HTTP request.

The middleware extracts the caller's W3C trace context, starts a SERVER span
as its child, publishes the trace ID to the logging context, stamps it on
the response as X-Trace-ID and writes one access-log line when the request
finishes.

Example:
    >>> from fastapi import FastAPI
    >>> from libs.common.tracing import add_tracing_middleware, configure_tracing
    >>>
    >>> app = FastAPI()
    >>> add_tracing_middleware(app, configure_tracing("cep-gateway"))
"""

import logging
import time
from typing import Any, Callable

from fastapi import FastAPI
from opentelemetry.trace import SpanKind, Status, StatusCode, format_trace_id
from starlette.types import ASGIApp

from libs.common.logging import log_with_context
from libs.common.logging.context import TRACE_ID_HEADER, clear_trace_id, set_trace_id
from libs.common.tracing.provider import Tracing

logger = logging.getLogger(__name__)


class ASGITracingMiddleware:
    """
    ASGI middleware for request spans and trace ID management.

    Works at the ASGI level rather than as BaseHTTPMiddleware so the
    X-Trace-ID header also lands on responses built by the CepWeatherError
    handler. Exceptions with no domain handler escape this middleware and
    are answered by Starlette's ServerErrorMiddleware further out, so that
    generic 500 carries no X-Trace-ID; its span is still closed as a 500.
    """

    def __init__(self, app: ASGIApp, tracing: Tracing) -> None:
        self.app = app
        self.tracing = tracing

    async def __call__(self, scope: dict[str, Any], receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        carrier = {
            key.decode("latin-1"): value.decode("latin-1")
            for key, value in scope.get("headers", [])
        }
        parent_context = self.tracing.propagator.extract(carrier)

        method = scope.get("method", "GET")
        path = scope.get("path", "")
        status_code = 500
        started = time.perf_counter()

        with self.tracing.tracer.start_as_current_span(
            f"{method} {path}",
            context=parent_context,
            kind=SpanKind.SERVER,
            attributes={"http.method": method, "http.target": path},
        ) as span:
            span_context = span.get_span_context()
            trace_id = format_trace_id(span_context.trace_id) if span_context.is_valid else None
            if trace_id:
                set_trace_id(trace_id)

            async def send_with_trace_id(message: dict[str, Any]) -> None:
                nonlocal status_code
                if message["type"] == "http.response.start":
                    status_code = message["status"]
                    if trace_id:
                        headers = list(message.get("headers", []))
                        headers.append((TRACE_ID_HEADER.lower().encode(), trace_id.encode()))
                        message["headers"] = headers
                await send(message)

            try:
                await self.app(scope, receive, send_with_trace_id)
            finally:
                span.set_attribute("http.status_code", status_code)
                if status_code >= 500:
                    span.set_status(Status(StatusCode.ERROR))
                log_with_context(
                    logger,
                    "INFO",
                    f"{method} {path} {status_code}",
                    method=method,
                    path=path,
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )
                clear_trace_id()


def add_tracing_middleware(app: FastAPI, tracing: Tracing) -> None:
    """
    Add the tracing middleware to a FastAPI application.

    Must be called before the application starts serving, since Starlette
    freezes its middleware stack on the first request.

    Args:
        app: FastAPI application instance
        tracing: Tracing bundle of the service
    """
    app.add_middleware(ASGITracingMiddleware, tracing=tracing)
