"""HTTP client with automatic trace context propagation.

Every request sent through TracedHTTPXClient runs inside its own CLIENT span
and carries the W3C traceparent header (plus X-Trace-ID for log search), so
the receiving service continues the same trace.

Example:
    >>> from libs.common.tracing import configure_tracing, get_traced_client
    >>>
    >>> tracing = configure_tracing("cep-gateway")
    >>> async with get_traced_client(tracing) as client:
    ...     response = await client.post("http://localhost:8081/weather", content=b'{"cep": "01001000"}')
"""

from typing import Any, Optional

import httpx
from opentelemetry.trace import SpanKind, Status, StatusCode

from libs.common.logging.context import TRACE_ID_HEADER, get_trace_id
from libs.common.tracing.provider import Tracing


class TracedHTTPXClient(httpx.AsyncClient):
    """
    httpx.AsyncClient that traces and propagates every request.

    Args:
        tracing: Tracing bundle providing the tracer and propagator
        **kwargs: Passed through to httpx.AsyncClient
    """

    def __init__(self, tracing: Tracing, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._tracing = tracing

    async def request(
        self,
        method: str,
        url: httpx.URL | str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send HTTP request inside a CLIENT span with trace headers injected.

        Query parameters passed via params= are not recorded on the span,
        which keeps API keys out of the trace.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL
            **kwargs: Additional request parameters

        Returns:
            HTTP response
        """
        with self._tracing.tracer.start_as_current_span(
            f"HTTP {method}",
            kind=SpanKind.CLIENT,
            attributes={"http.method": method, "http.url": str(url)},
        ) as span:
            headers = dict(kwargs.get("headers") or {})
            self._tracing.propagator.inject(headers)

            trace_id = get_trace_id()
            if trace_id:
                headers[TRACE_ID_HEADER] = trace_id
            kwargs["headers"] = headers

            response = await super().request(method, url, **kwargs)

            span.set_attribute("http.status_code", response.status_code)
            if response.status_code >= 400:
                span.set_status(Status(StatusCode.ERROR))
            return response


def get_traced_client(
    tracing: Tracing,
    base_url: Optional[str] = None,
    timeout: float = 10.0,
    **kwargs: Any,
) -> TracedHTTPXClient:
    """Create a traced async HTTP client.

    Args:
        tracing: Tracing bundle of the calling service
        base_url: Base URL for all requests (optional)
        timeout: Request timeout in seconds
        **kwargs: Additional httpx.AsyncClient parameters (e.g. transport)

    Returns:
        Configured TracedHTTPXClient instance
    """
    client_kwargs: dict[str, Any] = {"timeout": timeout, **kwargs}
    if base_url is not None:
        client_kwargs["base_url"] = base_url

    return TracedHTTPXClient(tracing, **client_kwargs)
