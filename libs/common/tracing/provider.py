"""OpenTelemetry tracer provider lifecycle.

Each service builds one Tracing object at startup and hands it to the
middleware and HTTP clients that need it. Nothing is registered on the
global OpenTelemetry API, so two services (or two test apps) can live in
one process with separate providers.

Example:
    >>> tracing = configure_tracing("cep-gateway", "1.0.0")
    >>> with tracing.tracer.start_as_current_span("work"):
    ...     pass
    >>> tracing.shutdown()  # flush pending spans to Zipkin
"""

import logging

from opentelemetry.exporter.zipkin.json import ZipkinExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    SimpleSpanProcessor,
    SpanExporter,
)
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

logger = logging.getLogger(__name__)

DEFAULT_ZIPKIN_ENDPOINT = "http://localhost:9411/api/v2/spans"


class Tracing:
    """
    Process-lifetime tracing state for one service.

    Attributes:
        provider: SDK tracer provider owning the span processors
        tracer: Tracer named after the service
        propagator: W3C traceparent propagator used on every hop
    """

    def __init__(self, provider: TracerProvider, service_name: str, service_version: str) -> None:
        self.provider = provider
        self.service_name = service_name
        self.tracer = provider.get_tracer(service_name, service_version)
        self.propagator = TraceContextTextMapPropagator()

    def shutdown(self) -> None:
        """Flush pending spans and stop exporting."""
        logger.info(f"Shutting down tracer provider for {self.service_name}")
        self.provider.shutdown()


def configure_tracing(
    service_name: str,
    service_version: str = "1.0.0",
    zipkin_endpoint: str = DEFAULT_ZIPKIN_ENDPOINT,
    enabled: bool = True,
    exporter: SpanExporter | None = None,
    batch: bool = True,
) -> Tracing:
    """
    Create the tracer provider for a service.

    Args:
        service_name: Reported as service.name in the span resource
        service_version: Reported as service.version in the span resource
        zipkin_endpoint: Zipkin v2 collector URL, used when exporter is None
        enabled: When False, spans are created but never exported
        exporter: Span exporter to use instead of Zipkin (tests pass an
            in-memory exporter here)
        batch: Export through a background BatchSpanProcessor; False exports
            synchronously on span end

    Returns:
        Tracing bundle for the service
    """
    resource = Resource.create(
        {
            SERVICE_NAME: service_name,
            SERVICE_VERSION: service_version,
        }
    )
    provider = TracerProvider(resource=resource)

    if enabled:
        span_exporter = exporter if exporter is not None else ZipkinExporter(endpoint=zipkin_endpoint)
        processor = BatchSpanProcessor(span_exporter) if batch else SimpleSpanProcessor(span_exporter)
        provider.add_span_processor(processor)
        logger.info(
            f"Tracing enabled for {service_name}",
            extra={"exporter": type(span_exporter).__name__, "batch": batch},
        )
    else:
        logger.info(f"Tracing export disabled for {service_name}")

    return Tracing(provider, service_name, service_version)
