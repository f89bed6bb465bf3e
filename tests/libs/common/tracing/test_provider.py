"""Tests for tracer provider setup and lifecycle."""

from unittest.mock import MagicMock, patch

from opentelemetry import trace
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from libs.common.tracing import configure_tracing


class TestConfigureTracing:
    def test_resource_identifies_service(self) -> None:
        exporter = InMemorySpanExporter()
        tracing = configure_tracing("weather-orchestrator", "1.0.0", exporter=exporter, batch=False)

        with tracing.tracer.start_as_current_span("work"):
            pass

        (span,) = exporter.get_finished_spans()
        assert span.resource.attributes["service.name"] == "weather-orchestrator"
        assert span.resource.attributes["service.version"] == "1.0.0"
        tracing.shutdown()

    def test_disabled_creates_spans_without_exporting(self) -> None:
        exporter = InMemorySpanExporter()
        tracing = configure_tracing("cep-gateway", exporter=exporter, enabled=False)

        with tracing.tracer.start_as_current_span("work") as span:
            assert span.get_span_context().is_valid

        assert exporter.get_finished_spans() == ()
        tracing.shutdown()

    def test_shutdown_flushes_batched_spans(self) -> None:
        exporter = InMemorySpanExporter()
        tracing = configure_tracing("cep-gateway", exporter=exporter, batch=True)

        with tracing.tracer.start_as_current_span("work"):
            pass
        tracing.shutdown()

        assert [s.name for s in exporter.get_finished_spans()] == ["work"]

    def test_defaults_to_zipkin_exporter(self) -> None:
        with (
            patch("libs.common.tracing.provider.ZipkinExporter") as zipkin_mock,
            patch("libs.common.tracing.provider.BatchSpanProcessor", return_value=MagicMock()) as batch_mock,
        ):
            tracing = configure_tracing("cep-gateway", zipkin_endpoint="http://zipkin:9411/api/v2/spans")

        zipkin_mock.assert_called_once_with(endpoint="http://zipkin:9411/api/v2/spans")
        batch_mock.assert_called_once_with(zipkin_mock.return_value)
        tracing.shutdown()

    def test_does_not_install_global_provider(self) -> None:
        before = trace.get_tracer_provider()

        tracing = configure_tracing("cep-gateway", exporter=InMemorySpanExporter())

        assert trace.get_tracer_provider() is before
        assert trace.get_tracer_provider() is not tracing.provider
        tracing.shutdown()
