"""
Root conftest for tests.

Provides an in-memory span exporter and a Tracing bundle that exports to it
synchronously, so tests can assert on finished spans right after a request.
"""

from collections.abc import Callable, Iterator

import httpx

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from libs.common.logging.context import clear_trace_id
from libs.common.tracing import Tracing, configure_tracing


@pytest.fixture()
def span_exporter() -> InMemorySpanExporter:
    """Collects finished spans for assertions."""
    return InMemorySpanExporter()


@pytest.fixture()
def tracing(span_exporter: InMemorySpanExporter) -> Iterator[Tracing]:
    """Tracing bundle exporting synchronously to span_exporter."""
    tracing = configure_tracing("test-service", "1.0.0", exporter=span_exporter, batch=False)
    yield tracing
    tracing.provider.shutdown()
    clear_trace_id()


class FakeCollaborators:
    """
    Stand-in for ViaCEP and WeatherAPI behind one httpx.MockTransport.

    By default the CEP resolves to ``city`` and the weather reports ``temp_c``.
    Set ``viacep_response`` / ``weather_response`` to an httpx.Response to
    override an answer, or to an exception instance to simulate a transport
    failure.
    """

    VIACEP_BASE_URL = "http://viacep.test"
    WEATHER_API_BASE_URL = "http://weatherapi.test"

    def __init__(self) -> None:
        self.city = "São Paulo"
        self.temp_c = 25.0
        self.viacep_response: httpx.Response | Exception | None = None
        self.weather_response: httpx.Response | Exception | None = None
        self.requests: list[httpx.Request] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "viacep.test":
            return self._respond(
                self.viacep_response,
                lambda: httpx.Response(
                    200,
                    json={"cep": "17055-250", "localidade": self.city, "uf": "SP"},
                ),
            )
        if request.url.host == "weatherapi.test":
            return self._respond(
                self.weather_response,
                lambda: httpx.Response(
                    200,
                    json={"location": {"name": self.city}, "current": {"temp_c": self.temp_c}},
                ),
            )
        raise httpx.ConnectError(f"unexpected host {request.url.host}")

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    @staticmethod
    def _respond(
        override: httpx.Response | Exception | None,
        default: Callable[[], httpx.Response],
    ) -> httpx.Response:
        if isinstance(override, Exception):
            raise override
        return override if override is not None else default()


@pytest.fixture()
def collaborators() -> FakeCollaborators:
    return FakeCollaborators()
