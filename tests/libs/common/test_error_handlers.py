"""Tests for the shared FastAPI exception handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from libs.common.error_handlers import add_error_handlers, cep_weather_error_handler
from libs.common.exceptions import (
    CepWeatherError,
    PostalCodeNotFoundError,
    WeatherLookupFailedError,
)


@pytest.fixture()
def client() -> TestClient:
    app = FastAPI()
    add_error_handlers(app)

    @app.get("/not-found")
    async def not_found() -> dict:
        raise PostalCodeNotFoundError("viacep said erro=true")

    @app.get("/weather-failed")
    async def weather_failed() -> dict:
        raise WeatherLookupFailedError("WEATHER_API_KEY is not set")

    @app.get("/boom")
    async def boom() -> dict:
        raise RuntimeError("unexpected")

    return TestClient(app, raise_server_exceptions=False)


class TestErrorHandlers:
    def test_domain_error_uses_status_and_public_message(self, client: TestClient) -> None:
        response = client.get("/not-found")

        assert response.status_code == 404
        assert response.json() == {"message": "can not find zipcode"}

    def test_internal_cause_is_not_exposed(self, client: TestClient) -> None:
        response = client.get("/weather-failed")

        assert response.status_code == 500
        assert response.json() == {"message": "failed to get weather data"}
        assert "WEATHER_API_KEY" not in response.text

    def test_unhandled_exception_becomes_generic_500(self, client: TestClient) -> None:
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"message": "internal server error"}

    def test_domain_handler_is_registered_for_base_class(self) -> None:
        app = FastAPI()

        add_error_handlers(app)

        assert app.exception_handlers[CepWeatherError] is cep_weather_error_handler

    def test_subclass_without_detail_uses_public_message(self) -> None:
        app = FastAPI()
        add_error_handlers(app)

        @app.get("/bare")
        async def bare() -> dict:
            raise PostalCodeNotFoundError()

        response = TestClient(app).get("/bare")

        assert response.status_code == 404
        assert response.json() == {"message": "can not find zipcode"}
