"""
Exception hierarchy for the CEP weather services.

Every failure a request can hit maps to exactly one subclass of
CepWeatherError. Each class carries the HTTP status and the client-facing
message; the constructor argument is the internal cause, which goes to logs
and trace spans but never to the client.

Several distinct causes deliberately share one class (network failure and a
genuinely unknown CEP are both PostalCodeNotFoundError), so callers cannot
tell them apart from the response alone.
"""


class CepWeatherError(Exception):
    """
    Base exception for all request failures.

    Attributes:
        status_code: HTTP status returned to the client
        message: Body message returned to the client

    Example:
        >>> try:
        ...     raise PostalCodeNotFoundError("viacep returned erro=true")
        ... except CepWeatherError as e:
        ...     print(e.status_code, e.message, str(e))
        404 can not find zipcode viacep returned erro=true
    """

    status_code: int = 500
    message: str = "internal server error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class MalformedInputError(CepWeatherError):
    """
    Raised when the request body is not a JSON object with a string "cep".

    Example:
        >>> parse_postal_code_request(b"not json")
        Traceback (most recent call last):
        MalformedInputError: ...
    """

    status_code = 422
    message = "invalid zipcode"


class InvalidFormatError(CepWeatherError):
    """Raised when "cep" is not exactly 8 ASCII digits."""

    status_code = 422
    message = "invalid zipcode"


class PostalCodeNotFoundError(CepWeatherError):
    """
    Raised when the address lookup yields no city.

    Covers transport errors, non-2xx responses, undecodable bodies and
    an explicit not-found flag from the lookup service.
    """

    status_code = 404
    message = "can not find zipcode"


class UpstreamUnreachableError(CepWeatherError):
    """Raised by the gateway when the weather orchestrator cannot be reached."""

    status_code = 500
    message = "failed to forward request"


class WeatherLookupFailedError(CepWeatherError):
    """
    Raised when current weather for a city cannot be obtained.

    Covers a missing API key, transport errors, non-2xx responses and
    undecodable bodies.
    """

    status_code = 500
    message = "failed to get weather data"
