"""Common utilities and exceptions."""

from libs.common.exceptions import (
    CepWeatherError,
    InvalidFormatError,
    MalformedInputError,
    PostalCodeNotFoundError,
    UpstreamUnreachableError,
    WeatherLookupFailedError,
)
from libs.common.schemas import ErrorResponse, PostalCodeRequest, parse_postal_code_request
from libs.common.validators import is_valid_cep

__all__ = [
    "CepWeatherError",
    "MalformedInputError",
    "InvalidFormatError",
    "PostalCodeNotFoundError",
    "UpstreamUnreachableError",
    "WeatherLookupFailedError",
    "ErrorResponse",
    "PostalCodeRequest",
    "parse_postal_code_request",
    "is_valid_cep",
]
