"""Shared Pydantic schemas for request and error bodies.

Both services accept the same {"cep": "..."} body and answer failures with
the same {"message": "..."} body.
"""

from pydantic import BaseModel, StrictStr, ValidationError

from libs.common.exceptions import MalformedInputError


class PostalCodeRequest(BaseModel):
    """Body of POST /weather on both services."""

    # A missing field decodes to "" so the format check rejects it downstream
    cep: StrictStr = ""


class ErrorResponse(BaseModel):
    """Body of every non-success response."""

    message: str


def parse_postal_code_request(body: bytes) -> PostalCodeRequest:
    """
    Decode a raw request body into a PostalCodeRequest.

    Args:
        body: Raw HTTP request body

    Returns:
        Parsed PostalCodeRequest

    Raises:
        MalformedInputError: If body is not a JSON object whose "cep"
            (when present) is a string

    Example:
        >>> parse_postal_code_request(b'{"cep": "01001000"}').cep
        '01001000'
    """
    try:
        return PostalCodeRequest.model_validate_json(body)
    except ValidationError as e:
        raise MalformedInputError(f"Could not decode request body: {e.error_count()} error(s)") from e
