"""FastAPI exception handlers shared by both services.

Domain errors become {"message": ...} bodies with the status carried by the
exception class. Anything else is logged with its traceback and answered with
a generic 500, so a bug in one request never takes the process down.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from libs.common.exceptions import CepWeatherError
from libs.common.logging import log_with_context
from libs.common.schemas import ErrorResponse

logger = logging.getLogger(__name__)


async def cep_weather_error_handler(request: Request, exc: CepWeatherError) -> JSONResponse:
    """Serialize a CepWeatherError as ErrorResponse with its own status."""
    log_with_context(
        logger,
        "WARNING" if exc.status_code < 500 else "ERROR",
        f"Request failed: {exc.message}",
        path=request.url.path,
        status_code=exc.status_code,
        error_type=type(exc).__name__,
        cause=exc.detail,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=exc.message).model_dump(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unexpected errors."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(message=CepWeatherError.message).model_dump(),
    )


def add_error_handlers(app: FastAPI) -> None:
    """
    Register the shared exception handlers on an application.

    Args:
        app: FastAPI application instance

    Example:
        >>> app = FastAPI()
        >>> add_error_handlers(app)
    """
    app.add_exception_handler(CepWeatherError, cep_weather_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
