"""Error Handlers — global exception handlers for the Vehicle API.

Invariants:
    - VehicleApiError -> {"error": message} at its status, or an empty body
    - Unmatched path or method -> 404, empty body
    - RequestValidationError and any other uncaught exception -> 400 {"error": "Bad Request"}
    - Internal details are logged, never returned

Design Decisions:
    - Catch-all answers 400, not 500: controllers already own every store failure (500),
      so anything left is a request the pipeline could not make sense of
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from vehicle_api.core.errors import MalformedBodyError, VehicleApiError

logger = logging.getLogger(__name__)

BAD_REQUEST_RESPONSE = {"error": "Bad Request"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_vehicle_error_handler(app)
    _register_http_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _bad_request() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=BAD_REQUEST_RESPONSE,
    )


def _register_vehicle_error_handler(app: FastAPI) -> None:
    """Register guard/domain error handler."""

    @app.exception_handler(VehicleApiError)
    async def vehicle_error_handler(request: Request, exc: VehicleApiError):
        logger.warning(
            f"{exc.code}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
            },
        )
        if isinstance(exc, MalformedBodyError):
            return _bad_request()
        content = exc.to_response()
        if content is None:
            return Response(status_code=exc.http_status)
        return JSONResponse(status_code=exc.http_status, content=content)


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (unknown path / method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            logger.info(
                f"Unavailable route {request.method} {request.url.path}",
                extra={"path": request.url.path, "method": request.method},
            )
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        return Response(status_code=exc.status_code, headers=exc.headers)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register FastAPI parameter validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return _bad_request()


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return _bad_request()
