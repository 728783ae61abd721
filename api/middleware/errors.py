"""
Exception handlers.

Every failure leaves the API as ``{"message": ..., "code": ...}``:
- domain errors (conflict, not found, validation, unauthorized) -> 400
- InternalError and anything unexpected -> 500
- request validation errors -> 400
- HTTPException keeps its status (401 for bearer/refresh failures)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.exceptions import InternalError, TesseraError
from ..models.errors import ErrorResponse

logger = logging.getLogger(__name__)


def status_for(error: TesseraError) -> int:
    """HTTP status for a workflow error."""
    if isinstance(error, InternalError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def _error_response(status_code: int, message: str, code: str | None = None) -> JSONResponse:
    body = ErrorResponse(message=message, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def handle_tessera_error(request: Request, exc: TesseraError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("Error at %s %s: %s", request.method, request.url.path, exc.message)
    return _error_response(status_code, exc.message, exc.code)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = _error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Validation failed"
    return _error_response(status.HTTP_400_BAD_REQUEST, message, "VALIDATION_ERROR")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error at %s %s", request.method, request.url.path)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred",
        "INTERNAL_ERROR",
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers on an application."""
    app.add_exception_handler(TesseraError, handle_tessera_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
