"""Translation of domain and validation errors into HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from app.core.exceptions import DomainError

logger = logging.getLogger(__name__)


def format_validation_errors(exc: RequestValidationError) -> str:
    """Render validation errors as ``field: message`` pairs separated by ``; ``."""
    parts = []
    for error in exc.errors():
        # First element is where the value came from (body, query, path)
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def _bad_request(request: Request, message: str) -> PlainTextResponse:
    logger.info(f"400 on {request.method} {request.url.path}: {message}")
    return PlainTextResponse(status_code=status.HTTP_400_BAD_REQUEST, content=message)


async def validation_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Handler for request body, query and path validation errors."""
    if not isinstance(exc, RequestValidationError):
        raise exc
    return _bad_request(request, format_validation_errors(exc))


async def domain_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Handler for ActivityNotFoundError, InvalidParticipantError and InvalidSearchError."""
    if not isinstance(exc, DomainError):
        raise exc
    return _bad_request(request, exc.message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DomainError, domain_exception_handler)
