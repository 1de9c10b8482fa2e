"""Result exception and FastAPI exception handler registration."""

from __future__ import annotations

from typing import Any
import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from result_envelope.builder import ErrorBuilder
from result_envelope.core.config import get_settings
from result_envelope.result import Result
from result_envelope.web.responses import result_response

logger = logging.getLogger(__name__)

REQUEST_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})


class ResultError(Exception):
    """Carries an error result out of a handler to the response boundary."""

    def __init__(self, result: Result) -> None:
        if result is None:
            raise TypeError("result is required")
        super().__init__(str(result.value) if result.value is not None else repr(result))
        self.result = result


def format_location(location: tuple[Any, ...] | list[Any] | Any) -> str:
    """Join a validation error location into a dotted member key."""
    if not isinstance(location, (tuple, list)):
        return str(location)

    key = ""
    for part in location:
        if part in REQUEST_LOCATION_PREFIXES and not key:
            continue
        if isinstance(part, int):
            key += f"[{part}]"
        else:
            key = f"{key}.{part}" if key else str(part)
    return key


def validation_errors(exc: RequestValidationError, errors: ErrorBuilder | None = None) -> ErrorBuilder:
    """Collect FastAPI request validation issues keyed by field location."""
    if errors is None:
        errors = ErrorBuilder()
    for issue in exc.errors():
        key = format_location(issue.get("loc", ()))
        message = str(issue.get("msg", "Invalid value"))
        errors.add(message, key=key)
    return errors


async def result_error_handler(_: Request, exc: ResultError) -> Response:
    """Write the result carried by the exception."""

    return result_response(exc.result)


async def request_validation_exception_handler(_: Request, exc: RequestValidationError) -> Response:
    """Normalize FastAPI validation errors to the error envelope."""

    errors = validation_errors(exc, ErrorBuilder().add("Request validation failed"))
    return result_response(Result.from_error_builder(errors))


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> Response:
    """Normalize HTTP exceptions to the error envelope."""

    detail = exc.detail if isinstance(exc.detail, str) and exc.detail else None
    result = Result(exc.status_code, detail)
    response = result_response(result)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(_: Request, exc: Exception) -> Response:
    """Avoid leaking internal exceptions while keeping response shape stable."""

    logger.error("Unhandled exception while writing result", exc_info=exc)
    return result_response(Result(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"))


def register_error_handlers(app: FastAPI) -> None:
    """Attach the result error handlers to a FastAPI app instance."""

    logger.info("Registering result error handlers with settings=%s", get_settings().safe_for_logging())

    app.add_exception_handler(ResultError, result_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
