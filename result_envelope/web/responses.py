"""Write results to Starlette/FastAPI responses."""

from __future__ import annotations

import logging

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.responses import Response

from result_envelope.core.config import get_settings
from result_envelope.result import Result
from result_envelope.schemas.error import ErrorObject
from result_envelope.schemas.error import ErrorResponse
from result_envelope.web.model_state import ModelState
from result_envelope.web.model_state import add_model_errors

logger = logging.getLogger(__name__)


ERROR_CODES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "validation_error",
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
    status.HTTP_410_GONE: "gone",
    status.HTTP_412_PRECONDITION_FAILED: "precondition_failed",
    status.HTTP_429_TOO_MANY_REQUESTS: "rate_limited",
    status.HTTP_503_SERVICE_UNAVAILABLE: "unavailable",
}


def http_error_code(status_code: int) -> str:
    """Return the envelope ``code`` for an error result's status.

    Unlisted server errors are ``internal_error``; any other status is
    ``bad_request``.
    """
    code = ERROR_CODES.get(int(status_code))
    if code is not None:
        return code
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return "internal_error"
    return "bad_request"


def apply_result(response: Response, result: Result) -> Response:
    """Set the status code and location headers of ``result`` on ``response``."""
    if response is None:
        raise TypeError("response is required")
    if result is None:
        raise TypeError("result is required")

    response.status_code = result.status_code

    if result.location:
        response.headers["Location"] = result.location

    if result.content_location:
        response.headers["Content-Location"] = result.content_location

    return response


def with_status(response: Response, status_or_result: int | Result) -> Response:
    """Set a bare status code, or the status and headers of a result."""
    if isinstance(status_or_result, Result):
        return apply_result(response, status_or_result)

    if response is None:
        raise TypeError("response is required")
    response.status_code = int(status_or_result)
    return response


def build_error_payload(result: Result, *, message: str | None = None) -> ErrorResponse:
    """Render the errors carried by ``result`` as the JSON error envelope."""
    model_state = ModelState()
    add_model_errors(model_state, result)

    global_messages = model_state.global_messages
    if message is None:
        message = global_messages[0] if global_messages else get_settings().default_error_message

    details = model_state.to_details()
    return ErrorResponse(
        error=ErrorObject(
            code=http_error_code(result.status_code),
            message=message,
            details=details or None,
        ),
    )


def result_response(result: Result) -> Response:
    """Build a response for ``result``.

    Error results render the error envelope; other results render their value
    as JSON, or an empty body when there is no value.
    """
    if result is None:
        raise TypeError("result is required")

    if result.is_error:
        payload = build_error_payload(result)
        logger.info(
            "Writing error result status=%s code=%s details=%s",
            result.status_code,
            payload.error.code,
            len(payload.error.details or ()),
        )
        response: Response = JSONResponse(
            status_code=result.status_code,
            content=payload.model_dump(exclude_none=True),
        )
    elif result.value is None:
        response = Response(status_code=result.status_code)
    else:
        response = JSONResponse(status_code=result.status_code, content=jsonable_encoder(result.value))

    return apply_result(response, result)
