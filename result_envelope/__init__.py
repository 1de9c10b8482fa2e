"""Result envelopes and validation error accumulation for web handlers."""

from result_envelope.builder import ErrorBuilder
from result_envelope.builder import ErrorEntry
from result_envelope.builder import ErrorList
from result_envelope.core.errors import ResultError
from result_envelope.core.errors import register_error_handlers
from result_envelope.result import Result
from result_envelope.result import TypedErrorResult
from result_envelope.result import TypedResult
from result_envelope.selectors import UnsupportedSelectorError
from result_envelope.selectors import ValueSelector
from result_envelope.selectors import select
from result_envelope.web.model_state import ModelState
from result_envelope.web.model_state import add_model_errors
from result_envelope.web.responses import apply_result
from result_envelope.web.responses import result_response
from result_envelope.web.responses import with_status

__all__ = [
    "ErrorBuilder",
    "ErrorEntry",
    "ErrorList",
    "ModelState",
    "Result",
    "ResultError",
    "TypedErrorResult",
    "TypedResult",
    "UnsupportedSelectorError",
    "ValueSelector",
    "add_model_errors",
    "apply_result",
    "register_error_handlers",
    "result_response",
    "select",
    "with_status",
]
