"""Status/value envelope returned by business operations."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any
from typing import Generic
from typing import TypeVar
from typing import cast

TSuccess = TypeVar("TSuccess")
TError = TypeVar("TError")
TResult = TypeVar("TResult", bound="Result")


class Result:
    """Outcome of an operation: HTTP status code, optional value and header metadata."""

    def __init__(self, status_code: int, value: Any = None) -> None:
        self._status_code = int(status_code)
        self._value = value
        self.location: str | None = None
        self.content_location: str | None = None

    @property
    def status_code(self) -> int:
        """HTTP status code of the result."""
        return self._status_code

    @property
    def value(self) -> Any:
        """Result value of the operation."""
        return self._value

    @property
    def is_error(self) -> bool:
        """True when the status code is 400 or above."""
        return self._status_code >= HTTPStatus.BAD_REQUEST

    @property
    def is_redirect(self) -> bool:
        """True when the status code is in the 300-399 range."""
        return self._status_code >= HTTPStatus.MULTIPLE_CHOICES and not self.is_error

    @classmethod
    def from_status(cls: type[TResult], status_code: int) -> TResult:
        """Build a result with no value from a bare status code."""
        return cls(status_code)

    @classmethod
    def from_error_builder(cls: type[TResult], builder: Any) -> TResult:
        """Build a 400 result whose value is a snapshot of the builder's errors."""
        errors = builder.get_errors() if builder is not None else None
        return cls(HTTPStatus.BAD_REQUEST, errors)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._status_code}>"


class TypedResult(Result, Generic[TSuccess]):
    """A result with a fixed value type for successful outcomes."""

    @property
    def value_as_success(self) -> TSuccess:
        return cast(TSuccess, self.value)

    @classmethod
    def success(cls, value: TSuccess) -> TypedResult[TSuccess]:
        """Build a 200 result carrying the success value."""
        return cls(HTTPStatus.OK, value)


class TypedErrorResult(TypedResult[TSuccess], Generic[TSuccess, TError]):
    """A typed result that also fixes the value type for failed outcomes."""

    @property
    def value_as_error(self) -> TError:
        return cast(TError, self.value)

    @classmethod
    def failure(cls, error: TError) -> TypedErrorResult[TSuccess, TError]:
        """Build a 400 result carrying the error value."""
        return cls(HTTPStatus.BAD_REQUEST, error)
