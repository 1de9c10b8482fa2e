"""Form-validation state populated from result errors."""

from __future__ import annotations

from collections.abc import Iterator
from collections.abc import Mapping
import logging

from result_envelope.builder import ErrorBuilder
from result_envelope.builder import ErrorList
from result_envelope.core.config import get_settings
from result_envelope.result import Result
from result_envelope.schemas.error import ErrorDetail

logger = logging.getLogger(__name__)


class ModelState(Mapping[str, list[str]]):
    """Error messages grouped by member key.

    Messages that do not belong to a member are stored under the global key
    (``""`` unless configured otherwise).
    """

    def __init__(self, *, global_key: str | None = None) -> None:
        self.global_key = get_settings().global_error_key if global_key is None else global_key
        self._errors: dict[str, list[str]] = {}

    def add_model_error(self, key: str | None, message: str) -> None:
        """Register ``message`` under ``key``."""
        self._errors.setdefault(key or self.global_key, []).append(message)

    def __getitem__(self, key: str) -> list[str]:
        return self._errors[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def clear(self) -> None:
        self._errors.clear()

    @property
    def error_count(self) -> int:
        """Total number of registered messages across all keys."""
        return sum(len(messages) for messages in self._errors.values())

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def global_messages(self) -> list[str]:
        return list(self._errors.get(self.global_key, ()))

    def to_details(self) -> list[ErrorDetail]:
        """Return member-level messages as error details, global ones excluded."""
        return [
            ErrorDetail(member=key, message=message)
            for key, messages in self._errors.items()
            if key != self.global_key
            for message in messages
        ]


def add_model_errors(model_state: ModelState, result: Result) -> None:
    """Add the errors carried by ``result`` to ``model_state``.

    The value is registered whether or not the result is an error.
    """
    if model_state is None:
        raise TypeError("model_state is required")
    if result is None:
        raise TypeError("result is required")

    value = result.value
    if value is None:
        return

    if isinstance(value, ErrorBuilder):
        value = value.get_errors()

    if isinstance(value, ErrorList):
        _add_error_list(model_state, value)
    else:
        model_state.add_model_error(None, str(value))


def _add_error_list(model_state: ModelState, errors: ErrorList) -> None:
    message = str(errors)

    if message:
        model_state.add_model_error(None, message)

    for entry in errors:
        if entry.member_names:
            for name in entry.member_names:
                model_state.add_model_error(name, entry.message or "")
            continue

        if entry.message is None or entry.message == message:
            continue

        model_state.add_model_error(None, entry.message)

    logger.debug("Registered %s errors in model state", model_state.error_count)
