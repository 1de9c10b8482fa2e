"""Fluent accumulator for validation errors keyed by member name."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
from typing import overload

from result_envelope.core.config import get_settings
from result_envelope.selectors import DisplayNameLookup
from result_envelope.selectors import ValueSelector
from result_envelope.selectors import default_display_name
from result_envelope.selectors import derive_key

AGGREGATE_SEPARATOR = "\n"

ErrorKey = str | Sequence[str] | ValueSelector | None


@dataclass(frozen=True)
class ErrorEntry:
    """One recorded error message and the member names it applies to."""

    message: str | None
    member_names: tuple[str, ...] = ()


class ErrorList(Sequence[ErrorEntry]):
    """Immutable, ordered snapshot of recorded errors."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[ErrorEntry] = ()) -> None:
        self._entries = tuple(entries)

    @overload
    def __getitem__(self, index: int) -> ErrorEntry: ...

    @overload
    def __getitem__(self, index: slice) -> ErrorList: ...

    def __getitem__(self, index: int | slice) -> ErrorEntry | ErrorList:
        if isinstance(index, slice):
            return ErrorList(self._entries[index])
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ErrorEntry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorList):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    @property
    def aggregate_messages(self) -> tuple[str, ...]:
        """Distinct messages of entries that are not tied to any member."""
        messages: list[str] = []
        for entry in self._entries:
            if entry.member_names or not entry.message:
                continue
            if entry.message not in messages:
                messages.append(entry.message)
        return tuple(messages)

    def __str__(self) -> str:
        return AGGREGATE_SEPARATOR.join(self.aggregate_messages)

    def __repr__(self) -> str:
        return f"ErrorList({list(self._entries)!r})"


class ErrorBuilder:
    """Collects error messages and keys them by member name.

    Keys are given explicitly as strings or derived from a
    :class:`~result_envelope.selectors.ValueSelector`. When a selector is used
    the message is formatted with the selected value as ``{0}`` and the member
    label as ``{1}``; any extra arguments follow from ``{2}``::

        errors = ErrorBuilder()
        errors.add("{1} must be positive, got {0}", key=select(line, "line").attr("quantity"))

    A builder is meant to be owned by a single operation; it is not thread-safe.
    """

    def __init__(
        self,
        *,
        include_root_segment: bool | None = None,
        display_name: DisplayNameLookup | None = None,
    ) -> None:
        if include_root_segment is None:
            include_root_segment = get_settings().include_root_segment
        self.include_root_segment = include_root_segment
        self._display_name = display_name or default_display_name
        self._entries: list[ErrorEntry] = []

    def add(self, message: str | None, *args: Any, key: ErrorKey = None) -> ErrorBuilder:
        """Record an error message, formatting it when arguments are given."""
        member_names: tuple[str, ...]

        if isinstance(key, ValueSelector):
            owners, value = key.trace()
            selector_key = derive_key(
                key,
                include_root_segment=self.include_root_segment,
                display_name=self._display_name,
                owners=owners,
            )
            args = (value, selector_key.label, *args)
            member_names = (selector_key.key,) if selector_key.key else ()
        else:
            member_names = _member_names(key)

        if message is not None and args:
            message = message.format(*args)

        self._entries.append(ErrorEntry(message=message, member_names=member_names))
        return self

    def assert_(self, condition: Any, message: str | None = None, *args: Any, key: ErrorKey = None) -> bool:
        """Record ``message`` when ``condition`` is false and return the condition.

        ``condition`` may also be an operation result exposing ``is_error``
        and ``value``, in which case the check passes when the result is not an
        error and the recorded message is the string form of its value.
        """
        outcome = getattr(condition, "is_error", None)

        if isinstance(outcome, bool):
            if message is not None or args:
                raise TypeError("message arguments cannot be combined with a result")
            value = condition.value
            passed = not outcome
            message = str(value) if value is not None else None
        else:
            passed = bool(condition)

        if not passed:
            self.add(message, *args, key=key)

        return passed

    def not_(self, condition: Any, message: str | None = None, *args: Any, key: ErrorKey = None) -> bool:
        """Negation of :meth:`assert_`: true when the check failed."""
        return not self.assert_(condition, message, *args, key=key)

    def get_errors(self) -> ErrorList:
        """Return a new snapshot of the errors recorded so far."""
        return ErrorList(self._entries)

    def clear(self) -> ErrorBuilder:
        """Drop all recorded errors; configuration is kept."""
        self._entries.clear()
        return self

    @property
    def has_errors(self) -> bool:
        return bool(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __str__(self) -> str:
        return str(self.get_errors())

    def __repr__(self) -> str:
        return f"<ErrorBuilder errors={len(self._entries)}>"


def _member_names(key: str | Sequence[str] | None) -> tuple[str, ...]:
    if key is None:
        return ()
    if isinstance(key, str):
        return (key,) if key else ()
    return tuple(name for name in key if name)
