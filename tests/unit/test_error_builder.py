"""Unit tests for error accumulation and selector keyed messages."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from pydantic import BaseModel
from pydantic import Field

from result_envelope.builder import ErrorBuilder
from result_envelope.builder import ErrorEntry
from result_envelope.selectors import UnsupportedSelectorError
from result_envelope.selectors import select


@dataclass
class _Text:
    value: str

    @property
    def length(self) -> int:
        return len(self.value)


class _Profile(BaseModel):
    some_property: int = Field(0, title="Some Property")
    nickname: str = ""


def test_adds_message() -> None:
    errors = ErrorBuilder()
    errors.add("a")

    assert errors.get_errors()[0].message == "a"


def test_adds_and_formats_message() -> None:
    errors = ErrorBuilder()
    errors.add("a {0}", "b")
    errors.add("a {0} {1}", "b", "c")

    err = errors.get_errors()

    assert err[0] == ErrorEntry(message="a b")
    assert err[1] == ErrorEntry(message="a b c")


def test_message_without_arguments_is_not_formatted() -> None:
    errors = ErrorBuilder().add("expected {braces}")

    assert errors.get_errors()[0].message == "expected {braces}"


def test_formats_message_from_member_selector() -> None:
    a = _Text("ddf")

    errors = ErrorBuilder()
    errors.add("{1} = {0}", key=select(a, "a").attr("length"))

    err = errors.get_errors()

    assert err[0].message == "length = 3"
    assert err[0].member_names == ("length",)

    errors.clear()
    errors.include_root_segment = True

    errors.add("{1} = {0}", key=select(a, "a").attr("length"))

    err = errors.get_errors()

    assert err[0].message == "length = 3"
    assert err[0].member_names == ("a.length",)


def test_formats_message_from_index_selector() -> None:
    items = [1, 2, 3]

    for i in range(1):
        errors = ErrorBuilder()
        errors.add("{1} = {0}", key=select(items, "list")[i])

        err = errors.get_errors()

        assert err[0].message == f"[0] = {items[i]}"
        assert err[0].member_names == ("[0]",)

        errors.clear()
        errors.include_root_segment = True

        errors.add("{1} = {0}", key=select(items, "list")[i])

        err = errors.get_errors()

        assert err[0].message == f"list[0] = {items[i]}"
        assert err[0].member_names == ("list[0]",)


def test_extra_arguments_follow_value_and_label() -> None:
    profile = _Profile(nickname="x")

    errors = ErrorBuilder().add(
        "{1} must have at least {2} characters, got {0!r}",
        3,
        key=select(profile, "profile").attr("nickname"),
    )

    assert errors.get_errors()[0].message == "nickname must have at least 3 characters, got 'x'"


def test_formats_message_with_display_name() -> None:
    obj = _Profile()

    errors = ErrorBuilder()
    errors.add("Bad {1}", key=select(obj, "obj").attr("some_property"))

    err = errors.get_errors()

    assert err[0].message == "Bad Some Property"
    assert err[0].member_names == ("Some Property",)


def test_injected_display_name_lookup_is_used() -> None:
    obj = _Profile()
    seen: list[tuple[type, str]] = []

    def lookup(owner_type: type, member: str) -> str | None:
        seen.append((owner_type, member))
        return member.upper()

    errors = ErrorBuilder(display_name=lookup)
    errors.add("Bad {1}", key=select(obj, "obj").attr("nickname"))

    assert errors.get_errors()[0].message == "Bad NICKNAME"
    assert seen == [(_Profile, "nickname")]


def test_null_key_is_not_added_to_member_names() -> None:
    errors = ErrorBuilder()
    errors.add("a", key=None)

    err = errors.get_errors()

    assert len(err[0].member_names) == 0


def test_sequence_key_adds_each_non_empty_member_name() -> None:
    errors = ErrorBuilder().add("mismatch", key=["password", "", "confirm_password"])

    assert errors.get_errors()[0].member_names == ("password", "confirm_password")


def test_get_errors_always_returns_new_instance() -> None:
    errors = ErrorBuilder()

    err1 = errors.get_errors()
    err2 = errors.get_errors()

    assert err1 is not None
    assert err2 is not None
    assert err1 is not err2
    assert err1 == err2


def test_snapshot_is_not_changed_by_later_additions() -> None:
    errors = ErrorBuilder().add("a")

    snapshot = errors.get_errors()
    errors.add("b").clear()

    assert [entry.message for entry in snapshot] == ["a"]
    assert len(errors) == 0


def test_clear_keeps_root_segment_setting() -> None:
    errors = ErrorBuilder(include_root_segment=True).add("a")

    errors.clear()

    assert errors.include_root_segment is True
    assert not errors.has_errors


def test_root_segment_default_comes_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    from result_envelope.core.config import get_settings

    monkeypatch.setenv("RESULT_ENVELOPE_INCLUDE_ROOT_SEGMENT", "true")
    get_settings.cache_clear()

    assert ErrorBuilder().include_root_segment is True


def test_to_string_with_message() -> None:
    errors = ErrorBuilder().add("a")

    assert str(errors) == "a"


def test_to_string_with_empty_string_member() -> None:
    errors = ErrorBuilder().add("a", key="x").add("b", key="")

    assert str(errors) == "b"


def test_to_string_with_empty_members() -> None:
    errors = ErrorBuilder().add("a", key="x").add("b")

    assert str(errors) == "b"


def test_assert_records_message_only_when_condition_fails() -> None:
    errors = ErrorBuilder()

    assert errors.assert_(False, "bad") is False
    assert errors.assert_(True, "bad") is True

    assert [entry.message for entry in errors.get_errors()] == ["bad"]


def test_assert_with_selector_keys_the_failure() -> None:
    items = [5, -1]
    errors = ErrorBuilder()

    passed = errors.assert_(items[1] > 0, "{1} must be positive, got {0}", key=select(items, "items")[1])

    assert passed is False
    assert errors.get_errors()[0] == ErrorEntry(message="[1] must be positive, got -1", member_names=("[1]",))


def test_not_negates_assert() -> None:
    errors = ErrorBuilder()

    assert errors.not_(False, "bad") is True
    assert errors.not_(True, "bad") is False
    assert len(errors) == 1


def test_unsupported_selector_shapes_are_rejected() -> None:
    items = [1, 2, 3]

    with pytest.raises(UnsupportedSelectorError):
        select(items, "items")[0:2]

    with pytest.raises(UnsupportedSelectorError):
        select(items, "items").attr("not a name")

    with pytest.raises(UnsupportedSelectorError):
        select(items, "items").item(True)


def test_selector_value_is_evaluated_once_per_add() -> None:
    class _Counter:
        def __init__(self) -> None:
            self.calls = 0

        @property
        def value(self) -> int:
            self.calls += 1
            return self.calls

    counter = _Counter()
    errors = ErrorBuilder()

    errors.add("{1} = {0}", key=select(counter, "counter").attr("value"))

    assert errors.get_errors()[0].message == "value = 1"
    assert counter.calls == 1


def test_intermediate_selector_steps_are_evaluated_once_per_add() -> None:
    class _Holder:
        def __init__(self) -> None:
            self.reads = 0

        @property
        def items(self) -> list[int]:
            self.reads += 1
            return [4, 5]

    holder = _Holder()

    ErrorBuilder().add("{1} = {0}", key=select(holder, "holder").attr("items")[1])

    assert holder.reads == 1
