"""Access-path selectors used to key errors by member name.

A selector names a root variable and the chain of attribute and item accesses
that lead to the value being validated::

    select(order, "order").attr("lines").item(0).attr("quantity")

The chain is kept as data, so the error key (``lines[0].quantity``) is derived
from its shape while the value is obtained by walking it.
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import is_dataclass
from typing import Any

from pydantic import BaseModel

DisplayNameLookup = Callable[[type, str], str | None]

DISPLAY_NAME_METADATA_KEY = "display_name"


class UnsupportedSelectorError(TypeError):
    """Raised when a selector step cannot be used to derive an error key."""


@dataclass(frozen=True)
class MemberStep:
    """Attribute access, e.g. ``.name``."""

    name: str


@dataclass(frozen=True)
class IndexStep:
    """Item access with a scalar index, e.g. ``[0]`` or ``["code"]``."""

    index: int | str


SelectorStep = MemberStep | IndexStep


@dataclass(frozen=True)
class SelectorKey:
    """Error key derived from a selector and the label used in messages."""

    key: str
    label: str


class ValueSelector:
    """Immutable access path rooted at a named variable."""

    __slots__ = ("_root_name", "_root", "_steps")

    def __init__(self, root_name: str, root: Any, steps: tuple[SelectorStep, ...] = ()) -> None:
        if not root_name:
            raise ValueError("root_name is required")
        self._root_name = root_name
        self._root = root
        self._steps = steps

    @property
    def root_name(self) -> str:
        return self._root_name

    @property
    def root(self) -> Any:
        return self._root

    @property
    def steps(self) -> tuple[SelectorStep, ...]:
        return self._steps

    def attr(self, name: str) -> ValueSelector:
        """Extend the path with an attribute access."""
        if not isinstance(name, str) or not name.isidentifier():
            raise UnsupportedSelectorError(f"Member name must be an identifier, got {name!r}")
        return ValueSelector(self._root_name, self._root, (*self._steps, MemberStep(name)))

    def item(self, index: int | str) -> ValueSelector:
        """Extend the path with an item access."""
        _check_index(index)
        return ValueSelector(self._root_name, self._root, (*self._steps, IndexStep(index)))

    def __getitem__(self, index: int | str) -> ValueSelector:
        return self.item(index)

    def trace(self) -> tuple[tuple[Any, ...], Any]:
        """Walk the path once, returning the owner of each step and the selected value."""
        owners: list[Any] = []
        current = self._root
        for step in self._steps:
            owners.append(current)
            current = _apply_step(current, step)
        return tuple(owners), current

    def evaluate(self) -> Any:
        """Walk the path from the root and return the selected value."""
        return self.trace()[1]

    def __repr__(self) -> str:
        return f"ValueSelector({self._root_name}{_render_steps(self._steps)})"


def select(root: Any, name: str) -> ValueSelector:
    """Start a selector at ``root``, which is referred to as ``name``."""
    return ValueSelector(name, root)


def default_display_name(owner_type: type, member: str) -> str | None:
    """Return a field label declared on a pydantic model or dataclass."""
    if isinstance(owner_type, type) and issubclass(owner_type, BaseModel):
        field = owner_type.model_fields.get(member)
        return field.title if field is not None else None

    if is_dataclass(owner_type):
        for item in fields(owner_type):
            if item.name == member:
                label = item.metadata.get(DISPLAY_NAME_METADATA_KEY)
                return str(label) if label is not None else None

    return None


def derive_key(
    selector: ValueSelector,
    *,
    include_root_segment: bool = False,
    display_name: DisplayNameLookup = default_display_name,
    owners: Sequence[Any] | None = None,
) -> SelectorKey:
    """Derive the error key and message label from the shape of a selector.

    ``owners`` are the objects each step is applied to, as returned by
    :meth:`ValueSelector.trace`. When omitted the path is walked up to, but not
    including, the last step; the selected value itself is never read.
    """
    if not selector.steps:
        return SelectorKey(key=selector.root_name, label=selector.root_name)

    for step in selector.steps:
        _check_step(step)

    if owners is None:
        owners = _owners(selector)
    if len(owners) != len(selector.steps):
        raise ValueError("owners must have one entry per selector step")

    parts: list[str] = [selector.root_name] if include_root_segment else []

    for step, owner in zip(selector.steps, owners):
        if isinstance(step, MemberStep):
            parts.append(display_name(type(owner), step.name) or step.name)
            continue
        segment = f"[{step.index}]"
        if parts:
            parts[-1] += segment
        else:
            parts.append(segment)

    return SelectorKey(key=".".join(parts), label=parts[-1])


def _owners(selector: ValueSelector) -> list[Any]:
    owners = [selector.root]
    for step in selector.steps[:-1]:
        owners.append(_apply_step(owners[-1], step))
    return owners


def _check_step(step: object) -> None:
    if isinstance(step, IndexStep):
        _check_index(step.index)
    elif not isinstance(step, MemberStep):
        raise UnsupportedSelectorError(f"Unsupported selector step: {step!r}")


def _check_index(index: object) -> None:
    if isinstance(index, bool) or not isinstance(index, (int, str)):
        raise UnsupportedSelectorError(f"Index must be an int or str, got {type(index).__name__}")


def _apply_step(current: Any, step: SelectorStep) -> Any:
    _check_step(step)
    if isinstance(step, MemberStep):
        return getattr(current, step.name)
    return current[step.index]


def _render_steps(steps: tuple[SelectorStep, ...]) -> str:
    rendered = []
    for step in steps:
        if isinstance(step, MemberStep):
            rendered.append(f".{step.name}")
        else:
            rendered.append(f"[{step.index!r}]")
    return "".join(rendered)
