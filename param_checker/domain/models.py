"""Domain models for declared parameters.

A :class:`Parameter` is the typed handle returned to callers at registration
time. Its state moves from :class:`Unvalidated` to either :class:`Valid` or
:class:`Invalid` when the owning session is checked, and never otherwise.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar, Union

from .errors import ParameterStateError

T = TypeVar("T")


@dataclass(frozen=True)
class Unvalidated:
    """The owning session has not been checked yet."""


@dataclass(frozen=True)
class Valid:
    value: Any


@dataclass(frozen=True)
class Invalid:
    message: str


ParameterState = Union[Unvalidated, Valid, Invalid]

UNVALIDATED = Unvalidated()


class Parameter(Generic[T]):
    """Caller-held view of a declared parameter."""

    def __init__(self, name: str, required: bool) -> None:
        self._name = name
        self._required = required
        self._state: ParameterState = UNVALIDATED

    @property
    def name(self) -> str:
        return self._name

    @property
    def required(self) -> bool:
        return self._required

    @property
    def state(self) -> ParameterState:
        return self._state

    @property
    def validated(self) -> bool:
        return not isinstance(self._state, Unvalidated)

    @property
    def is_valid(self) -> bool:
        return isinstance(self._state, Valid)

    def get(self) -> T:
        """Return the converted value.

        Raises :class:`ParameterStateError` before the session is checked.
        After a failed check the value is ``None``.
        """
        state = self._state
        if isinstance(state, Valid):
            return state.value
        if isinstance(state, Invalid):
            return None  # type: ignore[return-value]
        raise ParameterStateError()

    def __repr__(self) -> str:
        return f"Parameter(name={self._name!r}, required={self._required}, state={self._state!r})"


@dataclass(slots=True)
class ParameterDescriptor:
    """Session-internal record behind a :class:`Parameter` handle."""

    name: str
    converter: Callable[[str], Any]
    required: bool
    handle: Parameter[Any] = field(repr=False)

    def settle(self, state: ParameterState) -> None:
        self.handle._state = state


@dataclass(frozen=True)
class InputBatch:
    """One raw input batch, such as a spreadsheet row or a request's query."""

    batch_id: str
    values: dict[str, tuple[str, ...]]
    source: str
    lineage: str | None = None
