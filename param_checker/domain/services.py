"""Validation sessions: parameter registration and batched checking."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, Optional, Sequence, TypeVar
from urllib.parse import parse_qs

from .conversions import Converter
from .errors import ConfigurationError, MissingParameterError
from .formatters import ErrorFormatter, default_formatter, pretty_formatter
from .models import Invalid, Parameter, ParameterDescriptor, ParameterState, Valid

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)

RawValues = Sequence[str] | str | None


@dataclass(frozen=True)
class Rejected:
    message: str
    cause: Exception


def _as_values(raw: RawValues) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (raw,)
    return tuple(raw)


def _attempt(converter: Callable[[str], Any], raw: str) -> Valid | Rejected:
    try:
        return Valid(converter(raw))
    except Exception as exc:
        return Rejected(str(exc) or f"Could not convert the value {raw}: {type(exc).__name__}", exc)


class ValidationSession(Generic[E]):
    """Collects parameter declarations and validates one input batch.

    Every failure found by :meth:`check` is reported together in a single
    exception built by the session's formatter.
    """

    def __init__(self, formatter: ErrorFormatter[E]) -> None:
        if not callable(formatter):
            raise ConfigurationError("The error formatter must be callable")
        self._formatter = formatter
        self._parameters: dict[str, ParameterDescriptor] = {}
        self._checks = 0

    def __len__(self) -> int:
        return len(self._parameters)

    def __contains__(self, name: object) -> bool:
        return name in self._parameters

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._parameters)

    def add_required(self, name: str, converter: Converter[T]) -> Parameter[T]:
        return self._register(name, converter, required=True)

    def add_optional(self, name: str, converter: Converter[T]) -> Parameter[Optional[T]]:
        return self._register(name, converter, required=False)

    def _register(self, name: str, converter: Converter[Any], required: bool) -> Parameter[Any]:
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Parameter names must be non-empty strings, got {name!r}")
        if not callable(converter):
            raise ConfigurationError(f"The converter for parameter {name} must be callable")
        if name in self._parameters:
            raise ConfigurationError(f"A parameter named {name} has already been registered.")

        handle: Parameter[Any] = Parameter(name, required)
        self._parameters[name] = ParameterDescriptor(
            name=name,
            converter=converter,
            required=required,
            handle=handle,
        )
        logger.debug("Registered %s parameter %s", "required" if required else "optional", name)
        return handle

    def check(self, parameters: Mapping[str, RawValues]) -> None:
        """Validate ``parameters`` against every registered declaration.

        Returns normally when every parameter converted; otherwise raises the
        formatter's exception, chained to an ``ExceptionGroup`` holding each
        individual failure.
        """
        if parameters is None:
            raise TypeError("parameters must be a mapping, not None")

        self._checks += 1
        if self._checks > 1:
            logger.warning("Validation session checked %d times; earlier results are replaced", self._checks)

        errors: dict[str, str] = {}
        causes: list[Exception] = []
        for descriptor in self._parameters.values():
            state, failures = self._evaluate(descriptor, parameters.get(descriptor.name))
            descriptor.settle(state)
            if isinstance(state, Invalid):
                errors[descriptor.name] = state.message
                causes.extend(failures)

        logger.debug("Checked %d parameters, %d failed", len(self._parameters), len(errors))
        if errors:
            failure = self._formatter(errors)
            raise failure from ExceptionGroup("parameter validation failures", causes)

    def check_single(self, parameters: Mapping[str, str]) -> None:
        """Validate a mapping holding exactly one raw value per name."""
        self.check({name: (value,) for name, value in parameters.items()})

    def check_query(self, query: str) -> None:
        """Validate a URL query string; repeated keys give multiple values."""
        self.check(parse_qs(query.lstrip("?"), keep_blank_values=True))

    @staticmethod
    def _evaluate(descriptor: ParameterDescriptor, raw: RawValues) -> tuple[ParameterState, list[Exception]]:
        values = _as_values(raw)
        if not values:
            if descriptor.required:
                missing = MissingParameterError(descriptor.name)
                return Invalid(str(missing)), [missing]
            return Valid(None), []

        converted: Any = None
        rejected: list[Rejected] = []
        for value in values:
            outcome = _attempt(descriptor.converter, value)
            if isinstance(outcome, Rejected):
                rejected.append(outcome)
            else:
                converted = outcome.value

        if rejected:
            return Invalid(rejected[-1].message), [item.cause for item in rejected]
        return Valid(converted), []


def start() -> ValidationSession[Exception]:
    """Start a session using the pretty formatter and :class:`ParameterValidationError`."""
    return ValidationSession(default_formatter)


def start_with_exceptions(exception_factory: Callable[[str], E]) -> ValidationSession[E]:
    """Start a session raising ``exception_factory(pretty_message)`` on failure."""
    return ValidationSession(pretty_formatter(exception_factory))


def start_with_formatter(formatter: ErrorFormatter[E]) -> ValidationSession[E]:
    return ValidationSession(formatter)
