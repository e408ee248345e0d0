"""Error types raised and collected by validation sessions."""
from __future__ import annotations

from typing import Mapping

from param_checker.config import SETTINGS


class ConfigurationError(ValueError):
    """A session was declared incorrectly (for example a duplicate name)."""


class ParameterStateError(RuntimeError):
    """A parameter handle was read before its session was checked."""

    def __init__(self, message: str = "Parameters have not yet been validated!") -> None:
        super().__init__(message)


class ConversionError(ValueError):
    """A raw string could not be converted to the requested type."""

    def __init__(self, value: str, target: str, reason: str | None = None) -> None:
        message = f"Could not parse the value {value} as {target}"
        message += f": {reason}" if reason else "."
        super().__init__(message)
        self.value = value
        self.target = target


class MissingParameterError(ValueError):
    """A required parameter was absent from the input batch."""

    def __init__(self, name: str, message: str | None = None) -> None:
        super().__init__(message or SETTINGS.missing_message)
        self.name = name


class ParameterValidationError(Exception):
    """Default aggregate error raised when a check finds problems.

    ``errors`` maps every failing parameter name to its message. The individual
    failures are chained in ``__cause__`` as an ``ExceptionGroup``.
    """

    def __init__(self, message: str, errors: Mapping[str, str] | None = None) -> None:
        super().__init__(message)
        self.errors: dict[str, str] = dict(errors or {})
