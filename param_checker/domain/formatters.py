"""Error formatters turning collected failures into one exception."""
from __future__ import annotations

from typing import Callable, Mapping, TypeVar

from param_checker.config import SETTINGS

from .errors import ParameterValidationError

E = TypeVar("E", bound=BaseException)

ErrorFormatter = Callable[[Mapping[str, str]], E]


def render_message(errors: Mapping[str, str], separator: str | None = None) -> str:
    """Banner line followed by one ``name: message`` line per failure."""
    separator = SETTINGS.line_separator if separator is None else separator
    lines = [SETTINGS.banner]
    lines.extend(f"{name}: {message}" for name, message in errors.items())
    return "".join(line + separator for line in lines)


def pretty_formatter(exception_factory: Callable[[str], E]) -> ErrorFormatter[E]:
    def format_errors(errors: Mapping[str, str]) -> E:
        return exception_factory(render_message(errors))

    return format_errors


def default_formatter(errors: Mapping[str, str]) -> ParameterValidationError:
    return ParameterValidationError(render_message(errors), errors)
