"""Standard converters from raw strings to typed values.

Every converter is a plain callable ``str -> T`` that raises
:class:`ConversionError` when the string does not represent a ``T``.
"""
from __future__ import annotations

import re
import uuid
from datetime import datetime
from typing import Callable, TypeVar

from .errors import ConfigurationError, ConversionError

T = TypeVar("T")

Converter = Callable[[str], T]

_SIGNED_PATTERN = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_PATTERN = re.compile(r"\+?[0-9]+")
_DOUBLE_PATTERN = re.compile(r"[+-]?(NaN|Infinity|([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?)")
_TIMESTAMP_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T.+")


def strings(value: str) -> str:
    return value


def booleans(value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise ConversionError(value, "a boolean")


def uuids(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError as exc:
        raise ConversionError(value, "a UUID", str(exc)) from exc


def offset_date_times(value: str) -> datetime:
    """Parse an ISO-8601 timestamp that carries an explicit UTC offset."""
    if _TIMESTAMP_PATTERN.fullmatch(value) is None:
        raise ConversionError(value, "an offset date-time")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise ConversionError(value, "an offset date-time") from exc
    if parsed.tzinfo is None:
        raise ConversionError(value, "an offset date-time", "no UTC offset was given")
    return parsed


def _ranged_integer(pattern: re.Pattern[str], low: int | None, high: int | None, target: str) -> Converter[int]:
    def convert(value: str) -> int:
        if pattern.fullmatch(value) is None:
            raise ConversionError(value, target)
        result = int(value)
        if (low is not None and result < low) or (high is not None and result > high):
            raise ConversionError(value, target)
        return result

    return convert


integer_big = _ranged_integer(_SIGNED_PATTERN, None, None, "an integer")
integer_unsigned = _ranged_integer(_UNSIGNED_PATTERN, 0, 2**32 - 1, "an unsigned 32-bit integer")
integer_unsigned_long = _ranged_integer(_UNSIGNED_PATTERN, 0, 2**64 - 1, "an unsigned 64-bit integer")
integer_signed = _ranged_integer(_SIGNED_PATTERN, -(2**31), 2**31 - 1, "a signed 32-bit integer")
integer_signed_long = _ranged_integer(_SIGNED_PATTERN, -(2**63), 2**63 - 1, "a signed 64-bit integer")


def doubles(value: str) -> float:
    if _DOUBLE_PATTERN.fullmatch(value) is None:
        raise ConversionError(value, "a floating point value")
    try:
        return float(value)
    except ValueError as exc:
        raise ConversionError(value, "a floating point value") from exc


CONVERTERS: dict[str, Converter] = {
    "string": strings,
    "boolean": booleans,
    "uuid": uuids,
    "timestamp": offset_date_times,
    "integer": integer_big,
    "u32": integer_unsigned,
    "u64": integer_unsigned_long,
    "i32": integer_signed,
    "i64": integer_signed_long,
    "double": doubles,
}


def converter_by_name(name: str) -> Converter:
    key = name.strip().lower()
    try:
        return CONVERTERS[key]
    except KeyError:
        known = ", ".join(sorted(CONVERTERS))
        raise ConfigurationError(f"Unknown converter {name!r}; expected one of: {known}") from None
