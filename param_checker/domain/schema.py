"""Declarative parameter lists built from ``name:type`` strings."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from .conversions import converter_by_name
from .errors import ConfigurationError
from .models import Parameter
from .services import ValidationSession


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    converter_name: str
    required: bool


def parse_declaration(text: str, required: bool) -> ParameterSpec:
    """Parse ``name:type``; the type defaults to ``string`` when omitted."""
    name, _, converter_name = text.partition(":")
    name = name.strip()
    converter_name = converter_name.strip() or "string"
    if not name:
        raise ConfigurationError(f"Missing parameter name in declaration {text!r}")
    converter_by_name(converter_name)
    return ParameterSpec(name=name, converter_name=converter_name.lower(), required=required)


@dataclass(frozen=True)
class Schema:
    specs: Sequence[ParameterSpec] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for spec in self.specs:
            if spec.name in seen:
                raise ConfigurationError(f"A parameter named {spec.name} has already been registered.")
            seen.add(spec.name)

    @classmethod
    def from_declarations(cls, required: Iterable[str] = (), optional: Iterable[str] = ()) -> "Schema":
        specs = [parse_declaration(text, required=True) for text in required]
        specs.extend(parse_declaration(text, required=False) for text in optional)
        return cls(specs=tuple(specs))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.specs)

    def register(self, session: ValidationSession[Any]) -> dict[str, Parameter[Any]]:
        handles: dict[str, Parameter[Any]] = {}
        for spec in self.specs:
            converter = converter_by_name(spec.converter_name)
            if spec.required:
                handles[spec.name] = session.add_required(spec.name, converter)
            else:
                handles[spec.name] = session.add_optional(spec.name, converter)
        return handles
