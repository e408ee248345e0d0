"""Declarative, batched validation of raw string parameters."""
from param_checker.application.use_cases import BatchValidationContext, ValidateBatchesUseCase
from param_checker.domain.errors import (
    ConfigurationError,
    ConversionError,
    MissingParameterError,
    ParameterStateError,
    ParameterValidationError,
)
from param_checker.domain.formatters import pretty_formatter
from param_checker.domain.models import Parameter
from param_checker.domain.schema import Schema
from param_checker.domain.services import (
    ValidationSession,
    start,
    start_with_exceptions,
    start_with_formatter,
)
from param_checker.infrastructure.repositories.tabular_repositories import TabularInputRepository

__all__ = [
    "BatchValidationContext",
    "ValidateBatchesUseCase",
    "ConfigurationError",
    "ConversionError",
    "MissingParameterError",
    "ParameterStateError",
    "ParameterValidationError",
    "pretty_formatter",
    "Parameter",
    "Schema",
    "ValidationSession",
    "start",
    "start_with_exceptions",
    "start_with_formatter",
    "TabularInputRepository",
]
