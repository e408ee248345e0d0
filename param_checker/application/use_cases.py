"""Application services orchestrating batch validation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from param_checker.domain.errors import MissingParameterError, ParameterValidationError
from param_checker.domain.models import InputBatch
from param_checker.domain.repositories import InputBatchRepository
from param_checker.domain.results import BatchOutcome, BatchReport, BatchSummary
from param_checker.domain.schema import Schema
from param_checker.domain.services import start

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BatchValidationContext:
    repository: InputBatchRepository
    schema: Schema


def validate_batch(schema: Schema, batch: InputBatch) -> tuple[BatchOutcome, int, int]:
    """Validate one batch in a fresh session.

    Returns the outcome with the number of missing-parameter and conversion
    failures behind it.
    """
    session = start()
    handles = schema.register(session)
    try:
        session.check(batch.values)
    except ParameterValidationError as exc:
        causes = exc.__cause__.exceptions if isinstance(exc.__cause__, BaseExceptionGroup) else ()
        missing = sum(1 for cause in causes if isinstance(cause, MissingParameterError))
        return BatchOutcome(batch=batch, errors=exc.errors), missing, len(exc.errors) - missing
    values = {name: handle.get() for name, handle in handles.items()}
    return BatchOutcome(batch=batch, values=values), 0, 0


class ValidateBatchesUseCase:
    def __init__(self, context: BatchValidationContext) -> None:
        self._context = context

    def execute(self) -> BatchReport:
        batches = self._context.repository.list_batches()
        logger.info("Validating %d batches against %d parameters", len(batches), len(self._context.schema.specs))
        return self._validate(batches)

    def _validate(self, batches: Sequence[InputBatch]) -> BatchReport:
        outcomes: list[BatchOutcome] = []
        missing_total = 0
        conversion_total = 0
        for batch in batches:
            outcome, missing, conversions = validate_batch(self._context.schema, batch)
            outcomes.append(outcome)
            missing_total += missing
            conversion_total += conversions

        failed = sum(1 for outcome in outcomes if not outcome.passed)
        summary = BatchSummary(
            total_batches=len(outcomes),
            passed=len(outcomes) - failed,
            failed=failed,
            missing_required=missing_total,
            conversion_failures=conversion_total,
            generated_at=datetime.now(timezone.utc),
        )
        logger.info("Validation finished: %d passed, %d failed", summary.passed, summary.failed)
        return BatchReport(summary=summary, outcomes=tuple(outcomes))
