"""Domain-level results for batch validation."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping, Sequence

from .models import InputBatch


@dataclass(frozen=True)
class BatchOutcome:
    batch: InputBatch
    values: Mapping[str, Any] = field(default_factory=dict)
    errors: Mapping[str, str] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class BatchSummary:
    total_batches: int
    passed: int
    failed: int
    missing_required: int
    conversion_failures: int
    generated_at: datetime


@dataclass(frozen=True)
class BatchReport:
    summary: BatchSummary
    outcomes: Sequence[BatchOutcome] = field(default_factory=tuple)

    def has_issues(self) -> bool:
        return self.summary.failed > 0

    def iter_failures(self) -> Iterable[BatchOutcome]:
        yield from (outcome for outcome in self.outcomes if not outcome.passed)

    def iter_passed(self) -> Iterable[BatchOutcome]:
        yield from (outcome for outcome in self.outcomes if outcome.passed)
