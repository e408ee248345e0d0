"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import InputBatch


class InputBatchRepository(Protocol):
    """Provides raw input batches awaiting validation."""

    def list_batches(self) -> Sequence[InputBatch]:
        ...
