"""Spreadsheet-backed repositories for raw input batches."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Sequence

from param_checker.domain.models import InputBatch
from param_checker.domain.repositories import InputBatchRepository
from param_checker.infrastructure.parsing.utils import (
    compute_file_hash,
    ensure_bytes,
    is_excel_name,
    read_table,
    row_to_values,
)


class TabularInputRepository(InputBatchRepository):
    """Yields one batch per row of a CSV file or Excel sheet.

    Column headers are parameter names. Row numbers in batch ids are 1-based
    and count data rows only. Cell text reaches converters untrimmed; cells
    holding only whitespace are treated as absent.
    """

    def __init__(
        self,
        source: BytesIO | Path | bytes | str,
        name: str | None = None,
        sheet_name: str | None = None,
    ) -> None:
        if name is None and isinstance(source, (Path, str)):
            name = Path(source).name
        self._source = ensure_bytes(source)
        self._name = name or "upload"
        self._sheet_name = sheet_name

    def list_batches(self) -> Sequence[InputBatch]:
        frame = read_table(self._source, excel=is_excel_name(self._name), sheet_name=self._sheet_name)
        digest = compute_file_hash(self._source)
        columns = [str(column) for column in frame.columns]
        batches: list[InputBatch] = []
        for position, (_, row) in enumerate(frame.iterrows(), start=1):
            batches.append(
                InputBatch(
                    batch_id=f"row-{position}",
                    values=row_to_values(row, columns),
                    source=self._name,
                    lineage=f"sha256={digest[:12]}",
                )
            )
        return batches
