from pathlib import Path
from typing import Sequence

import pandas as pd

from param_checker.application.use_cases import BatchValidationContext, ValidateBatchesUseCase, validate_batch
from param_checker.domain.models import InputBatch
from param_checker.domain.schema import Schema
from param_checker.infrastructure.repositories.tabular_repositories import TabularInputRepository
from param_checker.presentation.error_report import failures_to_rows


class InMemoryRepository:
    def __init__(self, batches: Sequence[InputBatch]) -> None:
        self._batches = batches

    def list_batches(self) -> Sequence[InputBatch]:
        return self._batches


def make_batch(batch_id: str, **values: str) -> InputBatch:
    return InputBatch(
        batch_id=batch_id,
        values={name: (value,) for name, value in values.items()},
        source="test",
    )


def test_validate_batch_success():
    schema = Schema.from_declarations(required=["id:uuid", "count:u32"])
    batch = make_batch("b1", id="98da4b91-76b7-42ef-ba03-3bed60fd73db", count="23")

    outcome, missing, conversions = validate_batch(schema, batch)

    assert outcome.passed
    assert outcome.values["count"] == 23
    assert (missing, conversions) == (0, 0)


def test_validate_batch_counts_failure_kinds():
    schema = Schema.from_declarations(required=["id:uuid", "count:u32", "flag:boolean"])
    batch = make_batch("b1", id="nope", count="x")

    outcome, missing, conversions = validate_batch(schema, batch)

    assert not outcome.passed
    assert set(outcome.errors) == {"id", "count", "flag"}
    assert missing == 1
    assert conversions == 2


def test_use_case_summarises_batches():
    schema = Schema.from_declarations(required=["count:u32"], optional=["ratio:double"])
    repository = InMemoryRepository(
        [
            make_batch("b1", count="1", ratio="0.5"),
            make_batch("b2", count="-1"),
            make_batch("b3"),
        ]
    )

    report = ValidateBatchesUseCase(BatchValidationContext(repository=repository, schema=schema)).execute()

    assert report.summary.total_batches == 3
    assert report.summary.passed == 1
    assert report.summary.failed == 2
    assert report.summary.missing_required == 1
    assert report.summary.conversion_failures == 1
    assert report.has_issues()
    assert [outcome.batch.batch_id for outcome in report.iter_failures()] == ["b2", "b3"]


def test_tabular_repository_reads_csv(tmp_path: Path):
    path = tmp_path / "rows.csv"
    path.write_text("id,count,note\nabc,1,\n,2,hello\n", encoding="utf-8")

    batches = TabularInputRepository(path).list_batches()

    assert [batch.batch_id for batch in batches] == ["row-1", "row-2"]
    assert batches[0].values == {"id": ("abc",), "count": ("1",)}
    assert batches[1].values == {"count": ("2",), "note": ("hello",)}
    assert batches[0].source == "rows.csv"


def test_tabular_repository_reads_excel(tmp_path: Path):
    path = tmp_path / "rows.xlsx"
    pd.DataFrame({"count": ["7", "x"], "flag": ["true", ""]}).to_excel(path, index=False, sheet_name="Input")

    schema = Schema.from_declarations(required=["count:u32"], optional=["flag:boolean"])
    repository = TabularInputRepository(path, sheet_name="input")
    report = ValidateBatchesUseCase(BatchValidationContext(repository=repository, schema=schema)).execute()

    passed = list(report.iter_passed())
    assert len(passed) == 1
    assert passed[0].values == {"count": 7, "flag": True}
    assert report.summary.failed == 1


def test_tabular_cells_reach_converters_untrimmed(tmp_path: Path):
    path = tmp_path / "flags.csv"
    path.write_text("flag,name\ntrue, padded \n true,x\n   ,y\n", encoding="utf-8")

    batches = TabularInputRepository(path).list_batches()
    assert batches[0].values == {"flag": ("true",), "name": (" padded ",)}
    assert batches[2].values == {"name": ("y",)}

    schema = Schema.from_declarations(optional=["flag:boolean"])
    report = ValidateBatchesUseCase(
        BatchValidationContext(repository=TabularInputRepository(path), schema=schema)
    ).execute()

    assert [outcome.batch.batch_id for outcome in report.iter_failures()] == ["row-2"]


def test_tabular_lineage_reaches_failure_rows(tmp_path: Path):
    path = tmp_path / "rows.csv"
    path.write_text("count\nx\n", encoding="utf-8")

    schema = Schema.from_declarations(required=["count:u32"])
    report = ValidateBatchesUseCase(
        BatchValidationContext(repository=TabularInputRepository(path), schema=schema)
    ).execute()

    rows = failures_to_rows(report.iter_failures())
    assert rows[0]["lineage"].startswith("sha256=")
    assert len(rows[0]["lineage"]) == len("sha256=") + 12
