import csv
import io
from datetime import datetime

from param_checker.domain.models import InputBatch
from param_checker.domain.results import BatchOutcome, BatchReport, BatchSummary
from param_checker.presentation.error_report import failures_to_rows, render_csv, render_html


def make_report(outcomes) -> BatchReport:
    failed = sum(1 for outcome in outcomes if not outcome.passed)
    summary = BatchSummary(
        total_batches=len(outcomes),
        passed=len(outcomes) - failed,
        failed=failed,
        missing_required=0,
        conversion_failures=failed,
        generated_at=datetime.utcnow(),
    )
    return BatchReport(summary=summary, outcomes=tuple(outcomes))


def test_failures_to_rows():
    batch = InputBatch(
        batch_id="row-1",
        values={"count": ("x", "<y>")},
        source="rows.csv",
        lineage="sha256=0123456789ab",
    )
    outcome = BatchOutcome(batch=batch, errors={"count": "Could not parse the value <y> as an integer."})

    rows = failures_to_rows([outcome])

    assert rows == [
        {
            "batch_id": "row-1",
            "source": "rows.csv",
            "lineage": "sha256=0123456789ab",
            "parameter": "count",
            "message": "Could not parse the value <y> as an integer.",
            "raw_value": "x | <y>",
        }
    ]


def test_render_csv_and_html():
    failing = BatchOutcome(
        batch=InputBatch(batch_id="row-2", values={}, source="rows.csv"),
        errors={"id": "The parameter is required but was missing."},
    )
    passing = BatchOutcome(batch=InputBatch(batch_id="row-1", values={}, source="rows.csv"), values={"id": 1})
    report = make_report([passing, failing])

    rows = list(csv.DictReader(io.StringIO(render_csv(report).decode("utf-8"))))
    assert len(rows) == 1
    assert rows[0]["parameter"] == "id"
    assert rows[0]["lineage"] == ""

    html = render_html(report)
    assert "<table>" in html
    assert "row-2" in html


def test_render_html_without_failures():
    report = make_report([])

    assert render_html(report) == "<p>All batches passed validation.</p>"
    assert render_csv(report).decode("utf-8").startswith("batch_id,source,lineage,parameter,message,raw_value")
