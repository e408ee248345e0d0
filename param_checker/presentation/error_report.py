"""Report generators for failed input batches."""
from __future__ import annotations

import csv
import html
import io
from typing import Iterable

from param_checker.domain.results import BatchOutcome, BatchReport

FIELDNAMES = ["batch_id", "source", "lineage", "parameter", "message", "raw_value"]


def failures_to_rows(outcomes: Iterable[BatchOutcome]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for outcome in outcomes:
        batch = outcome.batch
        for name, message in outcome.errors.items():
            raw = batch.values.get(name, ())
            rows.append(
                {
                    "batch_id": batch.batch_id,
                    "source": batch.source,
                    "lineage": batch.lineage or "",
                    "parameter": name,
                    "message": message,
                    "raw_value": " | ".join(raw),
                }
            )
    return rows


def render_csv(report: BatchReport) -> bytes:
    rows = failures_to_rows(report.iter_failures())
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=FIELDNAMES)
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_html(report: BatchReport) -> str:
    rows = failures_to_rows(report.iter_failures())
    if not rows:
        return "<p>All batches passed validation.</p>"
    header = "".join(f"<th>{col}</th>" for col in FIELDNAMES)
    body_parts = []
    for row in rows:
        body_parts.append("<tr>" + "".join(f"<td>{html.escape(row[col])}</td>" for col in FIELDNAMES) + "</tr>")
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"
