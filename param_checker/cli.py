"""Command-line entrypoint for validating spreadsheet rows."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from param_checker.application.use_cases import BatchValidationContext, ValidateBatchesUseCase
from param_checker.domain.conversions import CONVERTERS
from param_checker.domain.errors import ConfigurationError
from param_checker.domain.schema import Schema
from param_checker.infrastructure.repositories.tabular_repositories import TabularInputRepository
from param_checker.presentation.error_report import render_csv

logger = logging.getLogger(__name__)


def parse_args(argv: list[str]) -> argparse.Namespace:
    types = ", ".join(sorted(CONVERTERS))
    parser = argparse.ArgumentParser(description="Validate every row of a CSV or Excel file as one parameter batch")
    parser.add_argument("source", type=str, help="Path to a CSV, .xlsx or .xlsm file")
    parser.add_argument(
        "--required",
        action="append",
        default=[],
        metavar="NAME:TYPE",
        help=f"Declare a required column (types: {types})",
    )
    parser.add_argument(
        "--optional",
        action="append",
        default=[],
        metavar="NAME:TYPE",
        help="Declare an optional column",
    )
    parser.add_argument("--sheet", type=str, help="Excel sheet name (defaults to the first sheet)")
    parser.add_argument("--csv-out", type=Path, help="Write failures as CSV to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        schema = Schema.from_declarations(required=args.required, optional=args.optional)
    except ConfigurationError as exc:
        print(f"Invalid declaration: {exc}", file=sys.stderr)
        return 2
    if not schema.specs:
        print("Declare at least one parameter with --required or --optional", file=sys.stderr)
        return 2

    context = BatchValidationContext(
        repository=TabularInputRepository(Path(args.source), sheet_name=args.sheet),
        schema=schema,
    )
    report = ValidateBatchesUseCase(context).execute()

    print("Validation Summary")
    print("==================")
    summary = report.summary
    print(f"Rows: {summary.total_batches}")
    print(f"Passed: {summary.passed}")
    print(f"Failed: {summary.failed}")
    print(f"Missing required values: {summary.missing_required}")
    print(f"Conversion failures: {summary.conversion_failures}")

    if args.csv_out is not None:
        args.csv_out.write_bytes(render_csv(report))
        logger.info("Wrote failure report to %s", args.csv_out)

    if report.has_issues():
        print("\nFailures detected:")
        for outcome in report.iter_failures():
            for name, message in outcome.errors.items():
                print(f"- {outcome.batch.batch_id} {name}: {message}")
        return 1

    print("\nAll rows passed validation.")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
