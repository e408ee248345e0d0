"""Streamlit front-end for spreadsheet parameter validation."""
from __future__ import annotations

import pandas as pd
import streamlit as st

from param_checker import (
    BatchValidationContext,
    ConfigurationError,
    Schema,
    TabularInputRepository,
    ValidateBatchesUseCase,
)
from param_checker.domain.conversions import CONVERTERS
from param_checker.domain.results import BatchReport
from param_checker.presentation.error_report import failures_to_rows, render_csv, render_html


st.set_page_config(page_title="Parameter Checker", layout="wide")
st.title("Parameter Validation Tool")


def declarations_from_text(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def passed_to_dataframe(report: BatchReport) -> pd.DataFrame:
    return pd.DataFrame(
        [{"batch_id": outcome.batch.batch_id, **outcome.values} for outcome in report.iter_passed()]
    )


def run_validation(data: bytes, file_name: str, schema: Schema, sheet_name: str | None) -> BatchReport:
    context = BatchValidationContext(
        repository=TabularInputRepository(data, name=file_name, sheet_name=sheet_name),
        schema=schema,
    )
    return ValidateBatchesUseCase(context).execute()


if "view" not in st.session_state:
    st.session_state["view"] = "declare"
if "result" not in st.session_state:
    st.session_state["result"] = None


if st.session_state["view"] == "declare":
    upload = st.file_uploader("Upload rows to validate", type=["csv", "xlsx", "xlsm"])
    sheet_name = st.text_input("Sheet name (Excel only, blank for the first sheet)") or None

    st.caption("One declaration per line as name:type. Types: " + ", ".join(sorted(CONVERTERS)))
    col1, col2 = st.columns(2)
    with col1:
        required_text = st.text_area("Required parameters", key="required_declarations")
    with col2:
        optional_text = st.text_area("Optional parameters", key="optional_declarations")

    run_btn = st.button("Run Validation", disabled=upload is None)
    if run_btn and upload is not None:
        try:
            schema = Schema.from_declarations(
                required=declarations_from_text(required_text),
                optional=declarations_from_text(optional_text),
            )
        except ConfigurationError as exc:
            st.error(str(exc))
        else:
            with st.spinner("Validating..."):
                report = run_validation(upload.read(), upload.name, schema, sheet_name)
            st.session_state["result"] = {
                "report": report,
                "failures_csv": render_csv(report),
                "failures_html": render_html(report),
            }
            st.session_state["view"] = "results"
            st.rerun()
else:
    back_clicked = st.button("← Back", key="back_to_declare")
    if back_clicked:
        st.session_state["view"] = "declare"
        st.session_state["result"] = None
        st.rerun()

    result = st.session_state.get("result")
    if not result:
        st.info("No results available. Upload a file and run validation first.")
    else:
        report: BatchReport = result["report"]

        st.subheader("Summary")
        summary = report.summary
        st.metric("Rows", summary.total_batches)
        st.metric("Passed", summary.passed)
        st.metric("Failed", summary.failed)
        st.metric("Missing required values", summary.missing_required)
        st.metric("Conversion failures", summary.conversion_failures)

        tabs = st.tabs(["Failures", "Validated rows"])
        with tabs[0]:
            st.dataframe(pd.DataFrame(failures_to_rows(report.iter_failures())))
            st.download_button(
                "Download failures CSV",
                data=result["failures_csv"],
                file_name="parameter_failures.csv",
                mime="text/csv",
            )
            st.download_button(
                "Download failures HTML",
                data=result["failures_html"].encode("utf-8"),
                file_name="parameter_failures.html",
                mime="text/html",
            )
        with tabs[1]:
            st.dataframe(passed_to_dataframe(report))
