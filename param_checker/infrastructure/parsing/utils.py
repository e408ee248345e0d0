"""Shared parsing utilities for tabular ingestion."""
from __future__ import annotations

import hashlib
from io import BytesIO
from pathlib import Path
from typing import Iterable, Mapping

import pandas as pd

from param_checker.config import SETTINGS


def ensure_bytes(source: BytesIO | Path | bytes | str) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, (Path, str)):
        return Path(source).read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def compute_file_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def is_excel_name(name: str | None) -> bool:
    if not name:
        return False
    return Path(name).suffix.lower() in SETTINGS.excel_suffixes


def _pick_sheet(source: BytesIO, preferred: str | None) -> str | int:
    sheets = pd.ExcelFile(source, engine=SETTINGS.excel_engine).sheet_names
    if not sheets:
        raise ValueError("Workbook has no sheets")
    if preferred is None:
        return sheets[0]
    if preferred in sheets:
        return preferred
    lower_map = {name.lower(): name for name in sheets}
    if preferred.lower() in lower_map:
        return lower_map[preferred.lower()]
    raise ValueError(f"Workbook has no sheet named {preferred!r}; found: {', '.join(sheets)}")


def read_table(data: bytes, excel: bool, sheet_name: str | None = None) -> pd.DataFrame:
    """Read CSV or Excel bytes with every cell kept as its raw string."""
    if excel:
        sheet = _pick_sheet(BytesIO(data), sheet_name)
        frame = pd.read_excel(
            BytesIO(data),
            sheet_name=sheet,
            engine=SETTINGS.excel_engine,
            dtype=str,
            keep_default_na=False,
        )
    else:
        frame = pd.read_csv(
            BytesIO(data),
            dtype=str,
            keep_default_na=False,
            encoding=SETTINGS.csv_encoding,
        )
    frame.columns = [str(column).strip() for column in frame.columns]
    return frame


def row_to_values(row: Mapping[str, object], columns: Iterable[str]) -> dict[str, tuple[str, ...]]:
    """Turn one row into raw input.

    Empty or whitespace-only cells become absent keys; every other cell is
    passed on exactly as read, without trimming.
    """
    values: dict[str, tuple[str, ...]] = {}
    for column in columns:
        cell = row.get(column)
        if cell is None:
            continue
        text = str(cell)
        if not text.strip():
            continue
        values[column] = (text,)
    return values
