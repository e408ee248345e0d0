"""Central configuration for the parameter checker package."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Settings:
    banner: str
    line_separator: str
    missing_message: str
    excel_engine: str
    csv_encoding: str
    excel_suffixes: tuple[str, ...]


SETTINGS = Settings(
    banner="One or more parameters failed validation.",
    line_separator="\n",
    missing_message="The parameter is required but was missing.",
    excel_engine="openpyxl",
    csv_encoding="utf-8",
    excel_suffixes=(".xlsx", ".xlsm"),
)
