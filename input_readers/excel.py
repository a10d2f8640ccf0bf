"""
SPREADSHEET READER
------------------
Reads the first sheet of an uploaded spreadsheet into a raw cell matrix with NO transformation.
Rows are padded to the sheet width; headers are not interpreted here.
Percent-formatted xlsx numbers come back as displayed ("55%"), not as the stored fraction.
"""

from __future__ import annotations

import csv
import io
import itertools
from typing import Any, List

import pandas as pd
from openpyxl import load_workbook

from config import MAX_SHEET_COLS, MAX_SHEET_ROWS


class SpreadsheetError(ValueError):
    """Raised when a spreadsheet cannot be read or mapped to report fields."""
    pass


def _used_width(row: List[Any]) -> int:
    for idx in range(len(row) - 1, -1, -1):
        if row[idx] not in (None, ""):
            return idx + 1
    return 0


def _pad(rows: List[List[Any]]) -> List[List[Any]]:
    """Trim trailing empty columns and pad every row to the used sheet width."""
    width = max((_used_width(r) for r in rows), default=0)
    return [(r + [None] * width)[:width] for r in rows]


def _display_value(cell) -> Any:
    """Percent-formatted numbers are returned as the text the sheet shows ("55%")."""
    value = cell.value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if "%" in (cell.number_format or ""):
            return f"{value * 100:g}%"
    return value


def _read_xlsx(data: bytes) -> List[List[Any]]:
    try:
        wb = load_workbook(io.BytesIO(data), data_only=True)
    except Exception as e:
        raise SpreadsheetError(f"Cannot read Excel file (is it corrupted or wrong format?): {e}")

    try:
        if not wb.worksheets:
            raise SpreadsheetError("The spreadsheet has no sheets.")

        ws = wb.worksheets[0]
        max_row = min(ws.max_row, MAX_SHEET_ROWS)
        max_col = min(ws.max_column, MAX_SHEET_COLS)

        rows: List[List[Any]] = []
        for cells in ws.iter_rows(min_row=1, max_row=max_row, max_col=max_col):
            rows.append([_display_value(c) for c in cells])
    finally:
        wb.close()

    return _pad(rows)


def _frame_to_rows(df: pd.DataFrame) -> List[List[Any]]:
    df = df.iloc[:MAX_SHEET_ROWS, :MAX_SHEET_COLS]
    df = df.astype(object).where(pd.notna(df), None)
    return _pad(df.values.tolist())


def _read_xls(data: bytes) -> List[List[Any]]:
    try:
        sheets = pd.read_excel(io.BytesIO(data), sheet_name=None, header=None, engine="xlrd")
    except Exception as e:
        raise SpreadsheetError(f"Cannot read Excel file (is it corrupted or wrong format?): {e}")

    if not sheets:
        raise SpreadsheetError("The spreadsheet has no sheets.")
    return _frame_to_rows(next(iter(sheets.values())))


def _read_csv(data: bytes) -> List[List[Any]]:
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError:
        text = data.decode("latin-1")

    try:
        reader = csv.reader(io.StringIO(text))
        rows = [list(r[:MAX_SHEET_COLS]) for r in itertools.islice(reader, MAX_SHEET_ROWS)]
    except csv.Error as e:
        raise SpreadsheetError(f"Cannot read CSV file (is it corrupted or wrong format?): {e}")

    return _pad(rows)


def read_first_sheet(data: bytes, extension: str) -> List[List[Any]]:
    """
    Read the first sheet of a spreadsheet.

    Args:
        data: raw file bytes
        extension: ".xlsx", ".xls" or ".csv"

    Returns:
        List of rows, each a list of cell values (None for empty cells)

    Raises:
        SpreadsheetError: if the file has no sheets or cannot be parsed
    """
    readers = {".xlsx": _read_xlsx, ".xls": _read_xls, ".csv": _read_csv}
    reader = readers.get(extension.lower())
    if reader is None:
        raise SpreadsheetError(f"Unsupported spreadsheet extension: {extension}")
    return reader(data)
