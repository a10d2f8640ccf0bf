"""
SPREADSHEET EXTRACTION
----------------------
Turns the first sheet of an upload into a partial raw record.

Uploaded sheets arrive in two shapes, so the extractor reads them twice:

1. Row-as-record: row 1 holds headers, the following rows hold one store each.
   The first data row that maps at least one header is used; the rest are ignored.
2. Key/value: column A holds a label, column B its value, one field per row.
   Fields found here only fill gaps; they never overwrite pass 1.

Values are returned untouched; normalization happens in to_canonical.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence

import pandas as pd

from fields.aliases import resolve_field
from input_readers.excel import SpreadsheetError, read_first_sheet

from .to_canonical import normalize

logger = logging.getLogger(__name__)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _is_blank_row(row: Sequence[Any]) -> bool:
    return all(_is_empty(v) for v in row)


def _row_as_record_pass(rows: List[Sequence[Any]]) -> Dict[str, Any]:
    non_blank = [r for r in rows if not _is_blank_row(r)]
    if len(non_blank) < 2:
        return {}

    header_fields = [resolve_field(h) for h in non_blank[0]]

    for row_idx, row in enumerate(non_blank[1:], start=2):
        match: Dict[str, Any] = {}
        for field, value in zip(header_fields, row):
            if field and not _is_empty(value):
                match[field] = value
        if match:
            logger.debug("Row-as-record match on data row %d: %s", row_idx, sorted(match))
            return match
    return {}


def _key_value_pass(rows: List[Sequence[Any]], found: Dict[str, Any]) -> Dict[str, Any]:
    extra: Dict[str, Any] = {}
    for row in rows:
        if len(row) < 2:
            continue
        field = resolve_field(row[0])
        value = row[1]
        if field and not _is_empty(value) and field not in found and field not in extra:
            extra[field] = value
    return extra


def extract_sheet_fields(rows: List[Sequence[Any]]) -> Dict[str, Any]:
    """Run both passes over a cell matrix and return the merged partial raw record."""
    mapped = dict(_row_as_record_pass(rows))
    mapped.update(_key_value_pass(rows, mapped))
    return mapped


def spreadsheet_to_patch(data: bytes, extension: str) -> Dict[str, Any]:
    """
    Read an uploaded spreadsheet and return a normalized patch.

    Raises:
        SpreadsheetError: if the file has no sheets, cannot be read, or no
            column maps to a report field
    """
    rows = read_first_sheet(data, extension)
    raw = extract_sheet_fields(rows)
    patch = normalize(raw)
    if not patch:
        raise SpreadsheetError("Could not map spreadsheet columns to report fields.")

    logger.info("Mapped %d spreadsheet field(s): %s", len(patch), sorted(patch))
    return patch
