"""Tests for the two-pass spreadsheet extractor and the sheet readers."""

import io

import pandas as pd
import pytest
from openpyxl import Workbook

from config import MAX_SHEET_COLS

from extraction.spreadsheet import extract_sheet_fields, spreadsheet_to_patch
from input_readers.excel import SpreadsheetError, read_first_sheet

from tests.fakes import build_xlsx


def test_row_as_record_scenario():
    rows = [["Store Name", "Total Revenue"], ["Acme", "$10,000"]]
    raw = extract_sheet_fields(rows)
    assert raw == {"store_name": "Acme", "total_revenue": "$10,000"}


def test_first_matching_data_row_wins():
    rows = [
        ["Store", "Cart Revenue"],
        ["", ""],
        ["First", "10"],
        ["Second", "20"],
    ]
    assert extract_sheet_fields(rows) == {"store_name": "First", "cart_rev": "10"}


def test_empty_cells_are_skipped_in_row_pass():
    rows = [["Store", "Checkout", "Notes"], ["Acme", "", "whatever"]]
    assert extract_sheet_fields(rows) == {"store_name": "Acme"}


def test_key_value_sheet():
    rows = [
        ["Metric", "Value"],
        ["Store name", "Acme"],
        ["Revenue", "1,200"],
        ["Funnel coverage", "55%"],
        ["Unrelated", "x"],
    ]
    raw = extract_sheet_fields(rows)
    assert raw["store_name"] == "Acme"
    assert raw["total_revenue"] == "1,200"
    assert raw["funnel_coverage"] == "55%"


def test_key_value_pass_never_overwrites_row_pass():
    rows = [
        ["Store Name", "Total Revenue"],
        ["Acme", "500"],
        ["Total Revenue", "999"],
        ["Cart", "12"],
    ]
    raw = extract_sheet_fields(rows)
    assert raw["total_revenue"] == "500"
    assert raw["cart_rev"] == "12"


def test_key_value_first_occurrence_wins():
    rows = [["Metric", "Value"], ["Cart", "1"], ["Cart revenue", "2"]]
    assert extract_sheet_fields(rows)["cart_rev"] == "1"


def test_single_column_sheet_skips_key_value_pass():
    assert extract_sheet_fields([["Store"], ["Acme"]]) == {"store_name": "Acme"}
    assert extract_sheet_fields([["Store"]]) == {}


def test_spreadsheet_to_patch_normalizes_xlsx():
    data = build_xlsx([["Store Name", "Total Revenue", "Revenue Coverage"], ["Acme", 10000, 140]])
    assert spreadsheet_to_patch(data, ".xlsx") == {
        "store_name": "Acme",
        "total_revenue": 10000,
        "revenue_coverage": 100,
    }


def test_spreadsheet_to_patch_reads_csv():
    data = b"label,value\nStore,Corner Shop\nPost-Purchase,\"$5,145.00\"\n"
    patch = spreadsheet_to_patch(data, ".csv")
    assert patch == {"store_name": "Corner Shop", "post_purchase_rev": 5145.0}


def test_unmappable_sheet_is_terminal():
    data = build_xlsx([["Foo", "Bar"], ["1", "2"]])
    with pytest.raises(SpreadsheetError, match="Could not map spreadsheet columns"):
        spreadsheet_to_patch(data, ".xlsx")


def test_empty_csv_is_unmappable():
    with pytest.raises(SpreadsheetError, match="Could not map"):
        spreadsheet_to_patch(b"", ".csv")


def test_corrupt_xlsx_raises():
    with pytest.raises(SpreadsheetError, match="Cannot read Excel file"):
        read_first_sheet(b"not a workbook", ".xlsx")


def test_read_first_sheet_trims_trailing_empty_columns():
    data = build_xlsx([["Store", "Acme", None, None], ["Cart", 5]])
    assert read_first_sheet(data, ".xlsx") == [["Store", "Acme"], ["Cart", 5]]


def _percent_workbook() -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.append(["Store Name", "Revenue Coverage"])
    ws.append(["Acme", 0.55])
    ws["B2"].number_format = "0%"
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def test_percent_formatted_cell_reads_as_displayed():
    data = _percent_workbook()
    assert read_first_sheet(data, ".xlsx") == [["Store Name", "Revenue Coverage"], ["Acme", "55%"]]
    assert spreadsheet_to_patch(data, ".xlsx") == {"store_name": "Acme", "revenue_coverage": 55}


def test_wide_csv_keeps_leading_columns():
    header = ["Metric", "Value"] + [f"c{n}" for n in range(101)]
    row = ["Cart", "42"] + [""] * 101
    data = (",".join(header) + "\n" + ",".join(row) + "\n").encode()

    rows = read_first_sheet(data, ".csv")
    assert rows[0][:2] == ["Metric", "Value"]
    assert rows[1][:2] == ["Cart", "42"]
    assert all(len(r) == MAX_SHEET_COLS for r in rows)
    assert spreadsheet_to_patch(data, ".csv") == {"cart_rev": 42}


class TestLegacyXls:
    def test_first_sheet_is_read_through_xlrd(self, monkeypatch):
        calls = []

        def fake_read_excel(source, **kwargs):
            calls.append(kwargs)
            return {
                "Summary": pd.DataFrame([["Metric", "Value"], ["Store", "Acme"], ["Cart", 5], [None, None]]),
                "Other": pd.DataFrame([["Store", "Ignored"]]),
            }

        monkeypatch.setattr(pd, "read_excel", fake_read_excel)

        rows = read_first_sheet(b"legacy", ".xls")
        assert rows == [["Metric", "Value"], ["Store", "Acme"], ["Cart", 5], [None, None]]
        assert calls[0]["engine"] == "xlrd"
        assert calls[0]["header"] is None
        assert spreadsheet_to_patch(b"legacy", ".xls") == {"store_name": "Acme", "cart_rev": 5}

    def test_workbook_without_sheets(self, monkeypatch):
        monkeypatch.setattr(pd, "read_excel", lambda source, **kwargs: {})
        with pytest.raises(SpreadsheetError, match="The spreadsheet has no sheets."):
            read_first_sheet(b"legacy", ".xls")

    def test_unreadable_xls(self):
        with pytest.raises(SpreadsheetError, match="Cannot read Excel file"):
            read_first_sheet(b"not a workbook", ".xls")
