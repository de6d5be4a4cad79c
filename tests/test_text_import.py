from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from sheetkit.core.workbook import new_workbook
from sheetkit.errors import SheetStateError, WorkbookIOError
from sheetkit.models import ImportOptions
from sheetkit.text_import import import_records, read_records


def test_read_records_splits_on_tabs(write_text: Callable[..., Path]) -> None:
    source = write_text(["Name\tAge", "Alice\t30", 'quote "x"\t1'])
    assert read_records(source, ImportOptions()) == [
        ["Name", "Age"],
        ["Alice", "30"],
        ['quote "x"', "1"],
    ]


def test_read_records_strips_utf8_bom(tmp_path: Path) -> None:
    source = tmp_path / "bom.txt"
    source.write_bytes("\ufeffName\tAge\n".encode())
    assert read_records(source, ImportOptions()) == [["Name", "Age"]]


def test_read_records_missing_file(tmp_path: Path) -> None:
    with pytest.raises(WorkbookIOError, match="Source text not found"):
        read_records(tmp_path / "missing.txt", ImportOptions())


def test_read_records_empty_file(tmp_path: Path) -> None:
    source = tmp_path / "empty.txt"
    source.write_text("", encoding="utf-8")
    with pytest.raises(WorkbookIOError, match="no header line"):
        read_records(source, ImportOptions())


def test_import_records_into_fresh_workbook(tmp_path: Path) -> None:
    workbook = new_workbook()
    summary = import_records(
        workbook,
        "Data",
        [["Name", "Age"], ["Alice", "30"]],
        ImportOptions(),
        out_path=tmp_path / "out.xlsx",
    )
    assert workbook.sheetnames == ["Data"]
    sheet = workbook["Data"]
    assert [[c.value for c in row] for row in sheet.iter_rows()] == [
        ["Name", "Age"],
        ["Alice", "30"],
    ]
    assert summary.rows == 2
    assert summary.columns == 2
    assert summary.header_width == 2
    assert summary.removed_placeholder is True
    assert summary.replaced_existing is False
    assert workbook.active is sheet
    assert sheet.freeze_panes == "G2"
    assert sheet.sheet_view.selection[-1].activeCell == "C2"


def test_import_records_reuses_existing_sheet_case_insensitively(
    tmp_path: Path,
) -> None:
    workbook = new_workbook()
    old = workbook.create_sheet("Data")
    for row in (["a", "b", "c"], ["1", "2", "3"], ["4", "5", "6"]):
        old.append(row)
    summary = import_records(
        workbook, "DATA", [["x"], ["y"]], ImportOptions(), out_path=tmp_path / "o.xlsx"
    )
    assert summary.replaced_existing is True
    assert summary.sheet == "Data"
    assert (summary.rows, summary.columns) == (2, 1)
    assert workbook.sheetnames == ["Data"]
    assert old["B1"].value is None


def test_import_records_targeting_sheet1_keeps_it(tmp_path: Path) -> None:
    workbook = new_workbook()
    summary = import_records(
        workbook, "sheet1", [["h"]], ImportOptions(), out_path=tmp_path / "o.xlsx"
    )
    assert workbook.sheetnames == ["Sheet1"]
    assert summary.removed_placeholder is False


def test_import_records_keeps_populated_sheet1(tmp_path: Path) -> None:
    workbook = new_workbook()
    workbook["Sheet1"]["A1"] = "keep me"
    summary = import_records(
        workbook, "Data", [["h"]], ImportOptions(), out_path=tmp_path / "o.xlsx"
    )
    assert workbook.sheetnames == ["Sheet1", "Data"]
    assert summary.removed_placeholder is False


def test_import_records_truncates_wide_rows(tmp_path: Path) -> None:
    workbook = new_workbook()
    summary = import_records(
        workbook,
        "Data",
        [["a", "b"], ["1", "2", "3"], ["4"]],
        ImportOptions(),
        out_path=tmp_path / "o.xlsx",
    )
    assert summary.columns == 2
    assert workbook["Data"]["C2"].value is None
    assert workbook["Data"]["B3"].value is None
    assert summary.warnings == [
        "1 row(s) wider than the header were truncated to 2 column(s); first at row 2."
    ]


def test_import_records_keep_policy_writes_extra_fields(tmp_path: Path) -> None:
    workbook = new_workbook()
    summary = import_records(
        workbook,
        "Data",
        [["a", "b"], ["1", "2", "3"]],
        ImportOptions(ragged_rows="keep"),
        out_path=tmp_path / "o.xlsx",
    )
    assert summary.columns == 3
    assert summary.header_width == 2
    assert workbook["Data"]["C1"].fill.fill_type is None
    assert summary.warnings == []


def test_import_records_error_policy(tmp_path: Path) -> None:
    with pytest.raises(SheetStateError, match="Row 2 has more fields"):
        import_records(
            new_workbook(),
            "Data",
            [["a"], ["1", "2"]],
            ImportOptions(ragged_rows="error"),
            out_path=tmp_path / "o.xlsx",
        )


def test_import_records_convert_numbers(tmp_path: Path) -> None:
    workbook = new_workbook()
    import_records(
        workbook,
        "Data",
        [["i", "f", "s", "n"], ["30", "2.5", "x1", "nan"]],
        ImportOptions(convert_numbers=True),
        out_path=tmp_path / "o.xlsx",
    )
    sheet = workbook["Data"]
    assert [sheet[c].value for c in ("A2", "B2", "C2", "D2")] == [30, 2.5, "x1", "nan"]
