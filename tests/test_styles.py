from __future__ import annotations

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from sheetkit.models import HeaderStyle
from sheetkit.styles import (
    apply_header_style,
    auto_fit_columns,
    freeze_panes,
    set_active_cell,
)


def _sheet() -> Worksheet:
    sheet = Workbook().active
    assert sheet is not None
    return sheet


def test_apply_header_style_only_touches_first_row() -> None:
    sheet = _sheet()
    sheet.append(["Name", "Age", "City"])
    sheet.append(["Alice", "30", "Oslo"])
    apply_header_style(sheet, 2, HeaderStyle())
    for coord in ("A1", "B1"):
        assert sheet[coord].font.b is True
        assert sheet[coord].font.color.rgb == "FFFFFFFF"
        assert sheet[coord].fill.fill_type == "lightGray"
        assert sheet[coord].fill.fgColor.theme == 4
        assert sheet[coord].fill.bgColor.theme == 8
    assert sheet["C1"].font.b is False
    assert sheet["A2"].font.b is False
    assert sheet["A2"].fill.fill_type is None


def test_auto_fit_columns_uses_longest_text() -> None:
    sheet = _sheet()
    sheet.append(["id", "description"])
    sheet.append([1, "a much longer value"])
    applied = auto_fit_columns(sheet, range(1, 4))
    assert applied == {"A": 4.0, "B": 21.0, "C": 8.43}
    assert sheet.column_dimensions["B"].width == 21.0


def test_auto_fit_columns_clamps_width() -> None:
    sheet = _sheet()
    sheet.append(["x", "y" * 80])
    applied = auto_fit_columns(sheet, range(1, 3), min_width=6, max_width=40)
    assert applied == {"A": 6.0, "B": 40.0}


def test_freeze_panes_and_active_cell() -> None:
    sheet = _sheet()
    assert freeze_panes(sheet, 1, 6) == "G2"
    assert sheet.freeze_panes == "G2"
    assert set_active_cell(sheet, "c2") == "C2"
    selection = sheet.sheet_view.selection[-1]
    assert selection.pane == "bottomRight"
    assert selection.activeCell == "C2"


def test_freeze_panes_twice_does_not_stack_selections() -> None:
    sheet = _sheet()
    freeze_panes(sheet, 1, 6)
    freeze_panes(sheet, 1, 6)
    assert len(sheet.sheet_view.selection) == 3


def test_freeze_panes_zero_unfreezes() -> None:
    sheet = _sheet()
    freeze_panes(sheet, 1, 0)
    assert freeze_panes(sheet, 0, 0) is None
    assert sheet.freeze_panes is None
