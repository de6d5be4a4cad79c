from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from openpyxl import Workbook
import pytest

WriteText = Callable[..., Path]
MakeWorkbook = Callable[..., Path]


@pytest.fixture
def write_text(tmp_path: Path) -> WriteText:
    """Return a helper that writes tab-delimited lines to a file in tmp_path."""

    def _write(lines: list[str], name: str = "source.txt") -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_workbook(tmp_path: Path) -> MakeWorkbook:
    """Return a helper that saves a workbook with the given sheets and rows.

    Sheets are given as ``{title: [[row values], ...]}`` in workbook order.
    """

    def _make(
        sheets: dict[str, list[list[object]]], name: str = "book.xlsx"
    ) -> Path:
        workbook = Workbook()
        default = workbook.active
        assert default is not None
        workbook.remove(default)
        for title, rows in sheets.items():
            sheet = workbook.create_sheet(title=title)
            for row in rows:
                sheet.append(row)
        path = tmp_path / name
        workbook.save(path)
        workbook.close()
        return path

    return _make
