from __future__ import annotations

from .workbook import DEFAULT_SHEET_NAME, new_workbook, openpyxl_workbook, save_workbook

__all__ = ["DEFAULT_SHEET_NAME", "new_workbook", "openpyxl_workbook", "save_workbook"]
