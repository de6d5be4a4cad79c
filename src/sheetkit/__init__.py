"""Sheet, cell and tab-delimited import utilities for .xlsx workbooks."""

from __future__ import annotations

from .errors import SheetkitError, SheetNotFoundError, SheetStateError, WorkbookIOError
from .models import (
    FoundItem,
    HeaderStyle,
    ImportOptions,
    ImportSummary,
    OperationError,
    OperationResult,
    SearchRequest,
    SheetExtent,
)
from .service import (
    add_sheet,
    create_new_file,
    find_text,
    import_tab_delimited,
    last_row,
    last_row_column,
    read_column,
    remove_sheet,
    set_cell_value,
    sheet_exists,
    sheet_names,
    used_columns,
)

__all__ = [
    "FoundItem",
    "HeaderStyle",
    "ImportOptions",
    "ImportSummary",
    "OperationError",
    "OperationResult",
    "SearchRequest",
    "SheetExtent",
    "SheetNotFoundError",
    "SheetStateError",
    "SheetkitError",
    "WorkbookIOError",
    "add_sheet",
    "create_new_file",
    "find_text",
    "import_tab_delimited",
    "last_row",
    "last_row_column",
    "read_column",
    "remove_sheet",
    "set_cell_value",
    "sheet_exists",
    "sheet_names",
    "used_columns",
]
