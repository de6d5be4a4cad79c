from __future__ import annotations

from datetime import date, datetime
from typing import Literal, TypeAlias

ErrorKind = Literal["io_error", "state_error", "library_error"]
OperationName = Literal[
    "create_new_file",
    "add_sheet",
    "remove_sheet",
    "sheet_names",
    "sheet_exists",
    "set_cell_value",
    "find_text",
    "last_row",
    "last_row_column",
    "used_columns",
    "read_column",
    "import_tab_delimited",
]
MatchMode = Literal["exact", "contains"]
RaggedRowPolicy = Literal["truncate", "keep", "error"]

CellValue: TypeAlias = str | int | float | bool | date | datetime | None
