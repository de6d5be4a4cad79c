from __future__ import annotations

import argparse
from collections.abc import Callable
import logging
from pathlib import Path
import sys
from typing import Any

from pydantic import BaseModel, Field

from sheetkit import service
from sheetkit.models import ImportOptions, OperationResult, SearchRequest


class CliConfig(BaseModel):
    """Process-level settings for the command-line host."""

    log_level: str = Field(default="WARNING", description="Logging level.")
    log_file: Path | None = Field(default=None, description="Optional log file path.")


def main(argv: list[str] | None = None) -> int:
    """Run the command-line entrypoint.

    Args:
        argv: Optional CLI arguments for testing.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = CliConfig(log_level=args.log_level, log_file=args.log_file)
    _configure_logging(config)
    result = _dispatch(args)
    sys.stdout.write(result.model_dump_json(indent=2) + "\n")
    return 0 if result.ok else 1


def _dispatch(args: argparse.Namespace) -> OperationResult[Any]:
    handlers: dict[str, Callable[[], OperationResult[Any]]] = {
        "create": lambda: service.create_new_file(args.workbook, args.sheet),
        "add-sheet": lambda: service.add_sheet(args.workbook, args.sheet),
        "remove-sheet": lambda: service.remove_sheet(args.workbook, args.sheet),
        "sheets": lambda: service.sheet_names(args.workbook),
        "exists": lambda: service.sheet_exists(args.workbook, args.sheet),
        "set-cell": lambda: service.set_cell_value(
            args.workbook, args.sheet, args.cell, args.value
        ),
        "find": lambda: service.find_text(
            SearchRequest(
                path=args.workbook,
                sheet=args.sheet,
                token=args.token,
                case_sensitive=not args.ignore_case,
                match="contains" if args.contains else "exact",
            )
        ),
        "extent": lambda: service.last_row_column(args.workbook, args.sheet),
        "columns": lambda: service.used_columns(args.workbook, args.sheet),
        "read-column": lambda: service.read_column(
            args.workbook, args.sheet, args.column
        ),
        "import": lambda: service.import_tab_delimited(
            args.source,
            args.workbook,
            args.sheet,
            ImportOptions(
                ragged_rows=args.ragged_rows,
                convert_numbers=args.convert_numbers,
                encoding=args.encoding,
            ),
        ),
    }
    return handlers[args.command]()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sheetkit", description="Sheet and cell utilities for .xlsx workbooks."
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level.",
    )
    parser.add_argument("--log-file", type=Path, help="Optional log file path.")
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create", help="Create a new workbook.")
    create.add_argument("workbook", type=Path)
    create.add_argument("--sheet", help="Rename the default Sheet1.")

    for name, help_text in (
        ("add-sheet", "Add a sheet if missing."),
        ("remove-sheet", "Remove a sheet if present."),
        ("exists", "Check whether a sheet exists."),
        ("extent", "Show the last used row and column."),
        ("columns", "List used column letters."),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("workbook", type=Path)
        sub.add_argument("sheet")

    sheets = commands.add_parser("sheets", help="List sheet names.")
    sheets.add_argument("workbook", type=Path)

    set_cell = commands.add_parser("set-cell", help="Write one cell value.")
    set_cell.add_argument("workbook", type=Path)
    set_cell.add_argument("sheet")
    set_cell.add_argument("cell")
    set_cell.add_argument("value")

    find = commands.add_parser("find", help="Find cells matching text.")
    find.add_argument("workbook", type=Path)
    find.add_argument("sheet")
    find.add_argument("token")
    find.add_argument("--ignore-case", action="store_true")
    find.add_argument("--contains", action="store_true", help="Substring match.")

    read_column = commands.add_parser("read-column", help="Print one column.")
    read_column.add_argument("workbook", type=Path)
    read_column.add_argument("sheet")
    read_column.add_argument("column", nargs="?", default="A")

    import_ = commands.add_parser("import", help="Import a tab-delimited file.")
    import_.add_argument("source", type=Path)
    import_.add_argument("workbook", type=Path)
    import_.add_argument("sheet")
    import_.add_argument(
        "--ragged-rows",
        choices=["truncate", "keep", "error"],
        default="truncate",
        help="Policy for rows wider than the header.",
    )
    import_.add_argument("--convert-numbers", action="store_true")
    import_.add_argument("--encoding", default="utf-8-sig")
    return parser


def _configure_logging(config: CliConfig) -> None:
    """Configure logging for the CLI process.

    Args:
        config: CLI configuration.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_file is not None:
        handlers.append(logging.FileHandler(config.log_file))
    logging.basicConfig(
        level=config.log_level.upper(),
        handlers=handlers,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
