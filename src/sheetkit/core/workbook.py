from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging
from pathlib import Path
import warnings

from openpyxl import Workbook, load_workbook

from sheetkit.errors import WorkbookIOError
from sheetkit.shared.output_path import (
    build_temp_path,
    ensure_creatable_extension,
    ensure_output_dir,
    ensure_supported_extension,
    replace_atomically,
)

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "Sheet1"


def new_workbook() -> Workbook:
    """Create an in-memory workbook holding the ``Sheet1`` placeholder."""
    workbook = Workbook()
    active_sheet = workbook.active
    if active_sheet is None:
        raise RuntimeError("Failed to create default worksheet.")
    active_sheet.title = DEFAULT_SHEET_NAME
    return workbook


def _load(file_path: Path, *, data_only: bool) -> Workbook:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message="Unknown extension is not supported and will be removed",
            category=UserWarning,
            module="openpyxl",
        )
        warnings.filterwarnings(
            "ignore",
            message="Conditional Formatting extension is not supported and will be removed",
            category=UserWarning,
            module="openpyxl",
        )
        return load_workbook(
            file_path,
            data_only=data_only,
            keep_vba=file_path.suffix.lower() == ".xlsm",
        )


@contextmanager
def openpyxl_workbook(
    file_path: Path, *, data_only: bool = False, create: bool = False
) -> Iterator[Workbook]:
    """Open (or create) an openpyxl workbook and ensure it is closed.

    Args:
        file_path: Workbook path.
        data_only: Whether to read cached formula results instead of formulas.
            Only use for read operations; saving drops the formulas.
        create: Start from :func:`new_workbook` when the file does not exist.

    Yields:
        openpyxl workbook instance.

    Raises:
        WorkbookIOError: If the file is missing and ``create`` is False, or
            its extension is not supported, or a new .xlsm would be created.
    """
    ensure_supported_extension(file_path)
    if file_path.exists():
        logger.debug("Loading workbook %s", file_path)
        wb = _load(file_path, data_only=data_only)
    elif create:
        ensure_creatable_extension(file_path)
        logger.debug("Creating workbook for %s", file_path)
        wb = new_workbook()
    else:
        raise WorkbookIOError(f"Workbook not found: {file_path}")
    try:
        yield wb
    finally:
        wb.close()


def save_workbook(workbook: Workbook, output_path: Path) -> None:
    """Persist a workbook in one step.

    The workbook is written to a sibling staging file first and then moved
    over ``output_path``, so a failed save leaves the previous file intact.
    """
    ensure_supported_extension(output_path)
    ensure_output_dir(output_path)
    staged = build_temp_path(output_path)
    try:
        workbook.save(staged)
        replace_atomically(staged, output_path)
    finally:
        if staged.exists():
            staged.unlink()
    logger.debug("Saved workbook %s", output_path)
