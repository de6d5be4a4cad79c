from __future__ import annotations

import os
from pathlib import Path
from uuid import uuid4

from sheetkit.errors import WorkbookIOError

SUPPORTED_EXTENSIONS = frozenset({".xlsx", ".xlsm"})


def ensure_supported_extension(path: Path) -> None:
    """Reject workbook paths openpyxl cannot write."""
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        allowed = ", ".join(sorted(SUPPORTED_EXTENSIONS))
        raise WorkbookIOError(
            f"Unsupported workbook extension: {path.suffix or '<none>'} "
            f"(expected one of {allowed})."
        )


def ensure_output_dir(path: Path) -> None:
    """Ensure the output directory exists before writing."""
    path.parent.mkdir(parents=True, exist_ok=True)


def build_temp_path(output_path: Path) -> Path:
    """Return a hidden sibling path used to stage a save before replacing."""
    return output_path.with_name(
        f".{output_path.stem}.{uuid4().hex[:8]}.tmp{output_path.suffix}"
    )


def replace_atomically(staged_path: Path, output_path: Path) -> None:
    """Move a fully written staging file over the target path."""
    os.replace(staged_path, output_path)


def ensure_creatable_extension(path: Path) -> None:
    """Reject paths a brand-new openpyxl workbook can not be saved to.

    openpyxl only writes the macro-enabled content type for workbooks loaded
    with ``keep_vba``, so a fresh ``.xlsm`` would not open in Excel.
    """
    ensure_supported_extension(path)
    if path.suffix.lower() == ".xlsm":
        raise WorkbookIOError(
            f"Can not create a new .xlsm workbook: {path}. "
            "Only existing macro-enabled workbooks can be written."
        )
