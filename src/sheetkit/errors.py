"""Exception taxonomy raised below the operation boundary.

Public operations in :mod:`sheetkit.service` never let these escape; they are
mapped onto :class:`sheetkit.models.OperationError` by :func:`classify_error`.
"""

from __future__ import annotations

from sheetkit.types import ErrorKind


class SheetkitError(Exception):
    """Base class for failures raised by sheetkit itself."""

    kind: ErrorKind = "library_error"


class WorkbookIOError(SheetkitError):
    """A workbook or source file is missing, unreadable or empty."""

    kind: ErrorKind = "io_error"


class SheetStateError(SheetkitError):
    """The requested change would violate a workbook invariant."""

    kind: ErrorKind = "state_error"


class SheetNotFoundError(SheetStateError):
    """No sheet matches the requested name."""

    def __init__(self, sheet_name: str) -> None:
        super().__init__(f"Sheet not found: {sheet_name}")
        self.sheet_name = sheet_name


def classify_error(exc: BaseException) -> ErrorKind:
    """Map an exception onto the public error kinds."""
    if isinstance(exc, SheetkitError):
        return exc.kind
    if isinstance(exc, OSError | UnicodeError):
        return "io_error"
    return "library_error"
