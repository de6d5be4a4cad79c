from __future__ import annotations

from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, field_validator, model_validator

from sheetkit.errors import classify_error
from sheetkit.shared.a1 import normalize_cell
from sheetkit.types import ErrorKind, MatchMode, OperationName, RaggedRowPolicy

T = TypeVar("T")

_HEX_COLOR_LENGTHS = {6, 8}


class OperationError(BaseModel):
    """Structured failure detail returned instead of raising."""

    kind: ErrorKind
    operation: OperationName
    message: str
    path: str | None = None
    sheet: str | None = None
    exception_type: str | None = None

    @classmethod
    def from_exception(
        cls,
        operation: OperationName,
        exc: BaseException,
        *,
        path: Path | str | None = None,
        sheet: str | None = None,
    ) -> OperationError:
        """Build error detail from an exception caught at the boundary."""
        return cls(
            kind=classify_error(exc),
            operation=operation,
            message=str(exc) or type(exc).__name__,
            path=str(path) if path is not None else None,
            sheet=sheet,
            exception_type=type(exc).__name__,
        )


class OperationResult(BaseModel, Generic[T]):
    """Outcome of a public operation: a value, an error, or (rarely) both.

    ``find_text`` is the one operation that keeps a partial ``value`` next to
    an ``error``; every other operation leaves ``value`` unset on failure.
    """

    operation: OperationName
    value: T | None = None
    error: OperationError | None = None
    warnings: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


class FoundItem(BaseModel):
    """Location of a cell whose text matched a search token."""

    row: int = Field(ge=1)
    column: int = Field(ge=1)
    column_name: str


class SearchRequest(BaseModel):
    """Input model for :func:`sheetkit.service.find_text`."""

    path: Path
    sheet: str
    token: str
    case_sensitive: bool = True
    match: MatchMode = "exact"


class SheetExtent(BaseModel):
    """Last used row/column of a sheet; both are 0 for an empty sheet."""

    end_row: int = Field(default=0, ge=0)
    end_column: int = Field(default=0, ge=0)


class HeaderStyle(BaseModel):
    """Cosmetic bundle applied to the first imported row.

    Fill colours are theme indexes (4 = Accent1, 8 = Accent5) so the header
    follows the workbook theme.
    """

    bold: bool = True
    font_color: str = "FFFFFFFF"
    fill_type: str = "lightGray"
    fill_fg_theme: int = Field(default=4, ge=0)
    fill_bg_theme: int = Field(default=8, ge=0)

    @field_validator("font_color")
    @classmethod
    def _validate_font_color(cls, value: str) -> str:
        normalized = value.strip().lstrip("#").upper()
        if len(normalized) not in _HEX_COLOR_LENGTHS or any(
            char not in "0123456789ABCDEF" for char in normalized
        ):
            raise ValueError(f"Invalid hex color: {value}")
        return normalized if len(normalized) == 8 else f"FF{normalized}"


class ImportOptions(BaseModel):
    """Tuning for the tab-delimited import adapter."""

    delimiter: str = Field(default="\t", min_length=1, max_length=1)
    encoding: str = "utf-8-sig"
    ragged_rows: RaggedRowPolicy = "truncate"
    convert_numbers: bool = False
    header_style: HeaderStyle = Field(default_factory=HeaderStyle)
    active_cell: str = "C2"
    freeze_rows: int = Field(default=1, ge=0)
    freeze_columns: int = Field(default=6, ge=0)
    min_width: float | None = Field(default=None, gt=0)
    max_width: float | None = Field(default=None, gt=0)

    @field_validator("active_cell")
    @classmethod
    def _validate_active_cell(cls, value: str) -> str:
        return normalize_cell(value)

    @model_validator(mode="after")
    def _validate_width_bounds(self) -> ImportOptions:
        if (
            self.min_width is not None
            and self.max_width is not None
            and self.min_width > self.max_width
        ):
            raise ValueError("min_width must not exceed max_width.")
        return self


class ImportSummary(BaseModel):
    """What an import wrote into the target workbook."""

    out_path: str
    sheet: str
    rows: int
    columns: int
    header_width: int
    replaced_existing: bool = False
    removed_placeholder: bool = False
    warnings: list[str] = Field(default_factory=list)
