from __future__ import annotations

import re

_A1_PATTERN = re.compile(r"^[A-Za-z]{1,3}[1-9][0-9]*$")
_COLUMN_LABEL_PATTERN = re.compile(r"^[A-Za-z]{1,3}$")


def split_a1(value: str) -> tuple[str, int]:
    """Split A1 notation into normalized (column_label, row_index)."""
    candidate = value.strip()
    if not _A1_PATTERN.match(candidate):
        raise ValueError(f"Invalid cell reference: {value}")
    idx = next(index for index, char in enumerate(candidate) if char.isdigit())
    return candidate[:idx].upper(), int(candidate[idx:])


def normalize_cell(value: str) -> str:
    """Validate an A1 reference and return it upper-cased (``b2`` -> ``B2``)."""
    column, row = split_a1(value)
    return f"{column}{row}"


def column_label_to_index(label: str) -> int:
    """Convert Excel-style column label (A/AA) to 1-based index."""
    normalized = label.strip().upper()
    if not _COLUMN_LABEL_PATTERN.match(normalized):
        raise ValueError(f"Invalid column label: {label}")
    index = 0
    for char in normalized:
        index = index * 26 + (ord(char) - ord("A") + 1)
    return index


def column_index_to_label(index: int) -> str:
    """Convert 1-based column index to Excel-style column label."""
    if index < 1:
        raise ValueError("Column index must be positive.")
    chunks: list[str] = []
    current = index
    while current > 0:
        current -= 1
        chunks.append(chr(ord("A") + (current % 26)))
        current //= 26
    return "".join(reversed(chunks))


def to_a1(row: int, column: int) -> str:
    """Build an A1 reference from 1-based row/column indexes."""
    if row < 1:
        raise ValueError("Row index must be positive.")
    return f"{column_index_to_label(column)}{row}"


def resolve_column(value: str | int) -> int:
    """Accept a column label or a 1-based index and return the index."""
    if isinstance(value, int):
        if value < 1:
            raise ValueError("Column index must be positive.")
        return value
    text = value.strip()
    if text.isdigit():
        return resolve_column(int(text))
    return column_label_to_index(text)
