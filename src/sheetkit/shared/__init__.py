from __future__ import annotations

from .a1 import (
    column_index_to_label,
    column_label_to_index,
    normalize_cell,
    resolve_column,
    split_a1,
    to_a1,
)
from .output_path import (
    SUPPORTED_EXTENSIONS,
    build_temp_path,
    ensure_creatable_extension,
    ensure_output_dir,
    ensure_supported_extension,
    replace_atomically,
)

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "build_temp_path",
    "column_index_to_label",
    "column_label_to_index",
    "ensure_creatable_extension",
    "ensure_output_dir",
    "ensure_supported_extension",
    "normalize_cell",
    "replace_atomically",
    "resolve_column",
    "split_a1",
    "to_a1",
]
