"""Table serialization: transposition, delimited text and file exports."""

from .delimited import (
    format_cell,
    to_column_major,
    to_delimited_text,
    to_row_major,
    transpose,
)
from .exports import (
    DatasetFiles,
    table_to_dataframe,
    write_dataset_files,
    write_table_csv,
)

__all__ = [
    "DatasetFiles",
    "format_cell",
    "table_to_dataframe",
    "to_column_major",
    "to_delimited_text",
    "to_row_major",
    "transpose",
    "write_dataset_files",
    "write_table_csv",
]
