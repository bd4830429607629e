"""Orientation changes and delimited-text encoding for tables."""

from __future__ import annotations

import numbers
from typing import Any, Sequence

from drift_dataset.foundation.table import Orientation, Table


def transpose(matrix: Sequence[Sequence[Any]]) -> list[list[Any]]:
    """Swap rows and columns: output row ``i`` holds element ``i`` of every input row."""
    return [list(row) for row in zip(*matrix)]


def to_row_major(table: Table) -> Table:
    """Header stays first; the columns below it become records."""
    if table.orientation is Orientation.ROW_MAJOR:
        return table.copy()
    return Table(
        rows=[list(table.header), *transpose(table.data)],
        orientation=Orientation.ROW_MAJOR,
        column_ids=list(table.column_ids),
    )


def to_column_major(table: Table) -> Table:
    if table.orientation is Orientation.COLUMN_MAJOR:
        return table.copy()
    data = transpose(table.data)
    if not data:
        data = [[] for _ in table.header]
    return Table(
        rows=[list(table.header), *data],
        orientation=Orientation.COLUMN_MAJOR,
        column_ids=list(table.column_ids),
    )


def format_cell(value: Any) -> str:
    """Numbers go out bare; anything else is double-quoted."""
    if isinstance(value, numbers.Number) and not isinstance(value, bool):
        return str(value)
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def to_delimited_text(table: Table) -> str:
    """Encode a row-major table as comma-delimited text, one line per row."""
    if table.orientation is not Orientation.ROW_MAJOR:
        table = to_row_major(table)
    return "".join(
        ",".join(format_cell(value) for value in row) + "\n" for row in table.rows
    )
