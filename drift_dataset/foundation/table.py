"""Rectangular table container shared by every pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from drift_dataset.errors import ColumnLookupError


class Orientation(str, Enum):
    """Layout of the non-header rows of a :class:`Table`."""

    COLUMN_MAJOR = "column_major"
    ROW_MAJOR = "row_major"


@dataclass
class Table:
    """Header row plus data rows in one of two orientations.

    Attributes
    ----------
    rows:
        ``rows[0]`` is the header. In column-major tables each following
        row is one column's values; in row-major tables each following row
        is one record.
    orientation:
        Which of the two layouts ``rows`` uses.
    column_ids:
        Stable identifier per header position. Defaults to the header text.
        Renaming changes header text only; reordering moves ids together
        with their columns, so ids always resolve to one position even when
        two headers read the same.

    Notes
    -----
    The first data column is the identity column and never moves.
    """

    rows: list[list[Any]]
    orientation: Orientation = Orientation.COLUMN_MAJOR
    column_ids: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.rows:
            raise ValueError("A table needs at least a header row")
        if not self.column_ids:
            self.column_ids = [str(name) for name in self.rows[0]]
        width = len(self.rows[0])
        if len(self.column_ids) != width:
            raise ValueError(
                f"Expected {width} column ids, got {len(self.column_ids)}"
            )
        if len(set(self.column_ids)) != width:
            raise ValueError(f"Column ids must be unique: {self.column_ids}")
        if self.orientation is Orientation.COLUMN_MAJOR:
            if len(self.rows) - 1 != width:
                raise ValueError(
                    f"Column-major table has {width} headers but {len(self.rows) - 1} columns"
                )
            lengths = {len(column) for column in self.rows[1:]}
            if len(lengths) > 1:
                raise ValueError(f"Columns have differing lengths: {sorted(lengths)}")
        else:
            for idx, record in enumerate(self.rows[1:], start=1):
                if len(record) != width:
                    raise ValueError(
                        f"Row {idx} has {len(record)} values for {width} headers"
                    )

    @property
    def header(self) -> list[Any]:
        return self.rows[0]

    @property
    def data(self) -> list[list[Any]]:
        return self.rows[1:]

    @property
    def column_count(self) -> int:
        return len(self.rows[0])

    @property
    def row_count(self) -> int:
        """Number of records, whatever the orientation."""
        if self.orientation is Orientation.ROW_MAJOR:
            return len(self.rows) - 1
        return len(self.rows[1]) if len(self.rows) > 1 else 0

    def column_index(self, column_id: str) -> int:
        """Header position of ``column_id``."""
        try:
            return self.column_ids.index(column_id)
        except ValueError:
            raise ColumnLookupError(
                f"Column {column_id!r} not found; known columns: {self.column_ids}"
            ) from None

    def column_values(self, column_id: str) -> list[Any]:
        idx = self.column_index(column_id)
        if self.orientation is Orientation.COLUMN_MAJOR:
            return list(self.rows[idx + 1])
        return [record[idx] for record in self.rows[1:]]

    def copy(self) -> Table:
        """Structural copy; no row list is shared with the original."""
        return Table(
            rows=[list(row) for row in self.rows],
            orientation=self.orientation,
            column_ids=list(self.column_ids),
        )

    def as_dict(self) -> dict[str, Any]:
        """Return ``{"header": [...], "rows": [...]}``."""
        return {
            "header": list(self.header),
            "rows": [list(row) for row in self.data],
        }
