"""Row-count reconciliation between SOURCE and TARGET.

Both tables are generated with ``max(source_rows, target_rows)`` records,
then the longer one loses ``|row_count_delta|`` randomly chosen data rows.
"""

from __future__ import annotations

import logging
import random

from drift_dataset.errors import ConfigurationError
from drift_dataset.foundation.table import Orientation, Table

logger = logging.getLogger(__name__)


def remove_random_rows(table: Table, count: int, rng: random.Random) -> Table:
    """Return a copy of a row-major table without ``count`` random data rows.

    The header is never removed. Indices are drawn without replacement and
    deleted highest first. At least one data row must remain; larger
    requests raise instead of being clamped.
    """

    if table.orientation is not Orientation.ROW_MAJOR:
        raise ValueError("Row removal expects a row-major table")
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    available = table.row_count
    if count and count >= available:
        raise ConfigurationError(
            f"Cannot remove {count} of {available} data rows; at least one must remain"
        )

    data = [list(row) for row in table.data]
    for idx in sorted(rng.sample(range(available), count), reverse=True):
        del data[idx]
    return Table(
        rows=[list(table.header), *data],
        orientation=Orientation.ROW_MAJOR,
        column_ids=list(table.column_ids),
    )


def reconcile_row_counts(
    source: Table, target: Table, row_count_delta: int, rng: random.Random
) -> tuple[Table, Table]:
    """Trim the longer table so ``target rows - source rows == row_count_delta``.

    Both tables must be row-major and hold the same number of data rows.
    """

    if source.row_count != target.row_count:
        raise ValueError(
            f"SOURCE ({source.row_count}) and TARGET ({target.row_count}) must start "
            "with the same number of rows"
        )
    if row_count_delta > 0:
        logger.info(f"Removing {row_count_delta} rows from SOURCE")
        source = remove_random_rows(source, row_count_delta, rng)
    elif row_count_delta < 0:
        logger.info(f"Removing {-row_count_delta} rows from TARGET")
        target = remove_random_rows(target, -row_count_delta, rng)
    return source, target
