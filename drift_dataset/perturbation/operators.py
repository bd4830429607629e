"""Perturbation operators applied to TARGET.

Every operator takes a column-major table and returns a new table; the
input is never modified. Operators change header text, values or column
positions but never the number or order of rows. Columns are addressed by
their stable column id (the canonical spec name), not by header text.

Value-level helpers draw from the ``random.Random`` they are given:

================  ===========================================  ===========
Operator          Effect per value                             Probability
================  ===========================================  ===========
float jitter      + ``round(u * 1000) * 1e-7``                 20%
date mangle       epoch milliseconds                           10%
date mangle       locale formatted string                      10%
geo mangle        + ``round(u * 1000) * 1e-7``                 10%
geo mangle        +/-180, pushed out of coordinate range       5%
================  ===========================================  ===========
"""

from __future__ import annotations

import logging
import random
from datetime import date, datetime
from typing import Any, Callable, Collection, Iterable, Sequence

from drift_dataset.errors import ColumnLookupError, ColumnNameCollisionError
from drift_dataset.foundation.column_spec import ColumnSpec
from drift_dataset.foundation.naming import snake_case
from drift_dataset.foundation.table import Orientation, Table

logger = logging.getLogger(__name__)

FLOAT_UNCHANGED_PROBABILITY = 0.8
DATE_EPOCH_THRESHOLD = 0.1
DATE_LOCALE_THRESHOLD = 0.2
GEO_OFFSET_THRESHOLD = 0.1
GEO_FLIP_THRESHOLD = 0.15
GEO_SHIFT = 180
LOCALE_DATE_FORMAT = "%c"


# ---------------------------------------------------------------------------
# Value-level helpers
# ---------------------------------------------------------------------------


def small_offset(rng: random.Random) -> float:
    """Return a non-negative offset below 0.0001, e.g. ``0.0000342``."""
    return round(rng.random() * 1000) * 0.0000001


def add_small_value(number: float, rng: random.Random) -> float:
    return number + small_offset(rng)


def maybe_add_small_value(number: float, rng: random.Random) -> float:
    if rng.random() < FLOAT_UNCHANGED_PROBABILITY:
        return number
    return add_small_value(number, rng)


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def to_epoch_millis(value: Any) -> int:
    return int(_parse_datetime(value).timestamp() * 1000)


def to_locale_string(value: Any) -> str:
    return _parse_datetime(value).strftime(LOCALE_DATE_FORMAT)


def maybe_mangle_date(value: Any, rng: random.Random) -> Any:
    """Leave an ISO-8601 value alone or switch it to another date format.

    One draw decides the bucket: below 0.1 the value becomes epoch
    milliseconds, below 0.2 a locale formatted string.
    """

    draw = rng.random()
    if draw < DATE_EPOCH_THRESHOLD:
        return to_epoch_millis(value)
    if draw < DATE_LOCALE_THRESHOLD:
        return to_locale_string(value)
    return value


def shift_out_of_range(coord: float) -> float:
    return coord - GEO_SHIFT if coord < 0 else coord + GEO_SHIFT


def maybe_mangle_geo(coord: float, rng: random.Random) -> float:
    draw = rng.random()
    if draw < GEO_OFFSET_THRESHOLD:
        return add_small_value(coord, rng)
    if draw < GEO_FLIP_THRESHOLD:
        return shift_out_of_range(coord)
    return coord


def mangle_name(candidates: Sequence[str], rng: random.Random) -> str:
    """Pick one candidate name at random and snake_case it."""
    if not candidates:
        raise ValueError("Need at least one candidate name")
    return snake_case(rng.choice(list(candidates)))


# ---------------------------------------------------------------------------
# Table operators
# ---------------------------------------------------------------------------


def _require_column_major(table: Table) -> None:
    if table.orientation is not Orientation.COLUMN_MAJOR:
        raise ValueError("Perturbation operators expect a column-major table")


def _check_known_columns(table: Table, names: Iterable[str]) -> None:
    missing = sorted(set(names) - set(table.column_ids))
    if missing:
        raise ColumnLookupError(
            f"Columns {missing} not found; known columns: {table.column_ids}"
        )


def map_column_values(
    table: Table,
    names: Collection[str],
    func: Callable[[Any, random.Random], Any],
    rng: random.Random,
) -> Table:
    """Apply ``func`` to every value of the named columns."""

    _require_column_major(table)
    _check_known_columns(table, names)
    result = table.copy()
    for idx, column_id in enumerate(result.column_ids):
        if column_id in names:
            result.rows[idx + 1] = [func(value, rng) for value in result.rows[idx + 1]]
    return result


def jitter_float_columns(
    table: Table, names: Collection[str], rng: random.Random
) -> Table:
    return map_column_values(table, names, maybe_add_small_value, rng)


def mangle_date_columns(
    table: Table, names: Collection[str], rng: random.Random
) -> Table:
    return map_column_values(table, names, maybe_mangle_date, rng)


def mangle_geo_columns(
    table: Table, names: Collection[str], rng: random.Random
) -> Table:
    return map_column_values(table, names, maybe_mangle_geo, rng)


def rename_columns(
    table: Table,
    names: Collection[str],
    specs: Sequence[ColumnSpec],
    rng: random.Random,
) -> Table:
    """Replace the header of each named column with a snake_cased variant.

    The new header is drawn uniformly from the canonical name and the
    spec's variants. Column positions and values are untouched.

    Raises
    ------
    ColumnLookupError
        If a name has no spec or no column in ``table``.
    ColumnNameCollisionError
        If the new header equals the header of another column.
    """

    _require_column_major(table)
    spec_by_name = {spec.name: spec for spec in specs}
    unknown = sorted(name for name in names if name not in spec_by_name)
    if unknown:
        raise ColumnLookupError(f"No column specification for {unknown}")
    _check_known_columns(table, names)

    result = table.copy()
    header = result.rows[0]
    for name in sorted(names):
        idx = result.column_index(name)
        new_name = mangle_name(spec_by_name[name].name_candidates, rng)
        others = header[:idx] + header[idx + 1 :]
        if new_name in others:
            raise ColumnNameCollisionError(
                f"Renaming {name!r} to {new_name!r} collides with an existing header"
            )
        logger.debug(f"Renamed column {name!r}: {header[idx]!r} -> {new_name!r}")
        header[idx] = new_name
    return result


def shuffled_column_order(column_count: int, rng: random.Random) -> list[int]:
    """Random permutation of header positions that keeps position 0 first."""
    rest = list(range(1, column_count))
    rng.shuffle(rest)
    return [0, *rest] if column_count else []


def apply_column_order(table: Table, order: Sequence[int]) -> Table:
    """Rearrange columns so that new position ``i`` holds old column ``order[i]``."""

    _require_column_major(table)
    if sorted(order) != list(range(table.column_count)):
        raise ValueError(f"{list(order)} is not a permutation of the table's columns")
    if table.column_count and order[0] != 0:
        raise ValueError("The identity column must stay in the first position")
    return Table(
        rows=[
            [table.header[i] for i in order],
            *(list(table.rows[i + 1]) for i in order),
        ],
        orientation=Orientation.COLUMN_MAJOR,
        column_ids=[table.column_ids[i] for i in order],
    )


def reorder_columns(table: Table, rng: random.Random) -> Table:
    """Shuffle every column except the identity column."""
    order = shuffled_column_order(table.column_count, rng)
    return apply_column_order(table, order)
