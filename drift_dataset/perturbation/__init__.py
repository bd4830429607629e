"""Perturbation operators that turn a SOURCE copy into a drifted TARGET."""

from .operators import (
    add_small_value,
    apply_column_order,
    jitter_float_columns,
    mangle_date_columns,
    mangle_geo_columns,
    mangle_name,
    map_column_values,
    maybe_add_small_value,
    maybe_mangle_date,
    maybe_mangle_geo,
    rename_columns,
    reorder_columns,
    shuffled_column_order,
    small_offset,
)
from .pipeline import STAGE_ORDER, PerturbationPipeline, PerturbationStage

__all__ = [
    "STAGE_ORDER",
    "PerturbationPipeline",
    "PerturbationStage",
    "add_small_value",
    "apply_column_order",
    "jitter_float_columns",
    "mangle_date_columns",
    "mangle_geo_columns",
    "mangle_name",
    "map_column_values",
    "maybe_add_small_value",
    "maybe_mangle_date",
    "maybe_mangle_geo",
    "rename_columns",
    "reorder_columns",
    "shuffled_column_order",
    "small_offset",
]
