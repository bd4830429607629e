"""Foundational building blocks for SOURCE/TARGET dataset generation.

This package exposes the column specification model and its selection
helpers, the run configuration, and the table container shared by the
builder, the perturbation stages and the serializer.
"""

from .column_spec import (
    ColumnSpec,
    add_none,
    column_names,
    columns_with_variants,
    date_columns,
    date_columns_choices,
    float_columns,
    float_columns_choices,
    geo_columns,
    geo_columns_choices,
    load_column_specs,
    optional_columns,
    parse_column_specs,
    rename_choices,
    required_columns,
    select_columns,
)
from .config import (
    GenerationConfig,
    load_generation_config,
    normalise_answer_keys,
    parse_generation_config,
)
from .naming import pascal_case, snake_case
from .table import Orientation, Table

__all__ = [
    "ColumnSpec",
    "GenerationConfig",
    "Orientation",
    "Table",
    "add_none",
    "column_names",
    "columns_with_variants",
    "date_columns",
    "date_columns_choices",
    "float_columns",
    "float_columns_choices",
    "geo_columns",
    "geo_columns_choices",
    "load_column_specs",
    "load_generation_config",
    "normalise_answer_keys",
    "optional_columns",
    "parse_column_specs",
    "parse_generation_config",
    "pascal_case",
    "rename_choices",
    "required_columns",
    "select_columns",
    "snake_case",
]
