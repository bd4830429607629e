"""SOURCE/TARGET dataset generation and validation utilities.

This package builds a SOURCE table from column specifications, derives a
drifted TARGET from it and checks the structural properties that tie the
two together.
"""

from .generator import (
    BuildReport,
    ColumnResult,
    FakerValueGenerator,
    TableBuilder,
    ValueGenerator,
    build_table,
)
from .pipeline import DatasetPair, generate_datasets
from .scenarios import (
    EXTRA_ROWS_SCENARIO,
    FULL_DRIFT_SCENARIO,
    MISSING_ROWS_SCENARIO,
    NO_DRIFT_SCENARIO,
    SCHEMA_DRIFT_SCENARIO,
    VALUE_DRIFT_SCENARIO,
)
from .validation import (
    ValidationResult,
    check_header_alignment,
    check_identity_column_fixed,
    check_row_counts,
    check_same_column_set,
)

__all__ = [
    "BuildReport",
    "ColumnResult",
    "DatasetPair",
    "FakerValueGenerator",
    "TableBuilder",
    "ValueGenerator",
    "build_table",
    "generate_datasets",
    "ValidationResult",
    "check_header_alignment",
    "check_identity_column_fixed",
    "check_row_counts",
    "check_same_column_set",
    "EXTRA_ROWS_SCENARIO",
    "FULL_DRIFT_SCENARIO",
    "MISSING_ROWS_SCENARIO",
    "NO_DRIFT_SCENARIO",
    "SCHEMA_DRIFT_SCENARIO",
    "VALUE_DRIFT_SCENARIO",
]
