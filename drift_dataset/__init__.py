"""Generate SOURCE/TARGET dataset pairs for exercising reconciliation tooling."""

from drift_dataset.errors import (
    ColumnGenerationError,
    ColumnLookupError,
    ColumnNameCollisionError,
    ConfigurationError,
    DriftDatasetError,
    ReconciliationError,
)
from drift_dataset.foundation import (
    ColumnSpec,
    GenerationConfig,
    Orientation,
    Table,
    load_column_specs,
    load_generation_config,
)
from drift_dataset.synthetic import DatasetPair, generate_datasets

__all__ = [
    "ColumnGenerationError",
    "ColumnLookupError",
    "ColumnNameCollisionError",
    "ColumnSpec",
    "ConfigurationError",
    "DatasetPair",
    "DriftDatasetError",
    "GenerationConfig",
    "Orientation",
    "ReconciliationError",
    "Table",
    "generate_datasets",
    "load_column_specs",
    "load_generation_config",
]
