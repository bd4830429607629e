"""Pre-configured drift scenarios for the packaged column specification.

Each scenario is a :class:`GenerationConfig` describing a typical
reconciliation problem. Column names refer to ``data/colspec.json``.

Examples
--------
>>> from drift_dataset.synthetic import generate_datasets
>>> from drift_dataset.synthetic.scenarios import MISSING_ROWS_SCENARIO
>>> pair = generate_datasets(MISSING_ROWS_SCENARIO)
>>> pair.target.row_count
85
"""

from drift_dataset.foundation.config import GenerationConfig

# Identical tables, useful as a control run
NO_DRIFT_SCENARIO = GenerationConfig(
    source_row_count=100,
    row_count_delta=0,
)

# TARGET lost some records in transit
MISSING_ROWS_SCENARIO = GenerationConfig(
    source_row_count=100,
    row_count_delta=-15,
)

# TARGET picked up records SOURCE never had
EXTRA_ROWS_SCENARIO = GenerationConfig(
    source_row_count=100,
    row_count_delta=10,
)

# Same data, different schema conventions downstream
SCHEMA_DRIFT_SCENARIO = GenerationConfig(
    source_row_count=100,
    randomize_column_order=True,
    columns_to_rename=frozenset({"Transaction Date", "Amount", "Currency"}),
)

# Values reformatted or corrupted on the way to TARGET
VALUE_DRIFT_SCENARIO = GenerationConfig(
    source_row_count=100,
    float_columns_to_jitter=frozenset({"Amount"}),
    date_columns_to_mangle=frozenset({"Transaction Date"}),
    geo_columns_to_mangle=frozenset({"Latitude", "Longitude"}),
)

# Everything at once, optional columns included
FULL_DRIFT_SCENARIO = GenerationConfig(
    include_optional_columns=True,
    source_row_count=200,
    row_count_delta=-20,
    randomize_column_order=True,
    columns_to_rename=frozenset({"Transaction Date", "From Account", "Merchant"}),
    float_columns_to_jitter=frozenset({"Amount", "Exchange Rate"}),
    date_columns_to_mangle=frozenset({"Transaction Date", "Settlement Date"}),
    geo_columns_to_mangle=frozenset({"Latitude", "Longitude"}),
)
