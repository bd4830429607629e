from __future__ import annotations

from dataclasses import dataclass

from drift_dataset.foundation.config import GenerationConfig
from drift_dataset.foundation.table import Orientation, Table


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    message: str = ""


def check_header_alignment(table: Table) -> ValidationResult:
    width = len(table.header)
    if table.orientation is Orientation.COLUMN_MAJOR:
        if len(table.data) != width:
            return ValidationResult(
                False, f"{width} headers but {len(table.data)} columns"
            )
        return ValidationResult(True, f"{width} headers match {width} columns")
    for idx, row in enumerate(table.data, start=1):
        if len(row) != width:
            return ValidationResult(
                False, f"row {idx} has {len(row)} values for {width} headers"
            )
    return ValidationResult(True, f"all rows have {width} values")


def check_row_counts(
    source: Table, target: Table, config: GenerationConfig
) -> ValidationResult:
    if source.row_count != config.source_row_count:
        return ValidationResult(
            False,
            f"SOURCE has {source.row_count} rows, expected {config.source_row_count}",
        )
    if target.row_count != config.target_row_count:
        return ValidationResult(
            False,
            f"TARGET has {target.row_count} rows, expected {config.target_row_count}",
        )
    return ValidationResult(
        True, f"row counts ok: SOURCE={source.row_count} TARGET={target.row_count}"
    )


def check_same_column_set(source: Table, target: Table) -> ValidationResult:
    missing = sorted(set(source.column_ids) - set(target.column_ids))
    extra = sorted(set(target.column_ids) - set(source.column_ids))
    if missing or extra:
        return ValidationResult(
            False, f"column sets differ: missing={missing} extra={extra}"
        )
    return ValidationResult(True, f"{len(source.column_ids)} columns in both tables")


def check_identity_column_fixed(source: Table, target: Table) -> ValidationResult:
    """The first column must be the same column in both tables."""
    if not source.column_ids or not target.column_ids:
        return ValidationResult(False, "no columns to compare")
    if source.column_ids[0] != target.column_ids[0]:
        return ValidationResult(
            False,
            f"identity column moved: {source.column_ids[0]!r} != {target.column_ids[0]!r}",
        )
    return ValidationResult(True, f"identity column {source.column_ids[0]!r} is first")
