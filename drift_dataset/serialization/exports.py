"""Write SOURCE/TARGET tables to disk and expose them as DataFrames."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from drift_dataset.foundation.table import Table
from drift_dataset.serialization.delimited import to_delimited_text, to_row_major

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetFiles:
    """Paths of the CSV artifacts written for one run."""

    source: Path
    target: Path


def table_to_dataframe(table: Table) -> pd.DataFrame:
    """Return the table as a DataFrame with the header as column labels.

    Duplicate header text is allowed; pandas keeps both columns.
    """

    row_major = to_row_major(table)
    return pd.DataFrame(row_major.data, columns=list(row_major.header))


def write_table_csv(table: Table, output_path: str | Path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(to_delimited_text(table))
    logger.info(f"Wrote {table.row_count} rows to {output_path}")
    return output_path


def write_dataset_files(
    source: Table,
    target: Table,
    output_dir: str | Path,
    *,
    timestamp_ms: int | None = None,
) -> DatasetFiles:
    """Write ``source_<ms>.csv`` and ``target_<ms>.csv`` into ``output_dir``."""

    output_dir = Path(output_dir)
    stamp = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
    return DatasetFiles(
        source=write_table_csv(source, output_dir / f"source_{stamp}.csv"),
        target=write_table_csv(target, output_dir / f"target_{stamp}.csv"),
    )
