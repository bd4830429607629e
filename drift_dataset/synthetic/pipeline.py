"""End-to-end SOURCE/TARGET dataset generation."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from drift_dataset.foundation.column_spec import (
    ColumnSpec,
    load_column_specs,
    select_columns,
)
from drift_dataset.foundation.config import GenerationConfig
from drift_dataset.foundation.table import Table
from drift_dataset.perturbation.pipeline import PerturbationPipeline
from drift_dataset.reconciliation.rows import reconcile_row_counts
from drift_dataset.serialization.delimited import to_delimited_text, to_row_major
from drift_dataset.serialization.exports import DatasetFiles, write_dataset_files
from drift_dataset.synthetic.generator import (
    BuildReport,
    FakerValueGenerator,
    TableBuilder,
    ValueGenerator,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetPair:
    """Row-major SOURCE and TARGET tables produced by one run.

    Attributes
    ----------
    source:
        Baseline dataset.
    target:
        Drifted derivative of ``source``.
    report:
        Per-column generation results for the shared base table.
    stages:
        Names of the perturbation stages applied to ``target``, in order.
    """

    source: Table
    target: Table
    report: BuildReport
    stages: tuple[str, ...] = ()

    def to_delimited(self) -> tuple[str, str]:
        return to_delimited_text(self.source), to_delimited_text(self.target)

    def as_dict(self) -> dict[str, Any]:
        return {"source": self.source.as_dict(), "target": self.target.as_dict()}

    def write(self, output_dir: str | Path) -> DatasetFiles:
        return write_dataset_files(self.source, self.target, output_dir)


def generate_datasets(
    config: GenerationConfig,
    specs: Optional[Sequence[ColumnSpec]] = None,
    *,
    generator: Optional[ValueGenerator] = None,
    rng: Optional[random.Random] = None,
    allow_partial: bool = False,
) -> DatasetPair:
    """Generate SOURCE, derive a perturbed TARGET and reconcile row counts.

    Parameters
    ----------
    config:
        Resolved generation parameters.
    specs:
        Column specification collection; the packaged default when None.
    generator:
        Per-cell value generator; a Faker-backed one seeded from
        ``config.seed`` when None.
    rng:
        Random source for every perturbation and row removal; a
        ``random.Random(config.seed)`` when None.
    allow_partial:
        Keep columns whose generator failed (filled with None) instead of
        raising :class:`~drift_dataset.errors.ColumnGenerationError`.
    """

    if specs is None:
        specs = load_column_specs()
    rng = rng if rng is not None else random.Random(config.seed)
    if generator is None:
        generator = FakerValueGenerator(seed=config.seed)

    selected = select_columns(specs, config.include_optional_columns)
    row_count = config.generated_row_count
    logger.info(
        f"Generating {len(selected)} columns x {row_count} rows "
        f"(SOURCE={config.source_row_count}, TARGET={config.target_row_count})"
    )

    builder = TableBuilder(generator, allow_partial=allow_partial)
    report = builder.build_columns(selected, row_count)
    source = builder.assemble(report, row_count)

    pipeline = PerturbationPipeline.from_config(config, selected)
    target = pipeline.run(source.copy(), rng)

    source_rows, target_rows = reconcile_row_counts(
        to_row_major(source), to_row_major(target), config.row_count_delta, rng
    )
    return DatasetPair(
        source=source_rows,
        target=target_rows,
        report=report,
        stages=pipeline.stage_names,
    )
