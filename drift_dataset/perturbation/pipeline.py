"""Ordered pipeline of named perturbation stages.

Value-mutating stages must see TARGET in its canonical column order, so the
pipeline enforces ``rename -> float_jitter -> date_mangle -> geo_mangle ->
reorder`` regardless of how stages are supplied.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from functools import partial
from typing import Callable, Sequence

from drift_dataset.errors import ConfigurationError
from drift_dataset.foundation.column_spec import ColumnSpec
from drift_dataset.foundation.config import GenerationConfig
from drift_dataset.foundation.table import Table
from drift_dataset.perturbation.operators import (
    jitter_float_columns,
    mangle_date_columns,
    mangle_geo_columns,
    rename_columns,
    reorder_columns,
)

logger = logging.getLogger(__name__)

STAGE_ORDER = ("rename", "float_jitter", "date_mangle", "geo_mangle", "reorder")


@dataclass(frozen=True)
class PerturbationStage:
    """A named table transformation."""

    name: str
    apply: Callable[[Table, random.Random], Table]


class PerturbationPipeline:
    """Apply perturbation stages to a column-major table in the fixed order."""

    def __init__(self, stages: Sequence[PerturbationStage] = ()) -> None:
        names = [stage.name for stage in stages]
        unknown = [name for name in names if name not in STAGE_ORDER]
        if unknown:
            raise ValueError(f"Unknown perturbation stages: {unknown}")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate perturbation stages: {names}")
        self.stages = tuple(sorted(stages, key=lambda stage: STAGE_ORDER.index(stage.name)))

    @property
    def stage_names(self) -> tuple[str, ...]:
        return tuple(stage.name for stage in self.stages)

    @classmethod
    def from_config(
        cls, config: GenerationConfig, specs: Sequence[ColumnSpec]
    ) -> PerturbationPipeline:
        """Build the stages enabled by ``config``.

        Raises
        ------
        ConfigurationError
            If a value stage names a selected column that does not carry
            that kind of value (e.g. jittering a text column).
        """

        _check_eligible(specs, config.float_columns_to_jitter, "float", lambda s: s.is_float)
        _check_eligible(specs, config.date_columns_to_mangle, "date", lambda s: s.is_date)
        _check_eligible(specs, config.geo_columns_to_mangle, "geo", lambda s: s.is_geo)

        stages = []
        if config.columns_to_rename:
            stages.append(
                PerturbationStage(
                    "rename",
                    partial(_rename, names=config.columns_to_rename, specs=tuple(specs)),
                )
            )
        if config.float_columns_to_jitter:
            stages.append(
                PerturbationStage(
                    "float_jitter",
                    partial(_with_names, jitter_float_columns, config.float_columns_to_jitter),
                )
            )
        if config.date_columns_to_mangle:
            stages.append(
                PerturbationStage(
                    "date_mangle",
                    partial(_with_names, mangle_date_columns, config.date_columns_to_mangle),
                )
            )
        if config.geo_columns_to_mangle:
            stages.append(
                PerturbationStage(
                    "geo_mangle",
                    partial(_with_names, mangle_geo_columns, config.geo_columns_to_mangle),
                )
            )
        if config.randomize_column_order:
            stages.append(PerturbationStage("reorder", reorder_columns))
        return cls(stages)

    def run(self, table: Table, rng: random.Random) -> Table:
        for stage in self.stages:
            logger.info(f"Applying perturbation stage {stage.name!r}")
            table = stage.apply(table, rng)
        return table


def _rename(
    table: Table, rng: random.Random, *, names: frozenset[str], specs: tuple[ColumnSpec, ...]
) -> Table:
    return rename_columns(table, names, specs, rng)


def _with_names(
    operator: Callable[[Table, frozenset[str], random.Random], Table],
    names: frozenset[str],
    table: Table,
    rng: random.Random,
) -> Table:
    return operator(table, names, rng)


def _check_eligible(
    specs: Sequence[ColumnSpec],
    names: frozenset[str],
    kind: str,
    predicate: Callable[[ColumnSpec], bool],
) -> None:
    # Names without a selected spec are reported by the operators themselves.
    by_name = {spec.name: spec for spec in specs}
    ineligible = sorted(
        name for name in names if name in by_name and not predicate(by_name[name])
    )
    if ineligible:
        raise ConfigurationError(f"Columns {ineligible} are not {kind} columns")
