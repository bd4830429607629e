"""SOURCE table construction from column specifications.

The builder calls an external value generator once per row per column and
assembles a column-major :class:`~drift_dataset.foundation.table.Table`.
Generation failures are captured per column in a :class:`ColumnResult`
so callers decide whether a partial dataset is acceptable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Optional, Protocol, Sequence

from faker import Faker

from drift_dataset.errors import ColumnGenerationError
from drift_dataset.foundation.column_spec import ColumnSpec
from drift_dataset.foundation.table import Orientation, Table

logger = logging.getLogger(__name__)

#: Draws allowed per cell before a unique column is declared exhausted.
MAX_UNIQUE_ATTEMPTS = 1000


class ValueGenerator(Protocol):
    """Produces one scalar value for a column specification per call."""

    def generate(self, spec: ColumnSpec) -> Any: ...


class FakerValueGenerator:
    """Value generator backed by :class:`faker.Faker`.

    ``spec.kind`` names the Faker method; ``spec.params`` supplies its
    positional or keyword arguments.
    """

    def __init__(
        self,
        fake: Optional[Faker] = None,
        *,
        locale: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.fake = fake if fake is not None else Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)

    def resolve(self, spec: ColumnSpec) -> Callable[..., Any]:
        try:
            method = getattr(self.fake, spec.kind)
        except AttributeError as exc:
            raise ValueError(
                f"No generator {spec.category}.{spec.kind} for column {spec.name!r}"
            ) from exc
        if not callable(method):
            raise ValueError(f"{spec.category}.{spec.kind} is not callable")
        return method

    def generate(self, spec: ColumnSpec) -> Any:
        args, kwargs = spec.generator_args()
        return self.resolve(spec)(*args, **kwargs)


@dataclass(frozen=True)
class ColumnResult:
    """Outcome of generating one column: values or the error that stopped it."""

    spec: ColumnSpec
    values: Optional[list[Any]] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BuildReport:
    """Per-column results of one table build, in spec order."""

    columns: tuple[ColumnResult, ...]

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.columns)

    @property
    def failures(self) -> dict[str, Exception]:
        return {
            result.spec.name: result.error
            for result in self.columns
            if result.error is not None
        }


def to_number(value: Any) -> int | float:
    """Coerce a generated value to ``int`` or ``float``."""

    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, Decimal):
        return float(value)
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def _normalise_value(spec: ColumnSpec, value: Any) -> Any:
    if spec.convert:
        return to_number(value)
    # Faker returns Decimal for coordinates and pydecimal
    if isinstance(value, Decimal) and (spec.is_float or spec.is_geo):
        return float(value)
    if spec.is_date and isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


class TableBuilder:
    """Build column-major tables by calling a :class:`ValueGenerator` per cell."""

    def __init__(
        self,
        generator: Optional[ValueGenerator] = None,
        *,
        allow_partial: bool = False,
        max_unique_attempts: int = MAX_UNIQUE_ATTEMPTS,
    ) -> None:
        self.generator = generator if generator is not None else FakerValueGenerator()
        self.allow_partial = allow_partial
        self.max_unique_attempts = max_unique_attempts

    def generate_column(self, spec: ColumnSpec, row_count: int) -> ColumnResult:
        """Generate ``row_count`` values for ``spec``.

        Uniqueness is scoped to this column and this call.
        """

        try:
            if spec.unique:
                raw = self._generate_unique(spec, row_count)
            else:
                raw = [self.generator.generate(spec) for _ in range(row_count)]
            values = [_normalise_value(spec, value) for value in raw]
        except Exception as exc:
            logger.error(
                f"Generating column {spec.name!r} ({spec.category}.{spec.kind}) "
                f"failed with params {spec.params!r} for {row_count} rows: {exc}"
            )
            return ColumnResult(spec=spec, error=exc)
        return ColumnResult(spec=spec, values=values)

    def _generate_unique(self, spec: ColumnSpec, row_count: int) -> list[Any]:
        seen: set[Any] = set()
        values: list[Any] = []
        for _ in range(row_count):
            for _attempt in range(self.max_unique_attempts):
                value = self.generator.generate(spec)
                if value not in seen:
                    break
            else:
                raise ValueError(
                    f"Got duplicate values for column {spec.name!r} after "
                    f"{self.max_unique_attempts} attempts ({len(values)} unique so far)"
                )
            seen.add(value)
            values.append(value)
        return values

    def build_columns(self, specs: Sequence[ColumnSpec], row_count: int) -> BuildReport:
        if row_count < 0:
            raise ValueError("row_count must be >= 0")
        return BuildReport(
            columns=tuple(self.generate_column(spec, row_count) for spec in specs)
        )

    def assemble(self, report: BuildReport, row_count: int) -> Table:
        """Turn a build report into a table.

        Raises
        ------
        ColumnGenerationError
            If any column failed and partial tables are not allowed.
        """

        if not report.ok and not self.allow_partial:
            failures = report.failures
            raise ColumnGenerationError(
                f"Failed to generate columns: {sorted(failures)}", failures
            )
        header = [result.spec.header for result in report.columns]
        columns = [
            list(result.values) if result.ok else [None] * row_count
            for result in report.columns
        ]
        return Table(
            rows=[header, *columns],
            orientation=Orientation.COLUMN_MAJOR,
            column_ids=[result.spec.name for result in report.columns],
        )

    def build(self, specs: Sequence[ColumnSpec], row_count: int) -> Table:
        report = self.build_columns(specs, row_count)
        table = self.assemble(report, row_count)
        logger.info(
            f"Built table with {table.column_count} columns and {row_count} rows"
        )
        return table


def build_table(
    specs: Sequence[ColumnSpec],
    row_count: int,
    generator: Optional[ValueGenerator] = None,
    *,
    allow_partial: bool = False,
) -> Table:
    """Build a column-major SOURCE table for ``specs``."""
    return TableBuilder(generator, allow_partial=allow_partial).build(specs, row_count)
