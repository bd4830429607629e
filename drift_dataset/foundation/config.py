"""Generation parameters for one SOURCE/TARGET run."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from drift_dataset.errors import ConfigurationError

logger = logging.getLogger(__name__)

NONE_SENTINEL = "none"


class GenerationConfig(BaseModel):
    """Resolved answers that drive a run.

    Column selections accept a collection of canonical column names or the
    sentinel ``"none"``. A list holding only ``"None"`` (as returned by a
    checkbox prompt) is read as the sentinel. The camelCase keys of the
    interactive front end are accepted as aliases.

    Attributes
    ----------
    include_optional_columns:
        Generate optional columns as well as required ones.
    source_row_count:
        Data rows in SOURCE.
    row_count_delta:
        TARGET rows minus SOURCE rows. TARGET must keep at least one row.
    randomize_column_order:
        Shuffle TARGET columns, identity column excepted.
    columns_to_rename / float_columns_to_jitter / date_columns_to_mangle /
    geo_columns_to_mangle:
        Columns each perturbation applies to; empty means disabled.
    seed:
        Optional seed for the random source and the value generator.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    include_optional_columns: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "include_optional_columns", "includeOptionalColumns", "includeOptional"
        ),
    )
    source_row_count: int = Field(
        default=100,
        gt=0,
        validation_alias=AliasChoices("source_row_count", "sourceRowCount", "sourceCount"),
    )
    row_count_delta: int = Field(
        default=0,
        validation_alias=AliasChoices("row_count_delta", "rowCountDelta", "rowDiff"),
    )
    randomize_column_order: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "randomize_column_order", "randomizeColumnOrder", "colsRandomized"
        ),
    )
    columns_to_rename: frozenset[str] = Field(
        default=frozenset(),
        validation_alias=AliasChoices(
            "columns_to_rename", "columnsToRenameInTarget", "mangleColNames"
        ),
    )
    float_columns_to_jitter: frozenset[str] = Field(
        default=frozenset(),
        validation_alias=AliasChoices(
            "float_columns_to_jitter", "floatColumnsToJitter", "floatColsToTweak"
        ),
    )
    date_columns_to_mangle: frozenset[str] = Field(
        default=frozenset(),
        validation_alias=AliasChoices(
            "date_columns_to_mangle", "dateColumnsToMangle", "dateColsToMangle"
        ),
    )
    geo_columns_to_mangle: frozenset[str] = Field(
        default=frozenset(),
        validation_alias=AliasChoices(
            "geo_columns_to_mangle", "geoColumnsToMangle", "geoColsToMangle"
        ),
    )
    seed: int | None = None

    @field_validator(
        "columns_to_rename",
        "float_columns_to_jitter",
        "date_columns_to_mangle",
        "geo_columns_to_mangle",
        mode="before",
    )
    @classmethod
    def _normalise_selection(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            if value.strip().lower() == NONE_SENTINEL:
                return frozenset()
            return frozenset([value])
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(
                name for name in value if str(name).strip().lower() != NONE_SENTINEL
            )
        return value

    @model_validator(mode="after")
    def _check_target_row_count(self) -> GenerationConfig:
        if self.target_row_count < 1:
            raise ValueError(
                f"row_count_delta={self.row_count_delta} leaves TARGET with "
                f"{self.target_row_count} rows; TARGET needs at least one row"
            )
        return self

    @property
    def target_row_count(self) -> int:
        return self.source_row_count + self.row_count_delta

    @property
    def generated_row_count(self) -> int:
        """Rows generated before reconciliation trims the longer table."""
        return max(self.source_row_count, self.target_row_count)


def normalise_answer_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Rename alias keys of an answers mapping to field names, without validating.

    Unknown keys pass through unchanged.
    """

    field_names: dict[str, str] = {}
    for name, field in GenerationConfig.model_fields.items():
        field_names[name] = name
        if isinstance(field.validation_alias, AliasChoices):
            for choice in field.validation_alias.choices:
                if isinstance(choice, str):
                    field_names[choice] = name
    return {field_names.get(key, key): value for key, value in payload.items()}


def parse_generation_config(payload: dict[str, Any]) -> GenerationConfig:
    """Validate an answers mapping, raising :class:`ConfigurationError`."""
    try:
        return GenerationConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid generation config: {exc}") from exc


def load_generation_config(path: str | Path) -> GenerationConfig:
    """Load generation parameters from a JSON file."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        payload = json.load(fh)
    if not isinstance(payload, dict):
        raise ConfigurationError(
            f"Expected a JSON object in {path}, got {type(payload).__name__}"
        )
    config = parse_generation_config(payload)
    logger.info(f"Loaded generation config from {path}")
    return config
