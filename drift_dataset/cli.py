"""Command line entry points for SOURCE/TARGET dataset generation."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from drift_dataset.errors import DriftDatasetError
from drift_dataset.foundation.column_spec import (
    date_columns_choices,
    float_columns_choices,
    geo_columns_choices,
    load_column_specs,
    rename_choices,
)
from drift_dataset.foundation.config import normalise_answer_keys, parse_generation_config
from drift_dataset.synthetic.generator import FakerValueGenerator
from drift_dataset.synthetic.pipeline import generate_datasets
from drift_dataset.synthetic.validation import (
    check_identity_column_fixed,
    check_row_counts,
    check_same_column_set,
)

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a SOURCE dataset and a drifted TARGET copy as CSV files"
    )
    parser.add_argument(
        "--colspec",
        type=Path,
        help="Path to a JSON column specification (defaults to the packaged one)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a JSON file with generation answers; flags override its values",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("output"),
        help="Directory for source_<ms>.csv and target_<ms>.csv (default: output)",
    )
    parser.add_argument(
        "--include-optional",
        action="store_true",
        default=None,
        help="Generate optional columns too",
    )
    parser.add_argument("--rows", type=int, help="Rows in SOURCE (default: 100)")
    parser.add_argument(
        "--row-delta",
        type=int,
        help="TARGET rows minus SOURCE rows, may be negative (default: 0)",
    )
    parser.add_argument(
        "--randomize-columns",
        action="store_true",
        default=None,
        help="Shuffle TARGET column order, keeping the first column in place",
    )
    parser.add_argument(
        "--rename",
        action="append",
        metavar="COLUMN",
        help="Rename this column in TARGET (repeatable)",
    )
    parser.add_argument(
        "--jitter",
        action="append",
        metavar="COLUMN",
        help="Add small offsets to this float column in TARGET (repeatable)",
    )
    parser.add_argument(
        "--mangle-dates",
        action="append",
        metavar="COLUMN",
        help="Reformat some values of this date column in TARGET (repeatable)",
    )
    parser.add_argument(
        "--mangle-geo",
        action="append",
        metavar="COLUMN",
        help="Corrupt some values of this latitude/longitude column (repeatable)",
    )
    parser.add_argument("--seed", type=int, help="Seed for reproducible output")
    parser.add_argument(
        "--locale", help="Faker locale for generated values (e.g. en_US)"
    )
    parser.add_argument(
        "--allow-partial",
        action="store_true",
        help="Write datasets even if some columns failed to generate",
    )
    parser.add_argument(
        "--list-columns",
        action="store_true",
        help="Print the columns eligible for each perturbation and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _answers_from_args(args: argparse.Namespace) -> dict[str, Any]:
    answers: dict[str, Any] = {}
    if args.config:
        with args.config.open("r", encoding="utf-8") as fh:
            loaded = json.load(fh)
        if not isinstance(loaded, dict):
            raise ValueError(f"Expected a JSON object in {args.config}")
        # Flag overrides replace file values before the single validation pass.
        answers.update(normalise_answer_keys(loaded))

    overrides = {
        "include_optional_columns": args.include_optional,
        "source_row_count": args.rows,
        "row_count_delta": args.row_delta,
        "randomize_column_order": args.randomize_columns,
        "columns_to_rename": args.rename,
        "float_columns_to_jitter": args.jitter,
        "date_columns_to_mangle": args.mangle_dates,
        "geo_columns_to_mangle": args.mangle_geo,
        "seed": args.seed,
    }
    answers.update({key: value for key, value in overrides.items() if value is not None})
    return answers


def generate_datasets_cli(argv: list[str] | None = None) -> int:
    """Generate SOURCE/TARGET CSV files.

    Args:
        argv: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for error)
    """

    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        specs = load_column_specs(args.colspec)
        answers = _answers_from_args(args)
        config = parse_generation_config(answers)
    except (DriftDatasetError, ValueError, OSError) as exc:
        logger.error(f"Invalid input: {exc}")
        return 2

    if args.list_columns:
        include = config.include_optional_columns
        choices = {
            "rename": rename_choices(specs, include),
            "jitter": float_columns_choices(specs, include),
            "mangle_dates": date_columns_choices(specs, include),
            "mangle_geo": geo_columns_choices(specs, include),
        }
        json.dump(choices, fp=sys.stdout, indent=2)
        print()
        return 0

    try:
        pair = generate_datasets(
            config,
            specs,
            generator=FakerValueGenerator(locale=args.locale, seed=config.seed),
            allow_partial=args.allow_partial,
        )
    except DriftDatasetError as exc:
        logger.error(f"Dataset generation failed: {exc}")
        return 1

    for result in (
        check_row_counts(pair.source, pair.target, config),
        check_same_column_set(pair.source, pair.target),
        check_identity_column_fixed(pair.source, pair.target),
    ):
        if not result.ok:
            logger.warning(result.message)

    files = pair.write(args.output_dir)
    logger.info(f"SOURCE written to {files.source}")
    logger.info(f"TARGET written to {files.target}")
    if not pair.report.ok:
        logger.warning(f"Columns filled with empty values: {sorted(pair.report.failures)}")
    return 0


def main() -> None:
    raise SystemExit(generate_datasets_cli())


if __name__ == "__main__":  # pragma: no cover
    main()
