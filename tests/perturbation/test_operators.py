"""Tests for perturbation operators.

Most operators are randomized, so the approach is to run them many times
and check that the share of each outcome falls within +/-5 points of its
nominal probability.
"""

import random
from datetime import datetime

import pytest

from drift_dataset.errors import ColumnLookupError, ColumnNameCollisionError
from drift_dataset.foundation.column_spec import ColumnSpec
from drift_dataset.foundation.table import Orientation, Table
from drift_dataset.perturbation.operators import (
    add_small_value,
    apply_column_order,
    jitter_float_columns,
    mangle_date_columns,
    mangle_geo_columns,
    mangle_name,
    maybe_add_small_value,
    maybe_mangle_date,
    maybe_mangle_geo,
    rename_columns,
    reorder_columns,
    shuffled_column_order,
    small_offset,
)

TRIALS = 10_000
ISO_TS = "2024-03-15T10:30:00"


def share(values, predicate):
    return sum(1 for value in values if predicate(value)) / len(values)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def specs():
    return [
        ColumnSpec(name="ID", category="misc", kind="uuid4"),
        ColumnSpec(
            name="Transaction Date",
            variants=("Txn Date", "Date of Transaction"),
            category="date",
            kind="date_time",
        ),
        ColumnSpec(name="Amount", variants=("Value",), category="python", kind="pyfloat", dec=2),
        ColumnSpec(name="Latitude", category="address", kind="latitude", convert=True),
    ]


@pytest.fixture
def table():
    rows = 200
    return Table(
        rows=[
            ["Id", "TransactionDate", "Amount", "Latitude"],
            [f"id-{i}" for i in range(rows)],
            [ISO_TS] * rows,
            [100.25] * rows,
            [-33.5] * rows,
        ],
        column_ids=["ID", "Transaction Date", "Amount", "Latitude"],
    )


class TestValueHelpers:
    def test_small_offset_range(self, rng):
        offsets = [small_offset(rng) for _ in range(TRIALS)]
        assert all(0 <= offset < 0.000101 for offset in offsets)
        assert any(offset > 0 for offset in offsets)

    def test_add_small_value_never_decreases(self, rng):
        for number in (-5.0, 0.0, 12.75):
            assert all(add_small_value(number, rng) >= number for _ in range(1000))

    def test_float_jitter_rate(self, rng):
        results = [maybe_add_small_value(1.5, rng) for _ in range(TRIALS)]
        increased = share(results, lambda value: value > 1.5)
        assert 0.15 <= increased <= 0.25
        assert all(value >= 1.5 for value in results)

    def test_float_jitter_keeps_sign(self, rng):
        results = [maybe_add_small_value(-2.0, rng) for _ in range(TRIALS)]
        assert all(-2.0 <= value < 0 for value in results)

    def test_date_mangle_buckets(self, rng):
        results = [maybe_mangle_date(ISO_TS, rng) for _ in range(TRIALS)]
        epoch = share(results, lambda value: isinstance(value, int))
        locale = share(results, lambda value: isinstance(value, str) and value != ISO_TS)
        unchanged = share(results, lambda value: value == ISO_TS)
        assert 0.05 <= epoch <= 0.15
        assert 0.05 <= locale <= 0.15
        assert 0.75 <= unchanged <= 0.85

    def test_date_mangle_epoch_value(self):
        class LowDraw(random.Random):
            def random(self):
                return 0.05

        expected = int(datetime(2024, 3, 15, 10, 30).timestamp() * 1000)
        assert maybe_mangle_date(ISO_TS, LowDraw()) == expected
        utc = maybe_mangle_date("2024-03-15T10:30:00Z", LowDraw())
        assert utc == 1710498600000

    def test_geo_mangle_buckets(self, rng):
        coord = 45.0
        results = [maybe_mangle_geo(coord, rng) for _ in range(TRIALS)]
        offset = share(results, lambda value: coord < value < coord + 0.001)
        shifted = share(results, lambda value: value == coord + 180)
        unchanged = share(results, lambda value: value == coord)
        assert 0.05 <= offset <= 0.15
        assert 0.0 < shifted <= 0.10
        assert 0.80 <= unchanged <= 0.90

    def test_geo_shift_direction(self):
        class MidDraw(random.Random):
            def random(self):
                return 0.12

        assert maybe_mangle_geo(-10.0, MidDraw()) == -190.0
        assert maybe_mangle_geo(0.0, MidDraw()) == 180.0
        assert maybe_mangle_geo(10.0, MidDraw()) == 190.0

    def test_mangle_name_distribution(self, rng):
        variants = ["Sale Date", "Date of Sale", "Sale Dt"]
        names = [mangle_name(variants, rng) for _ in range(TRIALS)]
        assert set(names) == {"sale_date", "date_of_sale", "sale_dt"}
        assert 0.28 <= share(names, lambda name: name == "sale_date") <= 0.38

    def test_mangle_name_requires_candidates(self, rng):
        with pytest.raises(ValueError):
            mangle_name([], rng)


class TestValueOperators:
    def test_jitter_only_touches_named_column(self, table, rng):
        result = jitter_float_columns(table, {"Amount"}, rng)
        assert result.rows[1] == table.rows[1]
        assert result.rows[2] == table.rows[2]
        assert result.rows[4] == table.rows[4]
        assert any(value != 100.25 for value in result.rows[3])
        assert all(value >= 100.25 for value in result.rows[3])

    def test_operators_do_not_modify_input(self, table, rng):
        before = table.copy()
        jitter_float_columns(table, {"Amount"}, rng)
        mangle_date_columns(table, {"Transaction Date"}, rng)
        mangle_geo_columns(table, {"Latitude"}, rng)
        assert table.rows == before.rows

    def test_row_count_and_order_preserved(self, table, rng):
        result = mangle_geo_columns(
            mangle_date_columns(table, {"Transaction Date"}, rng), {"Latitude"}, rng
        )
        assert result.row_count == table.row_count
        assert result.rows[1] == table.rows[1]
        assert result.header == table.header

    def test_date_column_mangled(self, table, rng):
        result = mangle_date_columns(table, {"Transaction Date"}, rng)
        assert any(isinstance(value, int) for value in result.rows[2])

    def test_geo_values_can_leave_valid_range(self, table, rng):
        result = mangle_geo_columns(table, {"Latitude"}, rng)
        assert any(value == -213.5 for value in result.rows[4])

    def test_columns_addressed_by_id_not_header(self, rng):
        table = Table(
            rows=[["Amount", "Amount"], [1.0] * 100, [2.0] * 100],
            column_ids=["ID", "Amount"],
        )
        result = jitter_float_columns(table, {"Amount"}, rng)
        assert result.rows[1] == [1.0] * 100
        assert any(value > 2.0 for value in result.rows[2])

    def test_unknown_column_raises(self, table, rng):
        with pytest.raises(ColumnLookupError, match="Missing"):
            jitter_float_columns(table, {"Missing"}, rng)

    def test_row_major_rejected(self, rng):
        table = Table(rows=[["A"], [1.0]], orientation=Orientation.ROW_MAJOR)
        with pytest.raises(ValueError, match="column-major"):
            jitter_float_columns(table, {"A"}, rng)


class TestRenameColumns:
    def test_rename_uses_snake_cased_candidate(self, table, specs, rng):
        allowed = {"transaction_date", "txn_date", "date_of_transaction"}
        seen = set()
        for _ in range(200):
            result = rename_columns(table, {"Transaction Date"}, specs, rng)
            assert result.header[1] in allowed
            assert result.header[1] != table.header[1]
            seen.add(result.header[1])
        assert seen == allowed

    def test_rename_keeps_values_and_positions(self, table, specs, rng):
        result = rename_columns(table, {"Transaction Date", "Amount"}, specs, rng)
        assert result.rows[1:] == table.rows[1:]
        assert result.column_ids == table.column_ids
        assert result.header[0] == "Id"
        assert result.header[3] == "Latitude"
        assert table.header[1] == "TransactionDate"

    def test_unknown_spec_raises(self, table, specs, rng):
        with pytest.raises(ColumnLookupError, match="No column specification"):
            rename_columns(table, {"Nope"}, specs, rng)

    def test_spec_without_column_raises(self, table, specs, rng):
        extra = [*specs, ColumnSpec(name="Merchant", category="company", kind="company")]
        with pytest.raises(ColumnLookupError):
            rename_columns(table, {"Merchant"}, extra, rng)

    def test_collision_raises(self, rng):
        specs = [
            ColumnSpec(name="ID", category="misc", kind="uuid4"),
            ColumnSpec(name="Amount", variants=("Value",), category="python", kind="pyfloat"),
            ColumnSpec(name="Value", category="python", kind="pyfloat"),
        ]
        table = Table(
            rows=[["Id", "Amount", "value"], [1], [2.0], [3.0]],
            column_ids=["ID", "Amount", "Value"],
        )
        with pytest.raises(ColumnNameCollisionError):
            for _ in range(100):
                rename_columns(table, {"Amount"}, specs, rng)


class TestReorderColumns:
    def test_identity_column_stays_first(self, table, rng):
        for _ in range(50):
            result = reorder_columns(table, rng)
            assert result.header[0] == "Id"
            assert result.rows[1] == table.rows[1]

    def test_header_and_values_move_together(self, table, rng):
        result = reorder_columns(table, rng)
        assert sorted(result.header) == sorted(table.header)
        for column_id in table.column_ids:
            assert result.column_values(column_id) == table.column_values(column_id)
            assert result.header[result.column_index(column_id)] == table.header[
                table.column_index(column_id)
            ]

    def test_wide_tables_are_shuffled(self, rng):
        width = 30
        table = Table(rows=[[f"C{i}" for i in range(width)], *([i] for i in range(width))])
        result = reorder_columns(table, rng)
        assert result.header != table.header
        assert set(result.header) == set(table.header)

    def test_shuffle_covers_permutations(self, rng):
        orders = {tuple(shuffled_column_order(4, rng)) for _ in range(500)}
        assert len(orders) == 6
        assert all(order[0] == 0 for order in orders)

    def test_small_tables(self, rng):
        assert shuffled_column_order(0, rng) == []
        assert shuffled_column_order(1, rng) == [0]
        assert shuffled_column_order(2, rng) == [0, 1]

    def test_apply_column_order(self, table):
        result = apply_column_order(table, [0, 3, 1, 2])
        assert result.header == ["Id", "Latitude", "TransactionDate", "Amount"]
        assert result.column_ids == ["ID", "Latitude", "Transaction Date", "Amount"]
        assert result.rows[2] == table.rows[4]

    def test_apply_column_order_validation(self, table):
        with pytest.raises(ValueError, match="permutation"):
            apply_column_order(table, [0, 1, 1, 2])
        with pytest.raises(ValueError, match="identity column"):
            apply_column_order(table, [1, 0, 2, 3])
