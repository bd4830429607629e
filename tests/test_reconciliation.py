"""Tests for row-count reconciliation."""

import random

import pytest

from drift_dataset.errors import ConfigurationError
from drift_dataset.foundation.table import Orientation, Table
from drift_dataset.reconciliation import reconcile_row_counts, remove_random_rows


def row_major(count, width=3):
    header = [f"C{i}" for i in range(width)]
    rows = [[f"r{r}c{c}" for c in range(width)] for r in range(count)]
    return Table(rows=[header, *rows], orientation=Orientation.ROW_MAJOR)


class TestRemoveRandomRows:
    def test_removes_requested_rows(self):
        table = row_major(8)
        rng = random.Random(42)
        for _ in range(200):
            result = remove_random_rows(table, 3, rng)
            assert result.row_count == 5
            assert result.header == table.header
            assert all(row in table.data for row in result.data)
            # remaining rows keep their relative order
            positions = [table.data.index(row) for row in result.data]
            assert positions == sorted(positions)

    def test_input_untouched(self):
        table = row_major(8)
        before = table.copy()
        remove_random_rows(table, 3, random.Random(1))
        assert table.rows == before.rows

    def test_every_row_can_be_removed(self):
        table = row_major(5)
        rng = random.Random(7)
        removed = set()
        for _ in range(200):
            kept = {row[0] for row in remove_random_rows(table, 1, rng).data}
            removed |= {row[0] for row in table.data} - kept
        assert removed == {row[0] for row in table.data}

    def test_zero_rows_is_copy(self):
        table = row_major(4)
        result = remove_random_rows(table, 0, random.Random(1))
        assert result.rows == table.rows
        assert result is not table

    def test_cannot_remove_every_data_row(self):
        with pytest.raises(ConfigurationError, match="at least one must remain"):
            remove_random_rows(row_major(3), 3, random.Random(1))

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            remove_random_rows(row_major(3), -1, random.Random(1))

    def test_column_major_rejected(self):
        table = Table(rows=[["A"], [1, 2]])
        with pytest.raises(ValueError, match="row-major"):
            remove_random_rows(table, 1, random.Random(1))


class TestReconcileRowCounts:
    def test_negative_delta_trims_target(self):
        source, target = reconcile_row_counts(row_major(10), row_major(10), -4, random.Random(1))
        assert source.row_count == 10
        assert target.row_count == 6

    def test_positive_delta_trims_source(self):
        source, target = reconcile_row_counts(row_major(10), row_major(10), 4, random.Random(1))
        assert source.row_count == 6
        assert target.row_count == 10

    def test_zero_delta_leaves_both(self):
        source_in = row_major(10)
        source, target = reconcile_row_counts(source_in, row_major(10), 0, random.Random(1))
        assert source is source_in
        assert target.row_count == 10

    def test_mismatched_inputs_rejected(self):
        with pytest.raises(ValueError, match="same number of rows"):
            reconcile_row_counts(row_major(10), row_major(9), 1, random.Random(1))
