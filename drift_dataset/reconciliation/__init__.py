"""Row-count reconciliation between SOURCE and TARGET tables."""

from .rows import reconcile_row_counts, remove_random_rows

__all__ = ["reconcile_row_counts", "remove_random_rows"]
