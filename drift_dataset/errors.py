"""Exception hierarchy for dataset generation and perturbation."""


class DriftDatasetError(Exception):
    """Base exception for SOURCE/TARGET dataset generation."""

    pass


class ConfigurationError(DriftDatasetError, ValueError):
    """Invalid column specification or generation parameters."""

    pass


class ColumnGenerationError(DriftDatasetError):
    """One or more columns could not be generated.

    Attributes
    ----------
    failures:
        Mapping of column name to the error raised by its generator.
    """

    def __init__(self, message: str, failures: dict[str, Exception] | None = None):
        super().__init__(message)
        self.failures = dict(failures or {})


class ReconciliationError(DriftDatasetError):
    """A requested column could not be resolved unambiguously in a table."""

    pass


class ColumnLookupError(ReconciliationError, KeyError):
    """A requested column name has no matching column."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class ColumnNameCollisionError(ReconciliationError):
    """A renamed header would duplicate another column's header."""

    pass
