"""Exceptions raised while applying schema changes and backfills."""

from collections.abc import Sequence


class MigrationError(Exception):
    """Base class for migration failures."""


class MigrationStepError(MigrationError):
    """Raised when a structural step is rejected by the database."""

    def __init__(self, step: str, message: str | None = None):
        self.step = step
        super().__init__(message or f"Migration step failed: {step}")


class ConstraintViolation(MigrationStepError):
    """Raised when existing rows violate a unique index being created."""

    def __init__(self, step: str, index_name: str, columns: Sequence[str]):
        self.index_name = index_name
        self.columns = tuple(columns)
        super().__init__(
            step,
            f"Existing rows violate unique index '{index_name}' "
            f"on ({', '.join(self.columns)}); deduplicate before re-running",
        )


class BackfillError(MigrationError):
    """Raised when the bulk backfill statement fails."""

    def __init__(self, table: str):
        self.table = table
        super().__init__(f"Backfill of '{table}' failed")
