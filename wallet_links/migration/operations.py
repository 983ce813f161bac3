"""Paired upgrade/downgrade schema operations.

Every structural step is written together with its inverse, so a
:class:`SchemaChange` can be reverted without relying on autogenerated
downgrades. Operations drive an Alembic ``op``-like object and never touch
row data; one-way data changes live in :mod:`wallet_links.migration.backfill`.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.types import TypeEngine

from wallet_links.migration.errors import ConstraintViolation, MigrationStepError
from wallet_links.migration.predicates import NotNullPredicate

logger = logging.getLogger(__name__)


class SchemaOps(Protocol):
    """Subset of ``alembic.op`` used by the operations below."""

    def add_column(self, table_name: str, column: sa.Column, **kw: Any) -> Any: ...

    def drop_column(self, table_name: str, column_name: str, **kw: Any) -> Any: ...

    def create_index(
        self,
        index_name: str,
        table_name: str,
        columns: Sequence[str],
        *,
        unique: bool = False,
        **kw: Any,
    ) -> Any: ...

    def drop_index(self, index_name: str, table_name: str | None = None, **kw: Any) -> Any: ...


class Operation(Protocol):
    """A structural step with an explicit inverse."""

    def upgrade(self, ops: SchemaOps) -> None: ...

    def downgrade(self, ops: SchemaOps) -> None: ...

    def describe(self) -> str: ...


@dataclass(frozen=True)
class AddColumn:
    """Add a column on upgrade, drop it on downgrade."""

    table: str
    name: str
    type_: TypeEngine = field(default_factory=sa.String)
    nullable: bool = True

    def upgrade(self, ops: SchemaOps) -> None:
        # Column objects bind to a Table once; build a fresh one per call
        ops.add_column(self.table, sa.Column(self.name, self.type_, nullable=self.nullable))

    def downgrade(self, ops: SchemaOps) -> None:
        ops.drop_column(self.table, self.name)

    def describe(self) -> str:
        null = "NULL" if self.nullable else "NOT NULL"
        return f"add column {self.table}.{self.name} {self.type_} {null}"


@dataclass(frozen=True)
class CreateIndex:
    """Create an index on upgrade, drop it on downgrade."""

    name: str
    table: str
    columns: tuple[str, ...]
    unique: bool = False
    where: NotNullPredicate | None = None

    def upgrade(self, ops: SchemaOps) -> None:
        kwargs = self.where.dialect_kwargs() if self.where is not None else {}
        try:
            ops.create_index(
                self.name, self.table, list(self.columns), unique=self.unique, **kwargs
            )
        except IntegrityError as exc:
            if not self.unique:
                raise
            raise ConstraintViolation(self.describe(), self.name, self.columns) from exc

    def downgrade(self, ops: SchemaOps) -> None:
        ops.drop_index(self.name, table_name=self.table)

    def describe(self) -> str:
        kind = "unique index" if self.unique else "index"
        text = f"create {kind} {self.name} on {self.table} ({', '.join(self.columns)})"
        if self.where is not None:
            text += f" where {self.where}"
        return text


@dataclass(frozen=True)
class DropIndex:
    """Drop an index on upgrade and recreate it, as described, on downgrade."""

    name: str
    table: str
    columns: tuple[str, ...]
    unique: bool = False
    where: NotNullPredicate | None = None

    @property
    def index(self) -> CreateIndex:
        return CreateIndex(self.name, self.table, self.columns, self.unique, self.where)

    def upgrade(self, ops: SchemaOps) -> None:
        self.index.downgrade(ops)

    def downgrade(self, ops: SchemaOps) -> None:
        self.index.upgrade(ops)

    def describe(self) -> str:
        return f"drop index {self.name} on {self.table}"


@dataclass(frozen=True)
class SchemaChange:
    """Ordered structural steps applied forwards and reverted backwards."""

    name: str
    steps: tuple[Operation, ...]

    def upgrade(self, ops: SchemaOps) -> None:
        logger.info("Applying schema change %s (%d steps)", self.name, len(self.steps))
        for step in self.steps:
            self._run(step, step.upgrade, ops, "Applying")

    def downgrade(self, ops: SchemaOps) -> None:
        logger.info("Reverting schema change %s (%d steps)", self.name, len(self.steps))
        for step in reversed(self.steps):
            self._run(step, step.downgrade, ops, "Reverting")

    def _run(
        self,
        step: Operation,
        action: Callable[[SchemaOps], None],
        ops: SchemaOps,
        verb: str,
    ) -> None:
        description = step.describe()
        logger.info("%s: %s", verb, description)
        try:
            action(ops)
        except ConstraintViolation:
            logger.error("%s failed on existing data: %s", verb, description)
            raise
        except SQLAlchemyError as exc:
            logger.error("%s failed: %s (%s)", verb, description, exc)
            raise MigrationStepError(description, f"{verb} '{description}' failed: {exc}") from exc
