"""Row predicates attached to partial indexes."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import TextClause, text


@dataclass(frozen=True)
class NotNullPredicate:
    """Conjunction of ``IS NOT NULL`` checks over a fixed set of columns.

    Used as the filter of a partial index: only rows for which every column
    is non-null take part in the index. Databases without partial index
    support can call :meth:`matches` to enforce the same rule in
    application code.
    """

    columns: tuple[str, ...]

    def __init__(self, *columns: str) -> None:
        if not columns:
            raise ValueError("NotNullPredicate requires at least one column")
        object.__setattr__(self, "columns", tuple(columns))

    def sql(self) -> str:
        """Render the predicate as a SQL boolean expression."""
        return " AND ".join(f"{column} IS NOT NULL" for column in self.columns)

    def clause(self) -> TextClause:
        return text(self.sql())

    def dialect_kwargs(self) -> dict[str, TextClause]:
        """Keyword arguments that turn an index into a partial index."""
        clause = self.clause()
        return {"postgresql_where": clause, "sqlite_where": clause}

    def matches(self, row: Mapping[str, Any]) -> bool:
        """Whether ``row`` participates in an index filtered by this predicate."""
        return all(row.get(column) is not None for column in self.columns)

    def __str__(self) -> str:
        return self.sql()
