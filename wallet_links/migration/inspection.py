"""Read back the live structure of a table."""

from dataclasses import dataclass, field

import sqlalchemy as sa
from sqlalchemy.engine import Connection


@dataclass(frozen=True)
class IndexState:
    columns: tuple[str, ...]
    unique: bool


@dataclass
class TableState:
    """Columns (name -> nullable) and indexes (name -> state) of a table."""

    name: str
    columns: dict[str, bool] = field(default_factory=dict)
    indexes: dict[str, IndexState] = field(default_factory=dict)

    def has_column(self, name: str) -> bool:
        return name in self.columns

    def has_index(self, name: str) -> bool:
        return name in self.indexes


def describe_table(connection: Connection, table: str) -> TableState:
    """Inspect ``table`` through the connection's dialect."""
    inspector = sa.inspect(connection)
    state = TableState(name=table)
    for column in inspector.get_columns(table):
        state.columns[column["name"]] = bool(column["nullable"])
    for index in inspector.get_indexes(table):
        name = index["name"]
        if name is None:
            continue
        state.indexes[name] = IndexState(
            columns=tuple(c for c in index["column_names"] if c is not None),
            unique=bool(index["unique"]),
        )
    return state
