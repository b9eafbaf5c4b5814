"""Unique index descriptor."""

from dataclasses import dataclass, replace

from sqlschema.exceptions import ConstraintError
from sqlschema.formatter import SQLFormatter
from sqlschema.types import ColumnName, ConstraintType, TableName


@dataclass(frozen=True)
class UniqueIndex:
    """
    Unique index over one or more columns of a table.

    Preferred over UniqueConstraint when emitting DDL: SQLite can drop a
    unique index by name, but dropping a unique constraint requires
    recreating the table.
    """

    table_name: TableName
    column_names: tuple[ColumnName, ...]
    override_name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "column_names", tuple(self.column_names))
        if not self.column_names:
            raise ConstraintError(
                f"Unique index on '{self.table_name}' requires at least one column"
            )

    def name(self) -> str:
        """Return the explicit name, or `uq_<table>_<col1>_<col2>...`."""
        if self.override_name:
            return self.override_name
        return "_".join(
            [str(ConstraintType.UNIQUE), self.table_name, *self.column_names]
        )

    def named(self, name: str) -> "UniqueIndex":
        return replace(self, override_name=name)

    def columns(self) -> list[ColumnName]:
        return list(self.column_names)

    def to_create_sql(self, fmter: SQLFormatter) -> bytes:
        sql = bytearray(b"CREATE UNIQUE INDEX IF NOT EXISTS ")
        sql = fmter.append_ident(sql, self.name())
        sql += b" ON "
        sql = fmter.append_ident(sql, str(self.table_name))
        sql += b" ("
        for i, column in enumerate(self.column_names):
            if i > 0:
                sql += b", "
            sql = fmter.append_ident(sql, str(column))
        sql += b")"
        return bytes(sql)

    def to_drop_sql(self, fmter: SQLFormatter) -> bytes:
        sql = bytearray(b"DROP INDEX IF EXISTS ")
        sql = fmter.append_ident(sql, self.name())
        return bytes(sql)
