"""Table constraint values and their DDL renderers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import ClassVar, Hashable, Iterable

from sqlschema.exceptions import ConstraintError
from sqlschema.formatter import SQLFormatter
from sqlschema.schema.index import UniqueIndex
from sqlschema.types import ColumnName, ConstraintType, TableName

__all__ = [
    "Constraint",
    "PrimaryKeyConstraint",
    "ForeignKeyConstraint",
    "UniqueConstraint",
    "CONSTRAINT_CLASSES",
]


def _append_ident_list(
    fmter: SQLFormatter, sql: bytearray, idents: Iterable[str]
) -> bytearray:
    for i, ident in enumerate(idents):
        if i > 0:
            sql += b", "
        sql = fmter.append_ident(sql, str(ident))
    return sql


class Constraint(ABC):
    """
    A constraint on the columns of a table.

    Constraints are immutable. The name is autogenerated from the kind, the
    table and the columns unless an explicit name is attached with `named`,
    typically because the database already holds the constraint under a
    different name:

        - Primary keys are named `pk_<table>`.
        - Foreign keys are named `fk_<table>_<referencing_column>`.
        - Unique constraints are named `uq_<table>_<col1>_<col2>...`.
        - Check constraints would be named `ck_<table>_<name>`.

    Equality is structural and ignores the explicit name and column order,
    so a declared constraint compares equal to its introspected counterpart.
    """

    constraint_type: ClassVar[ConstraintType]
    override_name: str

    @property
    def kind(self) -> ConstraintType:
        return self.constraint_type

    def name(self, table_name: TableName) -> str:
        """Return the explicit name if one was set, else the autogenerated name."""
        if self.override_name:
            return self.override_name
        return "_".join(
            [str(self.constraint_type), table_name, *self._name_parts()]
        )

    def named(self, name: str) -> "Constraint":
        """Return a copy carrying `name` as its explicit name. "" clears it."""
        return replace(self, override_name=name)

    @abstractmethod
    def columns(self) -> list[ColumnName]:
        """Columns the constraint applies to, as a fresh list."""

    def equals(self, other: "Constraint") -> bool:
        if other.kind is not self.kind:
            return False
        return self._equality_key() == other._equality_key()

    @abstractmethod
    def to_definition_sql(self, fmter: SQLFormatter, table_name: TableName) -> bytes:
        """Render `CONSTRAINT <name> <clause>` for a CREATE TABLE body."""

    def to_drop_sql(self, fmter: SQLFormatter, table_name: TableName) -> bytes:
        """Render `ALTER TABLE <table> DROP CONSTRAINT IF EXISTS <name>`."""
        sql = bytearray(b"ALTER TABLE ")
        sql = fmter.append_ident(sql, str(table_name))
        sql += b" DROP CONSTRAINT IF EXISTS "
        sql = fmter.append_ident(sql, self.name(table_name))
        return bytes(sql)

    def _start_definition(self, fmter: SQLFormatter, table_name: TableName) -> bytearray:
        sql = bytearray(b"CONSTRAINT ")
        return fmter.append_ident(sql, self.name(table_name))

    @abstractmethod
    def _name_parts(self) -> list[str]:
        """Parts appended after `<kind>_<table>` in the autogenerated name."""

    @abstractmethod
    def _equality_key(self) -> Hashable: ...

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constraint):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self.kind, self._equality_key()))


@dataclass(frozen=True, eq=False)
class PrimaryKeyConstraint(Constraint):
    """Primary key over one or more columns. Column order is kept for rendering."""

    constraint_type: ClassVar[ConstraintType] = ConstraintType.PRIMARY_KEY

    column_names: tuple[ColumnName, ...]
    override_name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "column_names", tuple(self.column_names))
        if not self.column_names:
            raise ConstraintError("Primary key requires at least one column")

    def columns(self) -> list[ColumnName]:
        return list(self.column_names)

    def to_definition_sql(self, fmter: SQLFormatter, table_name: TableName) -> bytes:
        sql = self._start_definition(fmter, table_name)
        sql += b" PRIMARY KEY ("
        sql = _append_ident_list(fmter, sql, self.column_names)
        sql += b")"
        return bytes(sql)

    def _name_parts(self) -> list[str]:
        return []

    def _equality_key(self) -> Hashable:
        return frozenset(self.column_names)


@dataclass(frozen=True, eq=False)
class ForeignKeyConstraint(Constraint):
    """Single-column foreign key referencing one column of another table."""

    constraint_type: ClassVar[ConstraintType] = ConstraintType.FOREIGN_KEY

    referencing_column: ColumnName
    referenced_table: TableName
    referenced_column: ColumnName
    override_name: str = ""

    def columns(self) -> list[ColumnName]:
        return [self.referencing_column]

    def to_definition_sql(self, fmter: SQLFormatter, table_name: TableName) -> bytes:
        sql = self._start_definition(fmter, table_name)
        sql += b" FOREIGN KEY ("
        sql = fmter.append_ident(sql, str(self.referencing_column))
        sql += b") REFERENCES "
        sql = fmter.append_ident(sql, str(self.referenced_table))
        sql += b" ("
        sql = fmter.append_ident(sql, str(self.referenced_column))
        sql += b")"
        return bytes(sql)

    def _name_parts(self) -> list[str]:
        return [self.referencing_column]

    def _equality_key(self) -> Hashable:
        return (self.referencing_column, self.referenced_table, self.referenced_column)


@dataclass(frozen=True, eq=False)
class UniqueConstraint(Constraint):
    """
    Unique constraint over one or more columns.

    Prefer emitting `to_index()` instead: the main difference between a
    unique index and a unique constraint is semantic, but SQLite can only
    drop a unique constraint by recreating the table. The constraint kind
    remains so introspected unique constraints can still be compared.
    """

    constraint_type: ClassVar[ConstraintType] = ConstraintType.UNIQUE

    column_names: tuple[ColumnName, ...]
    override_name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "column_names", tuple(self.column_names))
        if not self.column_names:
            raise ConstraintError("Unique constraint requires at least one column")

    def columns(self) -> list[ColumnName]:
        return list(self.column_names)

    def to_index(self, table_name: TableName) -> UniqueIndex:
        return UniqueIndex(table_name=table_name, column_names=self.column_names)

    def to_definition_sql(self, fmter: SQLFormatter, table_name: TableName) -> bytes:
        sql = self._start_definition(fmter, table_name)
        sql += b" UNIQUE ("
        sql = _append_ident_list(fmter, sql, self.column_names)
        sql += b")"
        return bytes(sql)

    def _name_parts(self) -> list[str]:
        return list(self.column_names)

    def _equality_key(self) -> Hashable:
        return frozenset(self.column_names)


# ConstraintType.CHECK has no value class yet; a CheckConstraint would
# register here and name itself `ck_<table>_<name>`.
CONSTRAINT_CLASSES: dict[ConstraintType, type[Constraint]] = {
    ConstraintType.PRIMARY_KEY: PrimaryKeyConstraint,
    ConstraintType.FOREIGN_KEY: ForeignKeyConstraint,
    ConstraintType.UNIQUE: UniqueConstraint,
}
