"""sqlschema - SQL table constraints as values, rendered to DDL fragments."""

from sqlschema.formatter import PlainFormatter, QuotingFormatter, SQLFormatter
from sqlschema.schema.constraints import (
    Constraint,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    UniqueConstraint,
)
from sqlschema.schema.index import UniqueIndex
from sqlschema.types import ColumnName, ConstraintType, TableName

__version__ = "0.1.0"

__all__ = [
    "ColumnName",
    "Constraint",
    "ConstraintType",
    "ForeignKeyConstraint",
    "PlainFormatter",
    "PrimaryKeyConstraint",
    "QuotingFormatter",
    "SQLFormatter",
    "TableName",
    "UniqueConstraint",
    "UniqueIndex",
]
