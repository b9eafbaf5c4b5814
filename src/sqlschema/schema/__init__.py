"""Constraint values, declarations and diffing."""

from sqlschema.schema.constraints import (
    CONSTRAINT_CLASSES,
    Constraint,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    UniqueConstraint,
)
from sqlschema.schema.diff import ConstraintDiffer, SchemaChange, render_change
from sqlschema.schema.index import UniqueIndex
from sqlschema.schema.models import Schema, Table

__all__ = [
    "CONSTRAINT_CLASSES",
    "Constraint",
    "ConstraintDiffer",
    "ForeignKeyConstraint",
    "PrimaryKeyConstraint",
    "Schema",
    "SchemaChange",
    "Table",
    "UniqueConstraint",
    "UniqueIndex",
    "render_change",
]
