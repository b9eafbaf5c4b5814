"""Core type definitions for sqlschema."""

from enum import Enum
from typing import NewType

TableName = NewType("TableName", str)
ColumnName = NewType("ColumnName", str)

__all__ = [
    "TableName",
    "ColumnName",
    "ConstraintType",
    "ChangeType",
]


class ConstraintType(Enum):
    """Kinds of table constraints. The value is the prefix used in auto-naming."""

    PRIMARY_KEY = "pk"
    FOREIGN_KEY = "fk"
    UNIQUE = "uq"
    CHECK = "ck"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> "ConstraintType":
        """Resolve a short code ("pk") or long spelling ("primary_key")."""
        normalized = value.strip().lower()
        for kind in cls:
            if normalized in (kind.value, kind.name.lower()):
                return kind
        raise ValueError(f"Unknown constraint type: {value!r}")


class ChangeType(Enum):
    """Types of constraint changes detected by the differ."""

    ADD_CONSTRAINT = "add_constraint"
    DROP_CONSTRAINT = "drop_constraint"
