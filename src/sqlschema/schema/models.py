"""Table and schema containers for constraint declarations."""

from dataclasses import dataclass, field
from typing import Optional

from sqlschema.schema.constraints import Constraint
from sqlschema.types import ConstraintType, TableName


@dataclass
class Table:
    """Constraints declared on, or introspected from, one table."""

    name: TableName
    constraints: list[Constraint] = field(default_factory=list)
    description: Optional[str] = None

    @property
    def primary_key(self) -> Optional[Constraint]:
        for constraint in self.constraints:
            if constraint.kind is ConstraintType.PRIMARY_KEY:
                return constraint
        return None

    def find_equal(self, constraint: Constraint) -> Optional[Constraint]:
        """Get the first constraint structurally equal to `constraint`."""
        for candidate in self.constraints:
            if candidate.equals(constraint):
                return candidate
        return None

    def constraint_names(self) -> list[str]:
        """Resolved names of all constraints, in declaration order."""
        return [c.name(self.name) for c in self.constraints]


@dataclass
class Schema:
    """Complete set of tables."""

    tables: dict[str, Table]

    def get_table(self, name: str) -> Optional[Table]:
        """Get a table by name."""
        return self.tables.get(name)

    def table_names(self) -> set[str]:
        """Get all table names."""
        return set(self.tables.keys())
