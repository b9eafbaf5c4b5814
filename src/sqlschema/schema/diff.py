"""Compare constraint declarations and generate changes."""

import logging
from dataclasses import dataclass

from sqlschema.exceptions import DiffError
from sqlschema.formatter import SQLFormatter
from sqlschema.schema.constraints import Constraint
from sqlschema.schema.models import Schema, Table
from sqlschema.types import ChangeType, ConstraintType, TableName

logger = logging.getLogger(__name__)


@dataclass
class SchemaChange:
    """Represents a single constraint change."""

    change_type: ChangeType
    table_name: TableName
    constraint: Constraint
    is_destructive: bool = False


class ConstraintDiffer:
    """Compare current (introspected) constraints against declared ones.

    Constraints are matched by structural equality, so a declared constraint
    that exists in the database under another name or with a different
    column order is not reported.
    """

    def diff(self, current: Schema, declared: Schema) -> list[SchemaChange]:
        """Compare current (DB) to declared and return changes."""
        changes: list[SchemaChange] = []

        for table_name in sorted(declared.table_names() - current.table_names()):
            table = declared.get_table(table_name)
            for constraint in table.constraints:
                changes.append(self._add(table.name, constraint))

        for table_name in sorted(declared.table_names() & current.table_names()):
            changes.extend(
                self._diff_table(
                    current.get_table(table_name), declared.get_table(table_name)
                )
            )

        ordered = self._order_changes(changes)
        logger.debug(f"Computed {len(ordered)} constraint changes")
        return ordered

    def _diff_table(self, current: Table, declared: Table) -> list[SchemaChange]:
        """Compare the constraints of two versions of one table."""
        if current.name != declared.name:
            raise DiffError(
                f"Cannot diff table '{current.name}' against table '{declared.name}'"
            )

        changes: list[SchemaChange] = []

        for constraint in current.constraints:
            if declared.find_equal(constraint) is None:
                # Keep the current constraint so the drop targets the real name.
                changes.append(
                    SchemaChange(
                        change_type=ChangeType.DROP_CONSTRAINT,
                        table_name=current.name,
                        constraint=constraint,
                        is_destructive=True,
                    )
                )

        for constraint in declared.constraints:
            if current.find_equal(constraint) is None:
                changes.append(self._add(declared.name, constraint))

        return changes

    def _add(self, table_name: TableName, constraint: Constraint) -> SchemaChange:
        return SchemaChange(
            change_type=ChangeType.ADD_CONSTRAINT,
            table_name=table_name,
            constraint=constraint,
        )

    def _order_changes(self, changes: list[SchemaChange]) -> list[SchemaChange]:
        """Order changes by dependency (drops first, foreign keys around keys)."""
        order = {
            (ChangeType.DROP_CONSTRAINT, ConstraintType.FOREIGN_KEY): 0,
            (ChangeType.DROP_CONSTRAINT, ConstraintType.UNIQUE): 1,
            (ChangeType.DROP_CONSTRAINT, ConstraintType.PRIMARY_KEY): 2,
            (ChangeType.ADD_CONSTRAINT, ConstraintType.PRIMARY_KEY): 3,
            (ChangeType.ADD_CONSTRAINT, ConstraintType.UNIQUE): 4,
            (ChangeType.ADD_CONSTRAINT, ConstraintType.FOREIGN_KEY): 5,
        }
        return sorted(
            changes, key=lambda c: order.get((c.change_type, c.constraint.kind), 99)
        )


def render_change(change: SchemaChange, fmter: SQLFormatter) -> bytes:
    """Render the drop statement or the definition fragment for a change."""
    if change.change_type is ChangeType.DROP_CONSTRAINT:
        return change.constraint.to_drop_sql(fmter, change.table_name)
    if change.change_type is ChangeType.ADD_CONSTRAINT:
        return change.constraint.to_definition_sql(fmter, change.table_name)
    raise DiffError(f"No renderer for {change.change_type}")
