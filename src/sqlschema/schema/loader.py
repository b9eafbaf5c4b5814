"""Load constraint declarations from YAML files."""

import logging
from pathlib import Path

import yaml

from sqlschema.exceptions import ConstraintError, SchemaLoadError
from sqlschema.schema.constraints import (
    Constraint,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    UniqueConstraint,
)
from sqlschema.schema.models import Schema, Table
from sqlschema.types import ColumnName, ConstraintType, TableName

logger = logging.getLogger(__name__)

VALID_TABLE_FIELDS = {
    "table",
    "description",
    "constraints",
}

VALID_CONSTRAINT_FIELDS = {
    "type",
    "name",
    "columns",
    "column",
    "references",
}

VALID_REFERENCE_FIELDS = {
    "table",
    "column",
}


def load_schema(schema_path: Path) -> Schema:
    """Load schema from a directory of YAML files or a single file."""
    if schema_path.is_file():
        schema = _load_single_file(schema_path)
    elif schema_path.is_dir():
        schema = _load_directory(schema_path)
    else:
        raise SchemaLoadError(f"Schema path does not exist: {schema_path}")
    logger.debug(f"Loaded {len(schema.tables)} tables from {schema_path}")
    return schema


def _load_directory(directory: Path) -> Schema:
    """Load schema from a directory of YAML files."""
    tables: dict[str, Table] = {}
    for yaml_file in sorted(p for p in directory.glob("*.yaml") if p.is_file()):
        table = _parse_table_yaml(yaml_file)
        if table.name in tables:
            raise SchemaLoadError(
                f"Duplicate table name '{table.name}' found in directory"
            )
        tables[table.name] = table
    return Schema(tables=tables)


def _load_single_file(file_path: Path) -> Schema:
    """Load schema from a single YAML file."""
    data = _read_yaml(file_path)

    if "tables" in data:
        tables: dict[str, Table] = {}
        table_list = data.get("tables") or []
        if not isinstance(table_list, list):
            raise SchemaLoadError(f"'tables' must be a list in {file_path}")
        for table_data in table_list:
            table = _parse_table_dict(table_data)
            if table.name in tables:
                raise SchemaLoadError(f"Duplicate table name '{table.name}' in file")
            tables[table.name] = table
        return Schema(tables=tables)
    else:
        table = _parse_table_dict(data)
        return Schema(tables={table.name: table})


def _parse_table_yaml(file_path: Path) -> Table:
    """Parse a table definition from a YAML file."""
    return _parse_table_dict(_read_yaml(file_path))


def _read_yaml(file_path: Path) -> dict:
    try:
        with open(file_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML in {file_path}: {e}") from e
    except OSError as e:
        raise SchemaLoadError(f"Cannot read {file_path}: {e}") from e
    if data is None:
        raise SchemaLoadError(f"Empty YAML file: {file_path}")
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Expected a mapping at top level of {file_path}")
    return data


def _parse_table_dict(data: dict) -> Table:
    """Parse a table definition from a dictionary."""
    if not isinstance(data, dict):
        raise SchemaLoadError("Table definition must be a mapping")

    unknown_fields = set(data.keys()) - VALID_TABLE_FIELDS
    if unknown_fields:
        raise SchemaLoadError(
            f"Unknown field(s) in table definition: {', '.join(sorted(unknown_fields))}"
        )

    name = data.get("table")
    if not name:
        raise SchemaLoadError("Table definition missing 'table' field")
    table_name = TableName(str(name))

    constraints = [
        _parse_constraint(table_name, c) for c in data.get("constraints") or []
    ]

    seen = set()
    for constraint in constraints:
        cname = constraint.name(table_name)
        if cname in seen:
            raise SchemaLoadError(
                f"Duplicate constraint name '{cname}' in table '{table_name}'"
            )
        seen.add(cname)

    return Table(
        name=table_name,
        constraints=constraints,
        description=data.get("description"),
    )


def _parse_constraint(table_name: TableName, data: dict) -> Constraint:
    """Parse a constraint definition from a dictionary."""
    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Constraint definition in table '{table_name}' must be a mapping"
        )

    unknown_fields = set(data.keys()) - VALID_CONSTRAINT_FIELDS
    if unknown_fields:
        raise SchemaLoadError(
            f"Unknown field(s) in constraint definition: {', '.join(sorted(unknown_fields))}"
        )

    type_value = data.get("type")
    if not type_value:
        raise SchemaLoadError(
            f"Constraint definition in table '{table_name}' missing 'type' field"
        )
    try:
        kind = ConstraintType.from_string(str(type_value))
    except ValueError as e:
        raise SchemaLoadError(str(e)) from e

    try:
        if kind is ConstraintType.PRIMARY_KEY:
            constraint: Constraint = PrimaryKeyConstraint(
                column_names=_parse_columns(table_name, kind, data)
            )
        elif kind is ConstraintType.UNIQUE:
            constraint = UniqueConstraint(
                column_names=_parse_columns(table_name, kind, data)
            )
        elif kind is ConstraintType.FOREIGN_KEY:
            constraint = _parse_foreign_key(table_name, data)
        else:
            raise SchemaLoadError(
                f"Constraint type '{kind.value}' is not supported (table '{table_name}')"
            )
    except ConstraintError as e:
        raise SchemaLoadError(f"Invalid constraint in table '{table_name}': {e}") from e

    if name := data.get("name"):
        constraint = constraint.named(str(name))
    return constraint


def _parse_columns(
    table_name: TableName, kind: ConstraintType, data: dict
) -> list[ColumnName]:
    if "column" in data or "references" in data:
        raise SchemaLoadError(
            f"'{kind.value}' constraint in table '{table_name}' takes 'columns' only"
        )
    columns = data.get("columns")
    if not isinstance(columns, list) or not columns:
        raise SchemaLoadError(
            f"'{kind.value}' constraint in table '{table_name}' requires a non-empty 'columns' list"
        )
    return [ColumnName(str(c)) for c in columns]


def _parse_foreign_key(table_name: TableName, data: dict) -> ForeignKeyConstraint:
    if "columns" in data:
        raise SchemaLoadError(
            f"Foreign key in table '{table_name}' references exactly one column; use 'column'"
        )

    column = data.get("column")
    if not column:
        raise SchemaLoadError(f"Foreign key in table '{table_name}' missing 'column' field")

    references = data.get("references")
    if not isinstance(references, dict):
        raise SchemaLoadError(
            f"Foreign key '{column}' in table '{table_name}' missing 'references' mapping"
        )
    unknown_fields = set(references.keys()) - VALID_REFERENCE_FIELDS
    if unknown_fields:
        raise SchemaLoadError(
            f"Unknown field(s) in foreign key reference: {', '.join(sorted(unknown_fields))}"
        )
    ref_table = references.get("table")
    ref_column = references.get("column")
    if not ref_table or not ref_column:
        raise SchemaLoadError(
            f"Foreign key '{column}' in table '{table_name}' requires references.table and references.column"
        )

    return ForeignKeyConstraint(
        referencing_column=ColumnName(str(column)),
        referenced_table=TableName(str(ref_table)),
        referenced_column=ColumnName(str(ref_column)),
    )
