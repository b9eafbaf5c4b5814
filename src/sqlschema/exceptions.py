"""Exception classes for sqlschema."""

__all__ = [
    "SqlSchemaError",
    "ConstraintError",
    "SchemaLoadError",
    "DiffError",
    "ConfigError",
]


class SqlSchemaError(Exception):
    """Base exception for sqlschema."""


class ConstraintError(SqlSchemaError):
    """Constraint or index constructed from ill-formed input."""


class SchemaLoadError(SqlSchemaError):
    """Error loading constraint declaration files."""


class DiffError(SqlSchemaError):
    """Error computing constraint diff."""


class ConfigError(SqlSchemaError):
    """Error in configuration."""
