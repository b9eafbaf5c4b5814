"""Tests for sqlschema.exceptions module."""

import pytest

from sqlschema.exceptions import (
    ConfigError,
    ConstraintError,
    DiffError,
    SchemaLoadError,
    SqlSchemaError,
)


class TestExceptionHierarchy:
    """Tests for exception hierarchy."""

    def test_exception_hierarchy(self):
        """All exceptions inherit from SqlSchemaError."""
        assert issubclass(ConstraintError, SqlSchemaError)
        assert issubclass(SchemaLoadError, SqlSchemaError)
        assert issubclass(DiffError, SqlSchemaError)
        assert issubclass(ConfigError, SqlSchemaError)

    def test_base_error_is_exception(self):
        assert issubclass(SqlSchemaError, Exception)

    def test_exceptions_can_be_raised_and_caught(self):
        with pytest.raises(SqlSchemaError):
            raise ConstraintError("Primary key requires at least one column")

        with pytest.raises(SqlSchemaError):
            raise ConfigError("Unknown dialect")
