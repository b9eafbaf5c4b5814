"""Configuration management for sqlschema."""

import os
from dataclasses import dataclass
from typing import Optional

from sqlschema.formatter import SQLFormatter, get_formatter


@dataclass
class Config:
    """Configuration for sqlschema."""

    dialect: str = "postgres"
    schema_dir: str = "schema"

    @classmethod
    def from_env(
        cls,
        *,
        dialect: Optional[str] = None,
        schema_dir: Optional[str] = None,
    ) -> "Config":
        """Load configuration from env vars, with CLI overrides.

        Priority (highest to lowest):
        1. Explicit parameters (CLI args)
        2. Environment variables
        3. Defaults
        """

        def resolve(explicit, env_key, default):
            if explicit is not None:
                return explicit
            return os.environ.get(env_key, default)

        return cls(
            dialect=resolve(dialect, "SQLSCHEMA_DIALECT", cls.dialect),
            schema_dir=resolve(schema_dir, "SQLSCHEMA_SCHEMA_DIR", cls.schema_dir),
        )

    def formatter(self) -> SQLFormatter:
        """Return the identifier quoter for the configured dialect.

        Raises:
            ConfigError: If the dialect is not known.
        """
        return get_formatter(self.dialect)
