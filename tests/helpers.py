"""Shared test helpers for sqlschema tests."""

from sqlschema.formatter import QuotingFormatter
from sqlschema.schema.constraints import Constraint
from sqlschema.schema.models import Schema, Table


class DoubleQuoteFormatter:
    """Wrap identifiers in double quotes without escaping."""

    def append_ident(self, buf: bytearray, ident: str) -> bytearray:
        buf += b'"' + ident.encode("utf-8") + b'"'
        return buf


class RecordingFormatter:
    """Formatter that records every identifier it is asked to quote."""

    def __init__(self):
        self.idents: list[str] = []

    def append_ident(self, buf: bytearray, ident: str) -> bytearray:
        self.idents.append(ident)
        buf += f"<{ident}>".encode("utf-8")
        return buf


BACKTICK = QuotingFormatter("`", "`")


def make_schema(**tables: list[Constraint]) -> Schema:
    """Build a Schema from keyword arguments of table name -> constraints."""
    return Schema(
        tables={
            name: Table(name=name, constraints=list(constraints))
            for name, constraints in tables.items()
        }
    )


def write_yaml(directory, name: str, content: str):
    """Write a YAML file into directory and return its path."""
    path = directory / name
    path.write_text(content)
    return path
