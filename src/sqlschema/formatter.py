"""Identifier quoting for DDL rendering."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from sqlschema.exceptions import ConfigError

__all__ = [
    "SQLFormatter",
    "QuotingFormatter",
    "PlainFormatter",
    "DIALECT_FORMATTERS",
    "get_formatter",
]


@runtime_checkable
class SQLFormatter(Protocol):
    """Protocol for the identifier quoter consumed by constraint renderers."""

    def append_ident(self, buf: bytearray, ident: str) -> bytearray: ...


@dataclass(frozen=True)
class QuotingFormatter:
    """Wrap identifiers in a dialect's quote characters.

    Occurrences of the closing quote inside an identifier are doubled, which
    is the escape rule shared by PostgreSQL, SQLite, MySQL and SQL Server.
    """

    open_quote: str
    close_quote: str

    def append_ident(self, buf: bytearray, ident: str) -> bytearray:
        escaped = ident.replace(self.close_quote, self.close_quote * 2)
        buf += self.open_quote.encode("utf-8")
        buf += escaped.encode("utf-8")
        buf += self.close_quote.encode("utf-8")
        return buf


class PlainFormatter:
    """Append identifiers verbatim, without quoting."""

    def append_ident(self, buf: bytearray, ident: str) -> bytearray:
        buf += ident.encode("utf-8")
        return buf


DIALECT_FORMATTERS: dict[str, SQLFormatter] = {
    "postgres": QuotingFormatter('"', '"'),
    "sqlite": QuotingFormatter('"', '"'),
    "mysql": QuotingFormatter("`", "`"),
    "databricks": QuotingFormatter("`", "`"),
    "mssql": QuotingFormatter("[", "]"),
    "plain": PlainFormatter(),
}


def get_formatter(dialect: str) -> SQLFormatter:
    """Return the formatter registered for a dialect name.

    Raises:
        ConfigError: If the dialect is not known.
    """
    fmter = DIALECT_FORMATTERS.get(dialect.strip().lower())
    if fmter is None:
        raise ConfigError(
            f"Unknown dialect '{dialect}'. "
            f"Available dialects: {', '.join(sorted(DIALECT_FORMATTERS))}"
        )
    return fmter
