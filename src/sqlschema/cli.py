"""Command-line interface for sqlschema."""

import argparse
import logging
import sys
from pathlib import Path

from sqlschema.config import Config
from sqlschema.exceptions import ConfigError
from sqlschema.schema.constraints import UniqueConstraint
from sqlschema.schema.diff import ConstraintDiffer, render_change
from sqlschema.schema.loader import load_schema


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    parser = argparse.ArgumentParser(
        prog="sqlschema",
        description="Render and diff SQL table constraints",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser(
        "validate", help="Validate constraint declarations"
    )
    validate_parser.add_argument("--schema-path", type=Path)

    render_parser = subparsers.add_parser("render", help="Render constraint DDL")
    render_parser.add_argument("--schema-path", type=Path)
    render_parser.add_argument("--dialect", help="Identifier quoting dialect")
    render_parser.add_argument(
        "--drop",
        action="store_true",
        help="Render DROP CONSTRAINT statements instead of definitions",
    )
    render_parser.add_argument(
        "--unique-as-index",
        action="store_true",
        help="Render unique constraints as CREATE/DROP UNIQUE INDEX statements",
    )

    diff_parser = subparsers.add_parser(
        "diff", help="Diff declared constraints against current ones"
    )
    diff_parser.add_argument(
        "--current",
        type=Path,
        required=True,
        help="Declarations describing the constraints currently in the database",
    )
    diff_parser.add_argument("--schema-path", type=Path)
    diff_parser.add_argument("--dialect", help="Identifier quoting dialect")

    args = parser.parse_args(argv)

    if args.command == "validate":
        return cmd_validate(args)
    elif args.command == "render":
        return cmd_render(args)
    return cmd_diff(args)


def _resolve_config(args: argparse.Namespace) -> Config:
    schema_path = getattr(args, "schema_path", None)
    return Config.from_env(
        dialect=getattr(args, "dialect", None),
        schema_dir=str(schema_path) if schema_path is not None else None,
    )


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate constraint declaration files."""
    try:
        config = _resolve_config(args)
        schema = load_schema(Path(config.schema_dir))
        print(f"Validated {len(schema.tables)} tables:")
        for name in sorted(schema.table_names()):
            table = schema.get_table(name)
            print(f"  - {name} ({len(table.constraints)} constraints)")
        return 0
    except Exception as e:
        print(f"Validation error: {e}", file=sys.stderr)
        return 1


def cmd_render(args: argparse.Namespace) -> int:
    """Render definition fragments or drop statements for every table.

    With --unique-as-index, unique constraints are emitted as unique indexes,
    which every dialect can drop by name.
    """
    try:
        config = _resolve_config(args)
        fmter = config.formatter()
        schema = load_schema(Path(config.schema_dir))
        unique_as_index = getattr(args, "unique_as_index", False)

        for name in sorted(schema.table_names()):
            table = schema.get_table(name)
            print(f"-- {table.name}")
            for constraint in table.constraints:
                if unique_as_index and isinstance(constraint, UniqueConstraint):
                    index = constraint.to_index(table.name).named(
                        constraint.override_name
                    )
                    if args.drop:
                        sql = index.to_drop_sql(fmter)
                    else:
                        sql = index.to_create_sql(fmter)
                elif args.drop:
                    sql = constraint.to_drop_sql(fmter, table.name)
                else:
                    sql = constraint.to_definition_sql(fmter, table.name)
                print(sql.decode("utf-8"))
        return 0
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        print(f"Render error: {e}", file=sys.stderr)
        return 1


def cmd_diff(args: argparse.Namespace) -> int:
    """Show constraint changes needed to reach the declared state."""
    try:
        config = _resolve_config(args)
        fmter = config.formatter()
        declared = load_schema(Path(config.schema_dir))
        current = load_schema(args.current)

        changes = ConstraintDiffer().diff(current, declared)

        if not changes:
            print("No changes detected")
            return 0

        print(f"Found {len(changes)} changes:")
        for change in changes:
            sql = render_change(change, fmter).decode("utf-8")
            print(f"  {change.change_type.value}: {change.table_name}: {sql}")

        return 0
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        print(f"Diff error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
