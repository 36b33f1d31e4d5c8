"""CLI for generating Spanner DDL from GraphQL schemas.

Usage:
    gql-spansql convert -s 'schema/*.graphql'
    gql-spansql convert -s a.graphql,b.graphql --table-case snake -o schema.sql
    cat schema.graphql | gql-spansql convert --loose
    gql-spansql inspect -s 'schema/*.graphql' --created-column-name createdAt

Commands:
    convert  - Print CREATE TABLE statements for every object type
    inspect  - Summarize the tables, keys and columns that would be generated

Options not given on the command line fall back to the ``[converter]`` table
of ``gql-spansql.toml`` (or the file passed with ``--config``).
"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gql_spansql.config.loader import load_config, merge_options
from gql_spansql.config.models import ConverterConfig
from gql_spansql.converter.converter import Converter
from gql_spansql.ddl.render import render_statements
from gql_spansql.errors import ConfigurationError, ConversionError, SchemaLoadError
from gql_spansql.schema.loader import (
    SchemaSource,
    load_schema,
    load_sources,
    read_stdin_source,
    split_patterns,
)
from gql_spansql.schema.models import GraphQLSchema

console = Console(stderr=True)


# ============================================================================
# Shared helpers
# ============================================================================


def _read_sources(args: argparse.Namespace) -> list[SchemaSource]:
    """Read schema sources from ``-s`` patterns, or stdin when none given."""
    if args.schemas:
        return load_sources(split_patterns(args.schemas))

    source = read_stdin_source(sys.stdin)
    if source is None:
        raise SchemaLoadError("No schema given: pass -s or pipe a schema on stdin")
    return [source]


def _build_config(args: argparse.Namespace) -> ConverterConfig:
    """Merge config-file options with command-line overrides."""
    config_path = Path(args.config) if args.config else None
    file_options = load_config(config_path)

    overrides = {
        "loose": args.loose,
        "created_column_name": args.created_column_name,
        "updated_column_name": args.updated_column_name,
        "table_case": args.table_case,
        "column_case": args.column_case,
    }
    return merge_options(file_options, overrides)


def _prepare(args: argparse.Namespace) -> tuple[GraphQLSchema, ConverterConfig]:
    # Configuration errors surface before any input is read.
    config = _build_config(args)
    schema = load_schema(_read_sources(args))
    return schema, config


# ============================================================================
# Commands
# ============================================================================


def cmd_convert(args: argparse.Namespace) -> int:
    """Print (or write) CREATE TABLE statements.

    Nothing is written unless every table converts.

    Args:
        args: Parsed CLI arguments.

    Returns:
        0 on success, 1 on failure.
    """
    try:
        schema, config = _prepare(args)
        tables = Converter(schema, config).convert_schema()
    except (ConfigurationError, SchemaLoadError, ConversionError, FileNotFoundError) as e:
        console.print(f"[bold red]x[/bold red] {escape(str(e))}")
        return 1

    sql = render_statements(tables)

    if args.output:
        try:
            Path(args.output).write_text(sql)
        except OSError as e:
            console.print(f"[bold red]x[/bold red] {escape(str(e))}")
            return 1
        console.print(
            f"[bold green]v[/bold green] Wrote {len(tables)} table(s) to "
            f"[cyan]{args.output}[/cyan]"
        )
    else:
        sys.stdout.write(sql)

    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    """Show a summary of the tables that would be generated.

    Args:
        args: Parsed CLI arguments.

    Returns:
        0 on success, 1 on failure.
    """
    try:
        schema, config = _prepare(args)
        converter = Converter(schema, config)
        rows = []
        for definition in converter.table_types():
            key = converter.detect_pk(definition.name, definition.fields)
            table = converter.convert_definition(definition)
            rows.append((definition.name, table, key.found))
    except (ConfigurationError, SchemaLoadError, ConversionError, FileNotFoundError) as e:
        console.print(f"[bold red]x[/bold red] {escape(str(e))}")
        return 1

    table_view = Table(title="Spanner Tables", show_header=True, header_style="bold")
    table_view.add_column("Type")
    table_view.add_column("Table")
    table_view.add_column("Primary Key")
    table_view.add_column("Key Source")
    table_view.add_column("Columns", justify="right")

    for type_name, table, found in rows:
        table_view.add_row(
            type_name,
            f"[bold cyan]{table.name}[/bold cyan]",
            ", ".join(k.column for k in table.primary_key),
            "field" if found else "[yellow]synthesized[/yellow]",
            str(len(table.columns)),
        )

    Console().print(table_view)

    return 0


# ============================================================================
# Main entry point
# ============================================================================


def _add_conversion_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-s",
        "--schema",
        dest="schemas",
        default=None,
        help="Comma-separated glob patterns of schema files (default: stdin)",
    )
    parser.add_argument(
        "--loose",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Loose type check: allow nullable elements in list fields",
    )
    parser.add_argument(
        "--created-column-name",
        default=None,
        help="If not empty, add this column as a created-at TIMESTAMP column",
    )
    parser.add_argument(
        "--updated-column-name",
        default=None,
        help="If not empty, add this column as an updated-at TIMESTAMP column",
    )
    parser.add_argument(
        "--table-case",
        default=None,
        help="snake, lowercamel or uppercamel. If empty, no conversion",
    )
    parser.add_argument(
        "--column-case",
        default=None,
        help="snake, lowercamel or uppercamel. If empty, no conversion",
    )


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Parses command line arguments and dispatches to appropriate handler.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        prog="gql-spansql",
        description="Generate Spanner CREATE TABLE statements from a GraphQL schema",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a TOML config file (default: ./gql-spansql.toml if present)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log conversion decisions to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # convert command
    p_convert = subparsers.add_parser(
        "convert",
        help="Print CREATE TABLE statements",
    )
    _add_conversion_arguments(p_convert)
    p_convert.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write DDL to this file instead of stdout",
    )
    p_convert.set_defaults(func=cmd_convert)

    # inspect command
    p_inspect = subparsers.add_parser(
        "inspect",
        help="Summarize the tables that would be generated",
    )
    _add_conversion_arguments(p_inspect)
    p_inspect.set_defaults(func=cmd_inspect)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
