"""Spanner table definition models and DDL rendering.

Usage:
    from gql_spansql.ddl import CreateTable, render_create_table
"""

from gql_spansql.ddl.models import (
    MAX_LENGTH,
    ColumnDef,
    ColumnType,
    CreateTable,
    KeyPart,
    TypeBase,
)
from gql_spansql.ddl.render import (
    quote_identifier,
    render_column,
    render_create_table,
    render_statements,
)

__all__ = [
    "MAX_LENGTH",
    "ColumnDef",
    "ColumnType",
    "CreateTable",
    "KeyPart",
    "TypeBase",
    "quote_identifier",
    "render_column",
    "render_create_table",
    "render_statements",
]
