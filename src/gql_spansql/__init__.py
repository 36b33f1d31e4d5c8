"""gql-spansql: generate Spanner CREATE TABLE DDL from a GraphQL schema.

Each GraphQL object type becomes one table. Field types map onto Spanner
column types, relations become ``<Type>Id`` key columns, and a primary key is
detected (or synthesized) per table.

Usage:
    from gql_spansql import Converter, build_config, load_schema_from_string

    schema = load_schema_from_string(sdl)
    sql = Converter(schema, build_config(table_case="snake")).spanner_sql()
"""

__version__ = "0.1.0"

# Config
from gql_spansql.config.loader import build_config, load_config
from gql_spansql.config.models import ConverterConfig

# Converter
from gql_spansql.converter.converter import Converter, DetectedKey

# DDL
from gql_spansql.ddl.models import ColumnDef, ColumnType, CreateTable, KeyPart, TypeBase
from gql_spansql.ddl.render import render_create_table, render_statements

# Errors
from gql_spansql.errors import (
    ConfigurationError,
    ConversionError,
    CyclicKeyReferenceError,
    NestedListNotSupportedError,
    NullableArrayElementNotAllowedError,
    SchemaLoadError,
    UnknownScalarError,
    UnsupportedMultiColumnRelationError,
)

# Naming
from gql_spansql.naming import Case, convert_case, detect_case, normalize_case

# Schema
from gql_spansql.schema.loader import load_schema, load_schema_from_string, load_sources
from gql_spansql.schema.models import GraphQLSchema

__all__ = [
    # Config
    "build_config",
    "load_config",
    "ConverterConfig",
    # Converter
    "Converter",
    "DetectedKey",
    # DDL
    "ColumnDef",
    "ColumnType",
    "CreateTable",
    "KeyPart",
    "TypeBase",
    "render_create_table",
    "render_statements",
    # Errors
    "ConfigurationError",
    "ConversionError",
    "CyclicKeyReferenceError",
    "NestedListNotSupportedError",
    "NullableArrayElementNotAllowedError",
    "SchemaLoadError",
    "UnknownScalarError",
    "UnsupportedMultiColumnRelationError",
    # Naming
    "Case",
    "convert_case",
    "detect_case",
    "normalize_case",
    # Schema
    "load_schema",
    "load_schema_from_string",
    "load_sources",
    "GraphQLSchema",
]
