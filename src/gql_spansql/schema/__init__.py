"""GraphQL schema model and SDL loading.

Provides the frozen schema model (``GraphQLSchema``, ``TypeDef``,
``FieldDef``, ``TypeRef``) and the graphql-core based loader.

Usage:
    from gql_spansql.schema import load_sources, load_schema
    from gql_spansql.schema import load_schema_from_string
"""

from gql_spansql.schema.loader import (
    SchemaSource,
    expand_patterns,
    load_schema,
    load_schema_from_string,
    load_sources,
    read_stdin_source,
    split_patterns,
)
from gql_spansql.schema.models import (
    FieldDef,
    GraphQLSchema,
    TypeDef,
    TypeKind,
    TypeRef,
)

__all__ = [
    "SchemaSource",
    "expand_patterns",
    "load_schema",
    "load_schema_from_string",
    "load_sources",
    "read_stdin_source",
    "split_patterns",
    "FieldDef",
    "GraphQLSchema",
    "TypeDef",
    "TypeKind",
    "TypeRef",
]
