"""Load GraphQL SDL documents into a ``GraphQLSchema``.

Sources come from files matched by glob patterns, or from standard input.
Every source is parsed with graphql-core, the documents are merged, and the
resulting graphql-core schema is converted into the project's own frozen
models.

Usage:
    from gql_spansql.schema.loader import load_sources, load_schema

    sources = load_sources(["schema/*.graphql", "extra.graphql"])
    schema = load_schema(sources)
"""

import glob
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from graphql import (
    DocumentNode,
    GraphQLEnumType,
    GraphQLError,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLUnionType,
    Source,
    build_ast_schema,
    introspection_types,
    parse,
    specified_scalar_types,
)
from graphql import GraphQLSchema as CoreSchema

from gql_spansql.errors import SchemaLoadError
from gql_spansql.schema.models import (
    FieldDef,
    GraphQLSchema,
    TypeDef,
    TypeKind,
    TypeRef,
)

logger = logging.getLogger(__name__)


@dataclass
class SchemaSource:
    """One SDL document and where it came from."""

    body: str
    name: str = "<stdin>"


# ------------------------------------------------------------------
# Source discovery
# ------------------------------------------------------------------


def split_patterns(value: str) -> list[str]:
    """Split a comma-separated ``-s`` value into glob patterns."""
    return [p.strip() for p in value.split(",") if p.strip()]


def expand_patterns(patterns: list[str]) -> list[Path]:
    """Expand glob patterns into a de-duplicated, ordered list of files.

    Matches of each pattern are sorted; the first occurrence of a file wins
    when several patterns match it.
    """
    files: list[Path] = []
    seen: set[str] = set()

    for pattern in patterns:
        matches = sorted(glob.glob(pattern))
        if not matches:
            logger.warning(f"Schema pattern matched no files: {pattern}")
        for match in matches:
            if match in seen:
                continue
            seen.add(match)
            files.append(Path(match))

    return files


def load_sources(patterns: list[str]) -> list[SchemaSource]:
    """Read every file matched by *patterns*.

    Raises:
        SchemaLoadError: If nothing matched or a file cannot be read.
    """
    files = expand_patterns(patterns)
    if not files:
        raise SchemaLoadError(f"No schema files matched: {', '.join(patterns)}")

    sources: list[SchemaSource] = []
    for path in files:
        try:
            body = path.read_text()
        except OSError as e:
            raise SchemaLoadError(f"Read from file failed: {path}: {e}") from e
        logger.debug(f"Read schema source {path} ({len(body)} bytes)")
        sources.append(SchemaSource(body=body, name=str(path)))

    return sources


def read_stdin_source(stream: TextIO) -> SchemaSource | None:
    """Read a schema piped on *stream*; an interactive terminal yields None."""
    if stream.isatty():
        return None
    body = stream.read()
    if not body.strip():
        return None
    return SchemaSource(body=body)


# ------------------------------------------------------------------
# Parsing and conversion
# ------------------------------------------------------------------


def _build_core_schema(sources: list[SchemaSource]) -> CoreSchema:
    if not sources:
        raise SchemaLoadError("No schema input given")

    definitions = []
    for source in sources:
        try:
            document = parse(Source(source.body, source.name))
        except GraphQLError as e:
            raise SchemaLoadError(f"Parse failed: {source.name}: {e.message}") from e
        definitions.extend(document.definitions)

    try:
        return build_ast_schema(DocumentNode(definitions=tuple(definitions)))
    except (GraphQLError, TypeError) as e:
        raise SchemaLoadError(f"Invalid schema: {e}") from e


def _convert_type_ref(gql_type) -> TypeRef:
    if isinstance(gql_type, GraphQLNonNull):
        inner = _convert_type_ref(gql_type.of_type)
        return inner.model_copy(update={"non_null": True})
    if isinstance(gql_type, GraphQLList):
        return TypeRef(elem=_convert_type_ref(gql_type.of_type))
    return TypeRef(named_type=gql_type.name)


def _kind_of(named: GraphQLNamedType) -> TypeKind:
    if isinstance(named, GraphQLObjectType):
        return TypeKind.OBJECT
    if isinstance(named, GraphQLEnumType):
        return TypeKind.ENUM
    if isinstance(named, GraphQLScalarType):
        return TypeKind.SCALAR
    if isinstance(named, GraphQLInterfaceType):
        return TypeKind.INTERFACE
    if isinstance(named, GraphQLUnionType):
        return TypeKind.UNION
    if isinstance(named, GraphQLInputObjectType):
        return TypeKind.INPUT_OBJECT
    raise SchemaLoadError(f"Unsupported GraphQL type: {named}")


def _convert_named_type(named: GraphQLNamedType) -> TypeDef:
    fields: list[FieldDef] = []
    if isinstance(named, GraphQLObjectType):
        for field_name, field in named.fields.items():
            fields.append(
                FieldDef(
                    name=field_name,
                    type=_convert_type_ref(field.type),
                    description=field.description or "",
                )
            )

    return TypeDef(
        kind=_kind_of(named),
        name=named.name,
        description=named.description or "",
        fields=fields,
        built_in=named.name in specified_scalar_types
        or named.name in introspection_types,
    )


def convert_core_schema(core: CoreSchema) -> GraphQLSchema:
    """Convert a graphql-core schema into the frozen project model."""
    types = {
        name: _convert_named_type(named) for name, named in core.type_map.items()
    }
    return GraphQLSchema(types=types)


def load_schema(sources: list[SchemaSource]) -> GraphQLSchema:
    """Parse and merge *sources* into a single schema.

    Raises:
        SchemaLoadError: If there are no sources or any of them is invalid.
    """
    schema = convert_core_schema(_build_core_schema(sources))
    logger.debug(
        f"Loaded {len(schema.types)} types from {len(sources)} source(s)"
    )
    return schema


def load_schema_from_string(body: str, name: str = "<string>") -> GraphQLSchema:
    """Load a schema from a single SDL string."""
    return load_schema([SchemaSource(body=body, name=name)])
