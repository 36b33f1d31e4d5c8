"""Map a GraphQL schema onto Spanner CREATE TABLE definitions.

Every non-built-in object type (except the Query, Mutation and Subscription
roots) becomes one table:

- each field becomes a column (relations become ``<Type>Id`` columns typed
  like the referenced table's key)
- the primary key is a ``SpannerPK``-marked field, an ``id`` field, a
  ``<Type>Id`` field, or a synthesized nullable ``<Type>Id`` column
- optional created/updated audit columns are appended when absent

Usage:
    from gql_spansql.converter import Converter
    from gql_spansql.config import build_config
    from gql_spansql.schema import load_schema_from_string

    schema = load_schema_from_string("type User { userId: String! }")
    converter = Converter(schema, build_config())
    print(converter.spanner_sql())
"""

import logging
import re
from dataclasses import dataclass, field

from gql_spansql.config.models import ConverterConfig
from gql_spansql.ddl.models import (
    MAX_LENGTH,
    ColumnDef,
    ColumnType,
    CreateTable,
    KeyPart,
    TypeBase,
)
from gql_spansql.ddl.render import render_statements
from gql_spansql.errors import (
    ConversionError,
    CyclicKeyReferenceError,
    NestedListNotSupportedError,
    NullableArrayElementNotAllowedError,
    UnknownScalarError,
    UnsupportedMultiColumnRelationError,
)
from gql_spansql.naming import convert_case, normalize_case, resolve_column_case
from gql_spansql.schema.models import (
    FieldDef,
    GraphQLSchema,
    TypeDef,
    TypeKind,
    TypeRef,
)

logger = logging.getLogger(__name__)

ROOT_OPERATION_TYPES = frozenset({"Query", "Mutation", "Subscription"})

PK_MARKER = "SpannerPK"

BUILTIN_SCALARS: dict[str, TypeBase] = {
    "Int": TypeBase.INT64,
    "ID": TypeBase.STRING,
    "String": TypeBase.STRING,
    "Float": TypeBase.FLOAT64,
    "Boolean": TypeBase.BOOL,
    "Time": TypeBase.TIMESTAMP,
    "TimeStamp": TypeBase.TIMESTAMP,
    "Timestamp": TypeBase.TIMESTAMP,
    "Date": TypeBase.DATE,
}

# Checked in order against the text captured after "SpannerType:".
_SPANNER_TYPE_HINTS: list[tuple[tuple[str, ...], TypeBase]] = [
    (("Int",), TypeBase.INT64),
    (("ID", "String"), TypeBase.STRING),
    (("Float",), TypeBase.FLOAT64),
    (("Boolean",), TypeBase.BOOL),
]

_SPANNER_TYPE_RE = re.compile(r"^SpannerType: ?(.*)$", re.MULTILINE)


@dataclass
class DetectedKey:
    """Result of primary-key detection.

    Attributes:
        parts: Key columns, in key order.
        found: False when the key is synthetic (no field provides it).
        fields: The fields the key parts came from (empty when synthetic).
    """

    parts: list[KeyPart]
    found: bool
    fields: list[FieldDef] = field(default_factory=list)


def scalar_type_from_description(description: str) -> TypeBase:
    """Read a ``SpannerType: <GoType>`` hint from a custom scalar description.

    Examples:
        >>> scalar_type_from_description("SpannerType: int64")
        <TypeBase.STRING: 'STRING'>
        >>> scalar_type_from_description("SpannerType: Int64")
        <TypeBase.INT64: 'INT64'>
    """
    match = _SPANNER_TYPE_RE.search(description)
    if match is None:
        return TypeBase.STRING
    hint = match.group(1)
    for needles, base in _SPANNER_TYPE_HINTS:
        if any(needle in hint for needle in needles):
            return base
    return TypeBase.STRING


class Converter:
    """Converts object types of a loaded schema into table definitions."""

    def __init__(self, schema: GraphQLSchema, config: ConverterConfig) -> None:
        self.schema = schema
        self.config = config

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def table_types(self) -> list[TypeDef]:
        """Object types that become tables, sorted by name."""
        definitions = []
        for name in sorted(self.schema.types):
            definition = self.schema.types[name]
            if definition.built_in or definition.kind is not TypeKind.OBJECT:
                continue
            if name in ROOT_OPERATION_TYPES:
                continue
            definitions.append(definition)
        return definitions

    def convert_schema(self) -> list[CreateTable]:
        """Convert every table type. Any failure aborts the whole run."""
        return [self.convert_definition(d) for d in self.table_types()]

    def spanner_sql(self) -> str:
        """Render the whole schema as DDL, one ``;\\n``-terminated statement per table."""
        return render_statements(self.convert_schema())

    def convert_definition(self, definition: TypeDef) -> CreateTable:
        """Assemble the CREATE TABLE for one object type.

        Raises:
            ConversionError: Located at this type (and field, when known).
        """
        key = self.detect_pk(definition.name, definition.fields)

        columns: list[ColumnDef] = []
        if not key.found:
            logger.debug(
                f"{definition.name}: no key field, adding {key.parts[0].column}"
            )
            columns.append(
                ColumnDef(
                    name=key.parts[0].column,
                    type=ColumnType(base=TypeBase.STRING, length=MAX_LENGTH),
                    not_null=False,
                )
            )

        for f in definition.fields:
            try:
                columns.append(self.convert_field(f))
            except ConversionError as e:
                e.locate(definition.name, f.name)
                raise

        for audit_name in (
            self.config.created_column_name,
            self.config.updated_column_name,
        ):
            if audit_name and not self._has_field_named(definition, audit_name):
                columns.append(
                    ColumnDef(
                        name=audit_name,
                        type=ColumnType(base=TypeBase.TIMESTAMP),
                        not_null=True,
                    )
                )

        table = CreateTable(
            name=convert_case(definition.name, self.config.table_case),
            columns=columns,
            primary_key=key.parts,
        )
        logger.debug(
            f"{definition.name}: table {table.name} with {len(columns)} columns, "
            f"key ({', '.join(k.column for k in key.parts)})"
        )
        return table

    @staticmethod
    def _has_field_named(definition: TypeDef, name: str) -> bool:
        target = normalize_case(name)
        return any(normalize_case(f.name) == target for f in definition.fields)

    # ------------------------------------------------------------------
    # Primary keys
    # ------------------------------------------------------------------

    def detect_pk(self, type_name: str, fields: list[FieldDef]) -> DetectedKey:
        """Find the primary key of *type_name*, or synthesize one.

        Fields are scanned in order. ``SpannerPK``-marked fields are all
        collected; an ``id`` or ``<TypeName>Id`` field ends the scan.
        """
        key_fields: list[FieldDef] = []
        id_name = normalize_case("Id")
        type_id_name = normalize_case(f"{type_name}Id")

        for f in fields:
            if PK_MARKER in f.description:
                key_fields.append(f)
                continue
            if normalize_case(f.name) == id_name:
                key_fields.append(f)
                break
            if normalize_case(f.name) == type_id_name:
                key_fields.append(f)
                break

        if key_fields:
            return DetectedKey(
                parts=[KeyPart(column=self.convert_field_name(f)) for f in key_fields],
                found=True,
                fields=key_fields,
            )

        case = resolve_column_case(self.config.column_case, fields[0] if fields else None)
        return DetectedKey(
            parts=[KeyPart(column=convert_case(f"{type_name}Id", case))],
            found=False,
        )

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def convert_field(
        self, f: FieldDef, _resolving: frozenset[str] = frozenset()
    ) -> ColumnDef:
        """Map one field to a column."""
        is_array = f.type.is_list
        if is_array:
            base = self.convert_list_field(f.type.elem, _resolving)
        else:
            base = self.convert_type(f.type.named_type, _resolving)

        return ColumnDef(
            name=self.convert_field_name(f),
            type=ColumnType(
                base=base,
                array=is_array,
                length=MAX_LENGTH if base is TypeBase.STRING else None,
            ),
            not_null=f.type.non_null,
        )

    def convert_field_name(self, f: FieldDef) -> str:
        """Column name for a field; relations become ``<Type>Id(s)``."""
        is_array = f.type.is_list
        named_type = f.type.elem.named_type if is_array else f.type.named_type

        if named_type is not None and self.schema.is_object(named_type):
            case = resolve_column_case(self.config.column_case, f)
            suffix = "s" if is_array else ""
            return convert_case(f"{named_type}Id{suffix}", case)

        return convert_case(f.name, self.config.column_case)

    def convert_list_field(
        self, elem: TypeRef, _resolving: frozenset[str] = frozenset()
    ) -> TypeBase:
        """Base type of a list field's elements."""
        if elem.is_list:
            raise NestedListNotSupportedError("list of lists is not supported")
        if not elem.non_null and not self.config.loose:
            raise NullableArrayElementNotAllowedError(
                "spanner is not allowed null element in ARRAY"
            )
        return self.convert_type(elem.named_type, _resolving)

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def convert_type(
        self, type_name: str, _resolving: frozenset[str] = frozenset()
    ) -> TypeBase:
        """Resolve a GraphQL named type to a Spanner base type.

        Raises:
            UnknownScalarError: If *type_name* is not convertible.
            UnsupportedMultiColumnRelationError: For relations to composite keys.
            CyclicKeyReferenceError: If key resolution loops through relations.
        """
        if type_name in BUILTIN_SCALARS:
            return BUILTIN_SCALARS[type_name]

        definition = self.schema.get(type_name)
        if definition is None:
            raise UnknownScalarError(f"scalar type {type_name} is not found")

        if definition.kind is TypeKind.ENUM:
            return TypeBase.INT64
        if definition.kind is TypeKind.SCALAR:
            return scalar_type_from_description(definition.description)
        if definition.kind is TypeKind.OBJECT:
            return self._convert_relation(definition, _resolving)

        raise UnknownScalarError(
            f"type {type_name} ({definition.kind.value}) can not be a column"
        )

    def _convert_relation(
        self, definition: TypeDef, resolving: frozenset[str]
    ) -> TypeBase:
        if definition.name in resolving:
            raise CyclicKeyReferenceError(
                f"primary key of {definition.name} refers back to itself "
                f"(via {', '.join(sorted(resolving))})"
            )

        key = self.detect_pk(definition.name, definition.fields)
        if not key.found:
            return TypeBase.STRING
        if len(key.parts) > 1:
            raise UnsupportedMultiColumnRelationError(
                f"relation to multiple pk keys is not supported. {definition.name}"
            )

        key_column = self.convert_field(key.fields[0], resolving | {definition.name})
        return key_column.type.base
