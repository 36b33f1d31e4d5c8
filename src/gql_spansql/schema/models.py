"""Pydantic models for a loaded GraphQL schema.

The converter only ever sees these models, never raw SDL or graphql-core
objects. All models are frozen: a schema is immutable for the duration of a
conversion.

This module contains:
- TypeKind: the GraphQL kind of a named type
- TypeRef: a (possibly wrapped) type reference
- FieldDef, TypeDef: field and type definitions
- GraphQLSchema: the type map
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TypeKind(str, Enum):
    """GraphQL named type kinds."""

    OBJECT = "OBJECT"
    ENUM = "ENUM"
    SCALAR = "SCALAR"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    INPUT_OBJECT = "INPUT_OBJECT"


class TypeRef(BaseModel):
    """Reference to a type, either Named or List, optionally non-null.

    Exactly one of ``named_type`` and ``elem`` is set.

    Example:
        >>> ref = TypeRef(elem=TypeRef(named_type="Int", non_null=True))
        >>> ref.is_list
        True
    """

    model_config = ConfigDict(frozen=True)

    named_type: str | None = None
    elem: "TypeRef | None" = None
    non_null: bool = False

    @property
    def is_list(self) -> bool:
        return self.elem is not None

    def __str__(self) -> str:
        inner = f"[{self.elem}]" if self.elem is not None else str(self.named_type)
        return f"{inner}!" if self.non_null else inner


class FieldDef(BaseModel):
    """A field of an object type."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeRef
    description: str = ""


class TypeDef(BaseModel):
    """A named type definition."""

    model_config = ConfigDict(frozen=True)

    kind: TypeKind
    name: str
    description: str = ""
    fields: list[FieldDef] = Field(default_factory=list)
    built_in: bool = False

    def field(self, name: str) -> FieldDef | None:
        """Return the field called *name*, or None."""
        for f in self.fields:
            if f.name == name:
                return f
        return None


class GraphQLSchema(BaseModel):
    """A loaded schema: type name to definition."""

    model_config = ConfigDict(frozen=True)

    types: dict[str, TypeDef] = Field(default_factory=dict)

    def get(self, name: str) -> TypeDef | None:
        return self.types.get(name)

    def is_object(self, name: str) -> bool:
        definition = self.types.get(name)
        return definition is not None and definition.kind is TypeKind.OBJECT
