"""Pydantic models for Spanner table definitions.

Produced by the converter, consumed by the renderer. Frozen once created.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MAX_LENGTH = "MAX"


class TypeBase(str, Enum):
    """Spanner column base types emitted by the converter."""

    INT64 = "INT64"
    STRING = "STRING"
    FLOAT64 = "FLOAT64"
    BOOL = "BOOL"
    TIMESTAMP = "TIMESTAMP"
    DATE = "DATE"


class ColumnType(BaseModel):
    """Column type: base, array flag, and length (STRING only).

    Example:
        >>> ColumnType(base=TypeBase.STRING, length=MAX_LENGTH).length
        'MAX'
    """

    model_config = ConfigDict(frozen=True)

    base: TypeBase
    array: bool = False
    length: int | Literal["MAX"] | None = None


class ColumnDef(BaseModel):
    """A single column of a CREATE TABLE statement."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ColumnType
    not_null: bool = False


class KeyPart(BaseModel):
    """One column of a primary key."""

    model_config = ConfigDict(frozen=True)

    column: str


class CreateTable(BaseModel):
    """A complete CREATE TABLE definition."""

    model_config = ConfigDict(frozen=True)

    name: str
    columns: list[ColumnDef] = Field(default_factory=list)
    primary_key: list[KeyPart] = Field(default_factory=list)

    def column(self, name: str) -> ColumnDef | None:
        """Return the column called *name*, or None."""
        for col in self.columns:
            if col.name == name:
                return col
        return None
