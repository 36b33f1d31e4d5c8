"""Exceptions raised while configuring, loading, and converting schemas.

Conversion is all-or-nothing: the first ``ConversionError`` aborts the whole
run. Errors raised deep inside type resolution are located (type and field
name) by the table assembler on the way out.
"""


class ConfigurationError(Exception):
    """Raised when converter options are invalid (e.g. unknown case name)."""

    pass


class SchemaLoadError(Exception):
    """Raised when GraphQL sources cannot be found, read, or parsed."""

    pass


class ConversionError(Exception):
    """Base class for failures while mapping a GraphQL schema to tables.

    Example:
        >>> err = UnknownScalarError("scalar type Money is not found")
        >>> err.locate("Order", "total")
        >>> str(err)
        'Order.total: scalar type Money is not found'
    """

    def __init__(
        self,
        message: str,
        *,
        type_name: str | None = None,
        field_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.type_name = type_name
        self.field_name = field_name

    def locate(self, type_name: str, field_name: str | None = None) -> None:
        """Attach the offending type/field, keeping the innermost location."""
        if self.type_name is None:
            self.type_name = type_name
            self.field_name = field_name

    def __str__(self) -> str:
        if self.type_name is None:
            return self.message
        location = self.type_name
        if self.field_name:
            location = f"{location}.{self.field_name}"
        return f"{location}: {self.message}"


class UnknownScalarError(ConversionError):
    """A referenced type name matches nothing convertible in the schema."""

    pass


class NullableArrayElementNotAllowedError(ConversionError):
    """A list field has nullable elements and loose mode is off."""

    pass


class UnsupportedMultiColumnRelationError(ConversionError):
    """A relation points at an object whose primary key has several parts."""

    pass


class CyclicKeyReferenceError(ConversionError):
    """Primary-key resolution through relations loops back on itself."""

    pass


class NestedListNotSupportedError(ConversionError):
    """A field is a list of lists."""

    pass
