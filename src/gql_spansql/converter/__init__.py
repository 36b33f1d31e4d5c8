"""GraphQL object type to Spanner table conversion.

Usage:
    from gql_spansql.converter import Converter, DetectedKey
"""

from gql_spansql.converter.converter import (
    BUILTIN_SCALARS,
    ROOT_OPERATION_TYPES,
    Converter,
    DetectedKey,
    scalar_type_from_description,
)

__all__ = [
    "Converter",
    "DetectedKey",
    "BUILTIN_SCALARS",
    "ROOT_OPERATION_TYPES",
    "scalar_type_from_description",
]
