"""Pydantic models for converter configuration."""

from pydantic import BaseModel, ConfigDict

from gql_spansql.naming import Case


class ConverterConfig(BaseModel):
    """Options for one conversion run. Immutable once built.

    Example:
        >>> config = ConverterConfig(created_column_name="createdAt")
        >>> config.column_case
        <Case.NO_CONVERT: ''>
    """

    model_config = ConfigDict(frozen=True)

    loose: bool = False
    created_column_name: str = ""  # empty disables the audit column
    updated_column_name: str = ""
    table_case: Case = Case.NO_CONVERT
    column_case: Case = Case.NO_CONVERT
