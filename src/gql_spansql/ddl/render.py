"""Render table definitions as canonical Spanner DDL.

Pure formatting -- no I/O.

Example:
    >>> table = CreateTable(
    ...     name="User",
    ...     columns=[ColumnDef(name="userId", type=ColumnType(base=TypeBase.STRING,
    ...            length="MAX"), not_null=True)],
    ...     primary_key=[KeyPart(column="userId")],
    ... )
    >>> print(render_create_table(table))
    CREATE TABLE User (
      userId STRING(MAX) NOT NULL,
    ) PRIMARY KEY(userId)
"""

import re

from gql_spansql.ddl.models import ColumnDef, ColumnType, CreateTable, KeyPart

_PLAIN_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Spanner GoogleSQL reserved keywords; identifiers matching one are quoted.
RESERVED_KEYWORDS = frozenset(
    """
    ALL AND ANY ARRAY AS ASC ASSERT_ROWS_MODIFIED AT BETWEEN BY CASE CAST
    COLLATE CONTAINS CREATE CROSS CUBE CURRENT DEFAULT DEFINE DESC DISTINCT
    ELSE END ENUM ESCAPE EXCEPT EXCLUDE EXISTS EXTRACT FALSE FETCH FOLLOWING
    FOR FROM FULL GROUP GROUPING GROUPS HASH HAVING IF IGNORE IN INNER
    INTERSECT INTERVAL INTO IS JOIN LATERAL LEFT LIKE LIMIT LOOKUP MERGE
    NATURAL NEW NO NOT NULL NULLS OF ON OR ORDER OUTER OVER PARTITION
    PRECEDING PROTO RANGE RECURSIVE RESPECT RIGHT ROLLUP ROWS SELECT SET SOME
    STRUCT TABLESAMPLE THEN TO TREAT TRUE UNBOUNDED UNION UNNEST USING WHEN
    WHERE WINDOW WITH WITHIN
    """.split()
)


def quote_identifier(name: str) -> str:
    """Backtick-quote *name* if it is reserved or not a plain identifier."""
    if _PLAIN_IDENT_RE.match(name) and name.upper() not in RESERVED_KEYWORDS:
        return name
    escaped = name.replace("\\", "\\\\").replace("`", "\\`")
    return f"`{escaped}`"


def render_type(column_type: ColumnType) -> str:
    base = column_type.base.value
    if column_type.length is not None:
        base = f"{base}({column_type.length})"
    if column_type.array:
        return f"ARRAY<{base}>"
    return base


def render_column(column: ColumnDef) -> str:
    """Render ``<name> <type>[ NOT NULL]``."""
    sql = f"{quote_identifier(column.name)} {render_type(column.type)}"
    if column.not_null:
        sql += " NOT NULL"
    return sql


def render_key_part(key_part: KeyPart) -> str:
    return quote_identifier(key_part.column)


def render_create_table(table: CreateTable) -> str:
    """Render a CREATE TABLE statement without the trailing semicolon."""
    lines = [f"CREATE TABLE {quote_identifier(table.name)} ("]
    for column in table.columns:
        lines.append(f"  {render_column(column)},")
    keys = ", ".join(render_key_part(k) for k in table.primary_key)
    lines.append(f") PRIMARY KEY({keys})")
    return "\n".join(lines)


def render_statements(tables: list[CreateTable]) -> str:
    """Render every table, each statement terminated by ``;\\n``."""
    return "".join(f"{render_create_table(t)};\n" for t in tables)
