"""
SQL identifier escaping utilities.

Only the staging swap builds raw SQL; everything else goes through ibis.
"""

import re

_SAFE_IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def escape_identifier(identifier: str) -> str:
    """
    Escape SQL identifier (table name, schema name, catalog name).

    Wraps identifier in double quotes and escapes any double quotes within.
    This is safe for DuckDB, Snowflake, PostgreSQL and most SQL databases.

    Example:
        >>> escape_identifier("dim_date")
        '"dim_date"'
        >>> escape_identifier('table"name')
        '"table""name"'
    """
    if not identifier:
        raise ValueError("Identifier cannot be empty")
    escaped = identifier.replace('"', '""')
    return f'"{escaped}"'


def escape_qualified_name(*parts: str | None) -> str:
    """
    Escape a dotted name, skipping empty parts.

    ``escape_qualified_name(None, "gold", "dim_date")`` gives ``"gold"."dim_date"``.
    """
    present = [p for p in parts if p]
    if not present:
        raise ValueError("Qualified name needs at least one part")
    return ".".join(escape_identifier(p) for p in present)


def validate_identifier(identifier: str) -> bool:
    """Letters, digits and underscores only, not starting with a digit."""
    if not identifier:
        return False
    return bool(_SAFE_IDENTIFIER.match(identifier))
