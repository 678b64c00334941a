"""Identifier and literal quoting for PostgreSQL."""

from __future__ import annotations

import re
from typing import Iterable

_BARE_IDENT = re.compile(r"[a-z_][a-z0-9_]*\Z")


def quote_ident(name: str) -> str:
    """Quote an identifier unless it is already a plain lowercase name.

    Escapes embedded double quotes by doubling them.
    """
    if _BARE_IDENT.match(name):
        return name
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def qualified_name(schema: str | None, name: str) -> str:
    """Format ``schema.name`` with each part quoted as needed."""
    if not schema:
        return quote_ident(name)
    return f"{quote_ident(schema)}.{quote_ident(name)}"


def quote_literal(value: str) -> str:
    escaped = value.replace("'", "''")
    return f"'{escaped}'"


def quote_columns(columns: Iterable[str]) -> str:
    return ", ".join(quote_ident(column) for column in columns)
