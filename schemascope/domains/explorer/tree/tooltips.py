"""Tooltip and secondary text formatting for explorer rows."""

from __future__ import annotations

from schemascope.domains.explorer.domain.entities import Column, ForeignKey, Index, Table
from schemascope.shared.core.utils import format_bytes, format_count


def table_size_text(table: Table) -> str:
    if table.size_bytes is None or table.size_bytes < 0:
        return ""
    return format_bytes(table.size_bytes)


def table_tooltip(table: Table) -> str:
    """``"<rows> rows, <size>"``; unknown row estimates render as ``?``.

    The size part is left out when the size is unknown.
    """
    rows = table.estimated_rows
    rows_text = format_count(rows) if rows is not None and rows >= 0 else "?"
    size_text = table_size_text(table)
    return f"{rows_text} rows, {size_text}" if size_text else f"{rows_text} rows"


def column_label(column: Column) -> str:
    return f"{column.name} *" if not column.nullable else column.name


def column_tooltip(column: Column) -> str:
    parts = [column.data_type] if column.data_type else []
    if not column.nullable:
        parts.append("NOT NULL")
    if column.default:
        parts.append(f"DEFAULT {column.default}")
    if column.identity:
        parts.append(f"IDENTITY {column.identity}")
    if column.comment:
        parts.append(f"-- {column.comment}")
    return " ".join(parts)


def index_tooltip(index: Index) -> str:
    prefix = "UNIQUE " if index.unique else ""
    return f"{prefix}{index.method.upper()} on ({', '.join(index.columns)})"


def foreign_key_tooltip(fk: ForeignKey) -> str:
    local = ", ".join(fk.columns)
    remote = ", ".join(fk.ref_columns)
    return f"({local}) -> {fk.ref_table}({remote})"
