"""CREATE TABLE, CREATE INDEX and ALTER TABLE rendering."""

from __future__ import annotations

from schemascope.domains.explorer.domain.entities import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    PrimaryKey,
    Table,
    UniqueConstraint,
)

from .quoting import qualified_name, quote_columns, quote_ident, quote_literal

INDENT = "    "


def identity_clause(mode: str) -> str:
    """Render an identity column clause.

    ``always`` and ``by default`` map to their standard forms; any other mode
    string is emitted as given.
    """
    normalized = " ".join(mode.lower().split())
    if normalized == "always":
        return "GENERATED ALWAYS AS IDENTITY"
    if normalized == "by default":
        return "GENERATED BY DEFAULT AS IDENTITY"
    return f"GENERATED {mode}"


def column_definition(column: Column) -> str:
    parts = [quote_ident(column.name), column.data_type]
    if column.identity:
        parts.append(identity_clause(column.identity))
    elif column.generated:
        parts.append(f"GENERATED ALWAYS AS ({column.generated}) STORED")
    elif column.default is not None:
        parts.append(f"DEFAULT {column.default}")
    if not column.nullable:
        parts.append("NOT NULL")
    return " ".join(parts)


def _constraint_prefix(name: str | None) -> str:
    return f"CONSTRAINT {quote_ident(name)} " if name else ""


def primary_key_clause(pk: PrimaryKey) -> str:
    return f"{_constraint_prefix(pk.name)}PRIMARY KEY ({quote_columns(pk.columns)})"


def unique_clause(constraint: UniqueConstraint) -> str:
    return f"{_constraint_prefix(constraint.name)}UNIQUE ({quote_columns(constraint.columns)})"


def check_clause(constraint: CheckConstraint) -> str:
    return f"{_constraint_prefix(constraint.name)}CHECK ({constraint.expression})"


def foreign_key_clause(fk: ForeignKey) -> str:
    target = qualified_name(fk.ref_schema or fk.schema, fk.ref_table)
    clause = (
        f"{_constraint_prefix(fk.name)}FOREIGN KEY ({quote_columns(fk.columns)}) "
        f"REFERENCES {target} ({quote_columns(fk.ref_columns)}) "
        f"ON DELETE {fk.on_delete} ON UPDATE {fk.on_update}"
    )
    if fk.deferrable:
        clause += " DEFERRABLE"
        if fk.initially_deferred:
            clause += " INITIALLY DEFERRED"
    return clause


def _index_element(element: str) -> str:
    # Expression indexes arrive as raw SQL, plain columns as names.
    return element if "(" in element else quote_ident(element)


def generate_create_index(index: Index, *, concurrently: bool = False) -> str:
    """Build a CREATE INDEX statement.

    The access method is omitted for btree, the server default.
    """
    parts = ["CREATE"]
    if index.unique:
        parts.append("UNIQUE")
    parts.append("INDEX")
    if concurrently:
        parts.append("CONCURRENTLY")
    parts.append(quote_ident(index.name))
    parts.append(f"ON {qualified_name(index.schema, index.table)}")
    if index.method and index.method.lower() != "btree":
        parts.append(f"USING {index.method}")
    parts.append(f"({', '.join(_index_element(e) for e in index.columns)})")
    if index.include:
        parts.append(f"INCLUDE ({quote_columns(index.include)})")
    if index.predicate:
        parts.append(f"WHERE {index.predicate}")
    return " ".join(parts) + ";"


def _comment_value(comment: str | None) -> str:
    return "NULL" if comment is None else quote_literal(comment)


def generate_column_comment(table: Table, column: Column) -> str:
    target = f"{qualified_name(table.schema, table.name)}.{quote_ident(column.name)}"
    return f"COMMENT ON COLUMN {target} IS {_comment_value(column.comment)};"


def generate_create_table(table: Table) -> list[str]:
    """Build the statements that recreate a table.

    Returns the CREATE TABLE statement, then one CREATE INDEX per index that
    is not created implicitly by a constraint, then the table comment and
    the column comments.

    Args:
        table: Table with its columns and constraints loaded.

    Returns:
        Statements in execution order.
    """
    columns = table.columns or ()
    lines = [column_definition(column) for column in columns]
    if table.primary_key is not None:
        lines.append(primary_key_clause(table.primary_key))
    lines.extend(unique_clause(c) for c in table.unique_constraints)
    lines.extend(check_clause(c) for c in table.check_constraints)
    lines.extend(foreign_key_clause(fk) for fk in table.foreign_keys)

    name = qualified_name(table.schema, table.name)
    if lines:
        body = ",\n".join(INDENT + line for line in lines)
        statements = [f"CREATE TABLE {name} (\n{body}\n);"]
    else:
        statements = [f"CREATE TABLE {name} ();"]

    statements.extend(
        generate_create_index(index)
        for index in table.indexes
        if not index.is_primary and not index.is_constraint
    )
    if table.comment is not None:
        statements.append(f"COMMENT ON TABLE {name} IS {_comment_value(table.comment)};")
    statements.extend(
        generate_column_comment(table, column) for column in columns if column.comment is not None
    )
    return statements


def _alter_table(table: Table) -> str:
    return f"ALTER TABLE {qualified_name(table.schema, table.name)}"


def generate_add_column(table: Table, column: Column) -> str:
    return f"{_alter_table(table)} ADD COLUMN {column_definition(column)};"


def generate_drop_column(table: Table, column_name: str, *, cascade: bool = False) -> str:
    statement = f"{_alter_table(table)} DROP COLUMN IF EXISTS {quote_ident(column_name)}"
    if cascade:
        statement += " CASCADE"
    return statement + ";"


def generate_rename_table(table: Table, new_name: str) -> str:
    return f"{_alter_table(table)} RENAME TO {quote_ident(new_name)};"


def generate_rename_column(table: Table, column_name: str, new_name: str) -> str:
    return f"{_alter_table(table)} RENAME COLUMN {quote_ident(column_name)} TO {quote_ident(new_name)};"


def generate_set_not_null(table: Table, column_name: str, not_null: bool = True) -> str:
    """Add or remove the NOT NULL constraint of a column."""
    action = "SET" if not_null else "DROP"
    return f"{_alter_table(table)} ALTER COLUMN {quote_ident(column_name)} {action} NOT NULL;"
