"""DROP, TRUNCATE, REINDEX and REFRESH rendering.

Each optional keyword is appended only when its flag is set.
"""

from __future__ import annotations

from schemascope.domains.explorer.domain.entities import (
    EntityKind,
    ForeignKey,
    Function,
    Index,
    MaterializedView,
    Policy,
    Schema,
    Table,
    Trigger,
)
from schemascope.errors import UnsupportedOperationError

from .objects import OBJECT_TYPES, function_target
from .quoting import qualified_name, quote_ident

# Objects that live outside any schema
_GLOBAL_KINDS = frozenset({EntityKind.SCHEMA, EntityKind.EXTENSION, EntityKind.ROLE, EntityKind.TABLESPACE})
# Objects dropped with "ON <table>"
_TABLE_SCOPED_KINDS = frozenset({EntityKind.TRIGGER, EntityKind.POLICY})


def _with_cascade(statement: str, cascade: bool) -> str:
    return f"{statement} CASCADE;" if cascade else f"{statement};"


def generate_drop(
    kind: EntityKind,
    schema: str | None,
    name: str,
    *,
    cascade: bool = False,
    table: str | None = None,
) -> str:
    """Build a DROP statement, always with IF EXISTS.

    Args:
        kind: Kind of object to drop.
        schema: Owning schema; ignored for schema, extension, role and tablespace.
        name: Object name, unquoted.
        cascade: Append CASCADE.
        table: Owning table for triggers, policies, columns and foreign keys.

    Raises:
        UnsupportedOperationError: If a column or foreign key comes without
            its table.
    """
    if kind in (EntityKind.COLUMN, EntityKind.FOREIGN_KEY):
        if not table:
            raise UnsupportedOperationError("drop", kind.value)
        what = "COLUMN" if kind is EntityKind.COLUMN else "CONSTRAINT"
        owner = qualified_name(schema, table)
        return _with_cascade(f"ALTER TABLE {owner} DROP {what} IF EXISTS {quote_ident(name)}", cascade)

    if kind in _GLOBAL_KINDS:
        target = quote_ident(name)
    elif kind in _TABLE_SCOPED_KINDS:
        target = quote_ident(name)
        if table:
            target += f" ON {qualified_name(schema, table)}"
    else:
        target = qualified_name(schema, name)
    return _with_cascade(f"DROP {OBJECT_TYPES[kind]} IF EXISTS {target}", cascade)


def generate_drop_entity(entity, *, cascade: bool = False) -> str:
    """Build a DROP statement for a snapshot entity.

    Columns carry no table, so they go through ``generate_drop_column``.
    """
    if isinstance(entity, Function):
        return _with_cascade(f"DROP FUNCTION IF EXISTS {function_target(entity)}", cascade)
    if isinstance(entity, (Trigger, Policy, ForeignKey)):
        return generate_drop(entity.kind, entity.schema, entity.name, cascade=cascade, table=entity.table)
    return generate_drop(entity.kind, getattr(entity, "schema", None), entity.name, cascade=cascade)


def generate_truncate(table: Table, *, cascade: bool = False, restart_identity: bool = False) -> str:
    statement = f"TRUNCATE TABLE {qualified_name(table.schema, table.name)}"
    if restart_identity:
        statement += " RESTART IDENTITY"
    return _with_cascade(statement, cascade)


def generate_reindex(target: Table | MaterializedView | Index | Schema, *, concurrently: bool = False) -> str:
    """Build REINDEX for a table, materialized view, index or schema."""
    if isinstance(target, Schema):
        what, name = "SCHEMA", quote_ident(target.name)
    elif isinstance(target, Index):
        what, name = "INDEX", qualified_name(target.schema, target.name)
    else:
        what, name = "TABLE", qualified_name(target.schema, target.name)
    option = " CONCURRENTLY" if concurrently else ""
    return f"REINDEX {what}{option} {name};"


def generate_refresh_materialized_view(view: MaterializedView, *, concurrently: bool = False) -> str:
    option = " CONCURRENTLY" if concurrently else ""
    return f"REFRESH MATERIALIZED VIEW{option} {qualified_name(view.schema, view.name)};"
