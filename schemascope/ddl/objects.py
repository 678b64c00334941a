"""CREATE and COMMENT rendering for views, functions, sequences, types and schemas."""

from __future__ import annotations

from schemascope.domains.explorer.domain.entities import (
    DbType,
    EntityKind,
    Function,
    FunctionArgument,
    MaterializedView,
    Schema,
    Sequence,
    Table,
    View,
)

from .quoting import qualified_name, quote_ident, quote_literal

# SQL object type keyword per entity kind
OBJECT_TYPES = {
    EntityKind.SCHEMA: "SCHEMA",
    EntityKind.TABLE: "TABLE",
    EntityKind.VIEW: "VIEW",
    EntityKind.MATERIALIZED_VIEW: "MATERIALIZED VIEW",
    EntityKind.FUNCTION: "FUNCTION",
    EntityKind.SEQUENCE: "SEQUENCE",
    EntityKind.TYPE: "TYPE",
    EntityKind.INDEX: "INDEX",
    EntityKind.TRIGGER: "TRIGGER",
    EntityKind.POLICY: "POLICY",
    EntityKind.EXTENSION: "EXTENSION",
    EntityKind.ROLE: "ROLE",
    EntityKind.TABLESPACE: "TABLESPACE",
}


def _query_body(definition: str) -> str:
    return definition.strip().rstrip(";").rstrip()


def function_target(function: Function) -> str:
    """``schema.name(identity args)``, the form DROP and COMMENT expect."""
    return f"{qualified_name(function.schema, function.name)}({function.identity_arguments})"


def generate_create_view(view: View, *, or_replace: bool = True) -> str:
    head = "CREATE OR REPLACE VIEW" if or_replace else "CREATE VIEW"
    return f"{head} {qualified_name(view.schema, view.name)} AS\n{_query_body(view.definition)};"


def generate_create_materialized_view(view: MaterializedView) -> str:
    data = "WITH DATA" if view.populated else "WITH NO DATA"
    name = qualified_name(view.schema, view.name)
    return f"CREATE MATERIALIZED VIEW {name} AS\n{_query_body(view.definition)}\n{data};"


def _argument(arg: FunctionArgument) -> str:
    parts = []
    if arg.mode and arg.mode.upper() != "IN":
        parts.append(arg.mode.upper())
    if arg.name:
        parts.append(quote_ident(arg.name))
    parts.append(arg.data_type)
    if arg.default is not None:
        parts.append(f"DEFAULT {arg.default}")
    return " ".join(parts)


def _dollar_tag(body: str) -> str:
    tag = "$function$"
    counter = 0
    while tag in body:
        counter += 1
        tag = f"$function{counter}$"
    return tag


def generate_create_function(function: Function) -> str:
    """Build a CREATE OR REPLACE FUNCTION statement.

    The body is dollar quoted with a tag that does not occur inside it.
    """
    arguments = ", ".join(_argument(arg) for arg in function.arguments)
    options = [function.volatility.upper()]
    if function.strict:
        options.append("STRICT")
    if function.security_definer:
        options.append("SECURITY DEFINER")
    tag = _dollar_tag(function.body)
    return (
        f"CREATE OR REPLACE FUNCTION {qualified_name(function.schema, function.name)}({arguments})\n"
        f"RETURNS {function.return_type}\n"
        f"LANGUAGE {function.language}\n"
        f"{' '.join(options)}\n"
        f"AS {tag}\n{function.body.strip()}\n{tag};"
    )


def generate_create_sequence(sequence: Sequence) -> str:
    parts = [
        f"CREATE SEQUENCE {qualified_name(sequence.schema, sequence.name)}",
        f"AS {sequence.data_type}",
        f"INCREMENT BY {sequence.increment}",
        f"MINVALUE {sequence.min_value}" if sequence.min_value is not None else "NO MINVALUE",
        f"MAXVALUE {sequence.max_value}" if sequence.max_value is not None else "NO MAXVALUE",
        f"START WITH {sequence.start}",
        f"CACHE {sequence.cache}",
        "CYCLE" if sequence.cycle else "NO CYCLE",
    ]
    if sequence.owned_by:
        table, _, column = sequence.owned_by.rpartition(".")
        owner = f"{qualified_name(sequence.schema, table)}.{quote_ident(column)}" if table else sequence.owned_by
        parts.append(f"OWNED BY {owner}")
    return "\n".join(parts) + ";"


def generate_create_type(db_type: DbType) -> str:
    """Build CREATE TYPE for enums and CREATE DOMAIN for domains.

    Composite and range types carry no attribute list in the snapshot, so
    they render as a shell type.
    """
    name = qualified_name(db_type.schema, db_type.name)
    kind = db_type.type_kind.lower()
    if kind == "enum":
        values = ", ".join(quote_literal(value) for value in db_type.enum_values)
        return f"CREATE TYPE {name} AS ENUM ({values});"
    if kind == "domain" and db_type.base_type:
        return f"CREATE DOMAIN {name} AS {db_type.base_type};"
    return f"CREATE TYPE {name};"


def generate_create_schema(schema: Schema) -> str:
    statement = f"CREATE SCHEMA IF NOT EXISTS {quote_ident(schema.name)}"
    if schema.owner:
        statement += f" AUTHORIZATION {quote_ident(schema.owner)}"
    return statement + ";"


def generate_comment(
    entity: Schema | Table | View | MaterializedView | Function | Sequence | DbType,
    comment: str | None = None,
) -> str:
    """Build COMMENT ON for an object.

    Uses ``comment`` when given, otherwise the entity's own comment. A
    missing comment renders ``IS NULL``, which removes it.
    """
    text = comment if comment is not None else entity.comment
    if isinstance(entity, Schema):
        target = quote_ident(entity.name)
    elif isinstance(entity, Function):
        target = function_target(entity)
    else:
        target = qualified_name(entity.schema, entity.name)
    value = "NULL" if text is None else quote_literal(text)
    return f"COMMENT ON {OBJECT_TYPES[entity.kind]} {target} IS {value};"
