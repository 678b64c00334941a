"""Completion context detection.

Classifies what kind of object the user is about to type from the text
before the cursor. The rules are regular expressions over the literal text,
so they keep working on incomplete statements a parser would reject.

Rules, first match wins:

1. ``ident.partial`` where ident is a schema -> TableContext(schema);
   where ident is a table -> ColumnContext for that table. Skipped after
   ``CALL``, where the qualifier names a function's schema (rule 6).
2. ``alias.partial`` where alias is bound in FROM/JOIN -> ColumnContext.
3. A SELECT projection with no FROM after it, when the statement already
   names tables (e.g. a subquery) -> ColumnContext over them.
4. ``FROM`` / ``JOIN`` + partial -> TableContext(None).
5. ``WHERE`` / ``ON`` / ``AND`` / ``OR`` + partial -> ColumnContext.
6. ``DROP|ALTER SCHEMA`` and ``SET search_path`` -> SchemaContext;
   ``CALL`` / ``EXECUTE`` / ``PERFORM`` -> FunctionContext.
7. Anything else -> GeneralContext.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Union

from schemascope.shared.core.protocols import NameResolver

from .core import (
    IDENT,
    PARTIAL,
    clean_sql,
    current_statement,
    extract_aliases,
    extract_table_names,
    is_inside_comment,
    is_inside_string,
    unquote_ident,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaContext:
    pass


@dataclass(frozen=True)
class TableContext:
    schema: str | None = None


@dataclass(frozen=True)
class ColumnContext:
    tables: list[str] = field(default_factory=list)
    aliases: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FunctionContext:
    schema: str | None = None


@dataclass(frozen=True)
class GeneralContext:
    pass


CompletionContext = Union[SchemaContext, TableContext, ColumnContext, FunctionContext, GeneralContext]

_QUALIFIED_TAIL = re.compile(rf"(?<![\w$\"])(?:({IDENT})\s*\.\s*)?({IDENT})\.{PARTIAL}$")
_LAST_SELECT = re.compile(r"\bSELECT\b(?!.*\bSELECT\b)", re.IGNORECASE | re.DOTALL)
_PROJECTION = re.compile(r'^\s+(?:DISTINCT\s+)?[\w$."*,\s]*$', re.IGNORECASE)
_FROM_WORD = re.compile(r"\bFROM\b", re.IGNORECASE)
_AFTER_FROM = re.compile(rf"\b(?:FROM|JOIN)\s+{PARTIAL}$", re.IGNORECASE)
_AFTER_CONDITION = re.compile(rf"\b(?:WHERE|ON|AND|OR)\s+{PARTIAL}$", re.IGNORECASE)
_SCHEMA_TARGET = re.compile(
    rf"(?:\b(?:DROP|ALTER)\s+SCHEMA\s+(?:IF\s+EXISTS\s+)?|\bSET\s+search_path\s*(?:TO|=)\s*(?:[\w$]+\s*,\s*)*){PARTIAL}$",
    re.IGNORECASE,
)
_FUNCTION_CALL = re.compile(
    rf"\b(?:CALL|EXEC|EXECUTE|PERFORM)\s+(?:({IDENT})\.)?{PARTIAL}$",
    re.IGNORECASE,
)


def _find_alias(aliases: dict[str, str], typed: str) -> tuple[str, str] | None:
    quoted = typed.startswith('"')
    name = unquote_ident(typed)
    for alias, target in aliases.items():
        if alias == name or (not quoted and alias.lower() == name.lower()):
            return alias, target
    return None


def _qualifier_context(sql: str, resolver: NameResolver | None) -> CompletionContext | None:
    match = _QUALIFIED_TAIL.search(sql)
    if not match or _FUNCTION_CALL.search(sql):
        # A qualifier after CALL names the function's schema.
        return None

    outer, ident = match.group(1), match.group(2)

    if resolver is not None:
        if outer is None and resolver.has_schema(ident):
            return TableContext(schema=unquote_ident(ident))
        table = f"{outer}.{ident}" if outer else ident
        if resolver.find_table(table) is not None:
            return ColumnContext(tables=[table], aliases={unquote_ident(ident): table})

    if outer is None:
        found = _find_alias(extract_aliases(sql), ident)
        if found is not None:
            alias, target = found
            return ColumnContext(tables=[target], aliases={alias: target})

    return None


def _projection_context(sql: str) -> CompletionContext | None:
    select = _LAST_SELECT.search(sql)
    if not select:
        return None
    tail = sql[select.end():]
    if not _PROJECTION.match(tail) or _FROM_WORD.search(tail):
        return None
    tables = extract_table_names(sql)
    if not tables:
        return None
    return ColumnContext(tables=tables, aliases=extract_aliases(sql))


def analyze(text_before_cursor: str, resolver: NameResolver | None = None) -> CompletionContext:
    """Classify the completion context at the end of ``text_before_cursor``.

    Args:
        text_before_cursor: Editor buffer content up to the caret.
        resolver: Schema lookups; without one, qualifiers resolve only via aliases.

    Returns:
        A context value. Never raises; anything unrecognised is GeneralContext.
    """
    if is_inside_string(text_before_cursor) or is_inside_comment(text_before_cursor):
        return GeneralContext()

    sql = clean_sql(current_statement(text_before_cursor))

    context = _qualifier_context(sql, resolver)
    if context is None:
        context = _projection_context(sql)
    if context is None and _AFTER_FROM.search(sql):
        context = TableContext()
    if context is None and _AFTER_CONDITION.search(sql):
        context = ColumnContext(tables=extract_table_names(sql), aliases=extract_aliases(sql))
    if context is None and _SCHEMA_TARGET.search(sql):
        context = SchemaContext()
    if context is None:
        call = _FUNCTION_CALL.search(sql)
        if call:
            schema = call.group(1)
            context = FunctionContext(schema=unquote_ident(schema) if schema else None)
    if context is None:
        context = GeneralContext()

    logger.debug("Completion context: %r", context)
    return context
