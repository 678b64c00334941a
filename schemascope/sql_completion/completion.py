"""Main SQL completion engine.

Orchestrates context detection and candidate generation.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import NamedTuple

from schemascope.config import Settings
from schemascope.domains.explorer.domain.entities import MaterializedView, View
from schemascope.domains.explorer.search import is_subsequence_match, score

from .catalog import SchemaCatalog
from .context import (
    ColumnContext,
    CompletionContext,
    FunctionContext,
    GeneralContext,
    SchemaContext,
    TableContext,
    analyze,
)
from .core import (
    SQL_OPERATORS,
    clean_sql,
    current_statement,
    find_current_clause,
    get_all_functions,
    get_all_keywords,
    get_current_word,
    get_last_token_info,
    is_inside_comment,
    is_inside_string,
)

logger = logging.getLogger(__name__)


class SuggestionType(Enum):
    """Types of SQL completion suggestions."""

    KEYWORD = auto()
    SCHEMA = auto()
    TABLE = auto()
    VIEW = auto()
    COLUMN = auto()
    FUNCTION = auto()
    OPERATOR = auto()


class Completion(NamedTuple):
    """A completion candidate."""

    label: str
    type: SuggestionType
    detail: str | None = None


def _schema_candidates(catalog: SchemaCatalog) -> list[Completion]:
    return [Completion(name, SuggestionType.SCHEMA) for name in catalog.schema_names()]


def _table_candidates(catalog: SchemaCatalog, schema: str | None) -> list[Completion]:
    results = []
    for display, relation in catalog.relation_names(schema):
        if isinstance(relation, MaterializedView):
            results.append(Completion(display, SuggestionType.VIEW, "materialized view"))
        elif isinstance(relation, View):
            results.append(Completion(display, SuggestionType.VIEW, "view"))
        else:
            results.append(Completion(display, SuggestionType.TABLE, "table"))
    return results


def _column_candidates(catalog: SchemaCatalog, context: ColumnContext) -> list[Completion]:
    results = []
    for table in context.tables:
        ref = catalog.find_table(table)
        if ref is None:
            continue
        for column in ref.columns:
            results.append(Completion(column.name, SuggestionType.COLUMN, f"{ref.name}: {column.data_type}"))
    return results


def _function_candidates(catalog: SchemaCatalog, schema: str | None, include_builtins: bool) -> list[Completion]:
    results = [
        Completion(function.name, SuggestionType.FUNCTION, function.return_type)
        for function in catalog.functions(schema)
    ]
    if schema is None and include_builtins:
        results.extend(Completion(name, SuggestionType.FUNCTION, "built-in") for name in get_all_functions())
    return results


def _wants_operator(sql: str) -> bool:
    """After an identifier or ``)`` in WHERE/ON/HAVING, comparison operators come next."""
    if not sql or sql[-1] not in " \t\n":
        return False
    token_value, token_type = get_last_token_info(sql.rstrip())
    if not token_type:
        return False
    if token_type == "Token.Name" or (token_type == "Token.Punctuation" and token_value == ")"):
        return find_current_clause(sql) in ("where", "having", "on")
    return False


def candidates_for_context(
    context: CompletionContext,
    catalog: SchemaCatalog,
    settings: Settings,
    sql: str = "",
) -> list[Completion]:
    """Build the unranked candidate list for a context."""
    if isinstance(context, SchemaContext):
        return _schema_candidates(catalog)
    if isinstance(context, TableContext):
        return _table_candidates(catalog, context.schema)
    if isinstance(context, ColumnContext):
        return _column_candidates(catalog, context)
    if isinstance(context, FunctionContext):
        return _function_candidates(catalog, context.schema, settings.include_functions)

    results: list[Completion] = []
    if _wants_operator(sql):
        results.extend(Completion(op, SuggestionType.OPERATOR) for op in SQL_OPERATORS)
    if settings.include_keywords:
        results.extend(Completion(k, SuggestionType.KEYWORD) for k in get_all_keywords())
    results.extend(_schema_candidates(catalog))
    results.extend(_table_candidates(catalog, None))
    results.extend(_function_candidates(catalog, None, settings.include_functions))
    return results


def rank_candidates(candidates: list[Completion], word: str, limit: int) -> list[Completion]:
    """Filter by fuzzy match on ``word``, rank by score, and drop duplicate labels."""
    if word:
        matching = [c for c in candidates if is_subsequence_match(c.label, word)]
        matching.sort(key=lambda c: score(c.label, word), reverse=True)
    else:
        matching = list(candidates)

    seen: set[str] = set()
    unique: list[Completion] = []
    for candidate in matching:
        key = candidate.label.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
    return unique[:limit]


def get_completions(
    text_before_cursor: str,
    catalog: SchemaCatalog,
    *,
    settings: Settings | None = None,
) -> list[Completion]:
    """Get completion suggestions for the text before the cursor.

    Args:
        text_before_cursor: Editor buffer content up to the caret
        catalog: Name lookups over the current schema snapshot
        settings: Limits and toggles; defaults when omitted

    Returns:
        Ranked list of completion candidates
    """
    settings = settings or Settings()

    if is_inside_string(text_before_cursor) or is_inside_comment(text_before_cursor):
        return []

    context = analyze(text_before_cursor, catalog)
    sql = clean_sql(current_statement(text_before_cursor))
    word = get_current_word(sql)

    candidates = candidates_for_context(context, catalog, settings, sql)
    ranked = rank_candidates(candidates, word, settings.completion_limit)
    logger.debug("%d completions for %s (word=%r)", len(ranked), type(context).__name__, word)
    return ranked


__all__ = [
    "Completion",
    "GeneralContext",
    "SuggestionType",
    "candidates_for_context",
    "get_completions",
    "rank_candidates",
]
