"""Fuzzy search over every object name in a schema snapshot.

A candidate is admitted when the query is a case-insensitive subsequence of
its name, then ranked:

    exact match          100
    prefix match          90
    substring match       80
    subsequence match     sum of run lengths, capped below 80

The subsequence score grows with the length of contiguous runs, so
``user_accounts`` ranks ``usac`` (two runs of two) above a scattered match
of the same length.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence

from schemascope.config import DEFAULT_SEARCH_LIMIT
from schemascope.domains.explorer.domain.entities import Schema
from schemascope.shared.core.utils import match_positions

logger = logging.getLogger(__name__)

EXACT_SCORE = 100
PREFIX_SCORE = 90
SUBSTRING_SCORE = 80
MAX_SUBSEQUENCE_SCORE = SUBSTRING_SCORE - 1


class SearchKind(str, Enum):
    TABLE = "table"
    VIEW = "view"
    MATERIALIZED_VIEW = "materialized_view"
    FUNCTION = "function"
    COLUMN = "column"
    SEQUENCE = "sequence"
    TYPE = "type"


@dataclass(frozen=True)
class SearchResult:
    kind: SearchKind
    schema: str
    name: str
    score: int
    parent_name: str | None = None

    @property
    def qualified_name(self) -> str:
        if self.parent_name:
            return f"{self.schema}.{self.parent_name}.{self.name}"
        return f"{self.schema}.{self.name}"


def is_subsequence_match(candidate: str, pattern: str) -> bool:
    """True when every pattern character occurs in candidate, in order."""
    matched, _ = match_positions(pattern, candidate)
    return matched


def score(candidate: str, pattern: str) -> int:
    """Score how well ``pattern`` matches ``candidate`` (0 when it doesn't)."""
    c_lower = candidate.lower()
    p_lower = pattern.lower()

    if c_lower == p_lower:
        return EXACT_SCORE
    if c_lower.startswith(p_lower):
        return PREFIX_SCORE
    if p_lower in c_lower:
        return SUBSTRING_SCORE

    total = 0
    consecutive = 0
    idx = 0
    for char in c_lower:
        if idx < len(p_lower) and char == p_lower[idx]:
            consecutive += 1
            total += consecutive
            idx += 1
        else:
            consecutive = 0

    if idx < len(p_lower):
        return 0
    return min(total, MAX_SUBSEQUENCE_SCORE)


def _iter_candidates(schemas: Sequence[Schema]) -> Iterator[tuple[SearchKind, str, str, str | None]]:
    for schema in schemas:
        for table in schema.tables:
            yield SearchKind.TABLE, schema.name, table.name, None
        for table in schema.tables:
            for column in table.columns or ():
                yield SearchKind.COLUMN, schema.name, column.name, table.name
        for view in schema.views:
            yield SearchKind.VIEW, schema.name, view.name, None
        for matview in schema.materialized_views:
            yield SearchKind.MATERIALIZED_VIEW, schema.name, matview.name, None
        for function in schema.functions:
            yield SearchKind.FUNCTION, schema.name, function.name, None
        for sequence in schema.sequences:
            yield SearchKind.SEQUENCE, schema.name, sequence.name, None
        for db_type in schema.types:
            yield SearchKind.TYPE, schema.name, db_type.name, None


def search(schemas: Sequence[Schema], query: str, *, limit: int = DEFAULT_SEARCH_LIMIT) -> list[SearchResult]:
    """Find objects whose names fuzzy match ``query``.

    Args:
        schemas: Snapshot to search.
        query: Search text; an empty query returns no results.
        limit: Maximum number of results.

    Returns:
        Results sorted by descending score; equal scores keep snapshot order.
    """
    if not query:
        return []

    results: list[SearchResult] = []
    for kind, schema_name, name, parent in _iter_candidates(schemas):
        if not is_subsequence_match(name, query):
            continue
        results.append(
            SearchResult(kind=kind, schema=schema_name, name=name, score=score(name, query), parent_name=parent)
        )

    results.sort(key=lambda r: r.score, reverse=True)
    logger.debug("Search %r matched %d objects", query, len(results))
    return results[:limit]
