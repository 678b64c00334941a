"""Name lookups over a schema snapshot for SQL completion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from schemascope.config import DEFAULT_SCHEMA
from schemascope.domains.explorer.domain.entities import (
    Column,
    EntityKind,
    Function,
    MaterializedView,
    Schema,
    Table,
    View,
)

from .core import split_table_ref, unquote_ident

Relation = Table | View | MaterializedView


@dataclass(frozen=True)
class TableRef:
    """A resolved table, view or materialized view."""

    schema: str
    name: str
    kind: EntityKind
    columns: tuple[Column, ...] = ()

    @property
    def qualified_name(self) -> str:
        return f"{self.schema}.{self.name}"


def _matches(candidate: str, typed: str) -> bool:
    # Quoted names are exact, bare names fold case.
    if typed.startswith('"'):
        return candidate == unquote_ident(typed)
    return candidate.lower() == typed.lower()


class SchemaCatalog:
    """Resolve names typed in the editor against a snapshot.

    Implements the NameResolver protocol. Unqualified relation names are
    looked up in the default schema first, then in every schema in snapshot
    order.
    """

    def __init__(self, schemas: Sequence[Schema], default_schema: str = DEFAULT_SCHEMA):
        self._schemas = tuple(schemas)
        self._default_schema = default_schema

    @property
    def schemas(self) -> tuple[Schema, ...]:
        return self._schemas

    @property
    def default_schema(self) -> str:
        return self._default_schema

    def _find_schema(self, name: str) -> Schema | None:
        name = name.strip()
        for schema in self._schemas:
            if _matches(schema.name, name):
                return schema
        return None

    def has_schema(self, name: str) -> bool:
        return self._find_schema(name) is not None

    def _search_order(self) -> list[Schema]:
        default = [s for s in self._schemas if s.name == self._default_schema]
        rest = [s for s in self._schemas if s.name != self._default_schema]
        return default + rest

    @staticmethod
    def _relations(schema: Schema) -> Iterator[Relation]:
        yield from schema.tables
        yield from schema.views
        yield from schema.materialized_views

    @staticmethod
    def _to_ref(relation: Relation) -> TableRef:
        return TableRef(
            schema=relation.schema,
            name=relation.name,
            kind=relation.kind,
            columns=tuple(relation.columns or ()),
        )

    def find_table(self, name: str) -> TableRef | None:
        parts = split_table_ref(name) or [name.strip()]
        if len(parts) >= 2:
            schema = self._find_schema(parts[-2])
            candidates = [schema] if schema is not None else []
        else:
            candidates = self._search_order()

        for schema in candidates:
            for relation in self._relations(schema):
                if _matches(relation.name, parts[-1]):
                    return self._to_ref(relation)
        return None

    def schema_names(self) -> list[str]:
        return [schema.name for schema in self._schemas]

    def relation_names(self, schema: str | None = None) -> list[tuple[str, Relation]]:
        """Return ``(display name, relation)`` pairs.

        With a schema, names are bare. Without one, relations outside the
        default schema are shown qualified.
        """
        if schema is not None:
            found = self._find_schema(schema)
            return [(r.name, r) for r in self._relations(found)] if found else []

        pairs: list[tuple[str, Relation]] = []
        for s in self._search_order():
            for relation in self._relations(s):
                display = relation.name if s.name == self._default_schema else f"{s.name}.{relation.name}"
                pairs.append((display, relation))
        return pairs

    def functions(self, schema: str | None = None) -> list[Function]:
        if schema is not None:
            found = self._find_schema(schema)
            return list(found.functions) if found else []
        return [f for s in self._search_order() for f in s.functions]
