"""Protocols for dependency injection in schemascope.

The context analyzer only needs to ask a few questions about the schema;
any object with these methods can answer them, which keeps the analyzer
testable without a full snapshot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from schemascope.sql_completion.catalog import TableRef


@runtime_checkable
class NameResolver(Protocol):
    """Protocol for schema name lookups used during completion."""

    def has_schema(self, name: str) -> bool:
        """Return True if ``name`` is a known schema.

        Args:
            name: Schema name as typed, possibly quoted.
        """
        ...

    def find_table(self, name: str) -> TableRef | None:
        """Resolve a table, view or materialized view.

        Args:
            name: ``table`` or ``schema.table``, parts possibly quoted.

        Returns:
            The resolved reference, or None when nothing matches.
        """
        ...
