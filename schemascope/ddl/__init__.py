"""PostgreSQL DDL rendering for snapshot entities.

Pure string construction: nothing here validates SQL semantics or talks to
a server. Statements are terminated with ``;`` and ready to execute.
"""

from .dispatch import generate_for_node
from .objects import (
    generate_comment,
    generate_create_function,
    generate_create_materialized_view,
    generate_create_schema,
    generate_create_sequence,
    generate_create_type,
    generate_create_view,
)
from .operations import (
    generate_drop,
    generate_drop_entity,
    generate_refresh_materialized_view,
    generate_reindex,
    generate_truncate,
)
from .quoting import qualified_name, quote_ident, quote_literal
from .tables import (
    generate_add_column,
    generate_column_comment,
    generate_create_index,
    generate_create_table,
    generate_drop_column,
    generate_rename_column,
    generate_rename_table,
    generate_set_not_null,
)

__all__ = [
    "generate_add_column",
    "generate_column_comment",
    "generate_comment",
    "generate_create_function",
    "generate_create_index",
    "generate_create_materialized_view",
    "generate_create_schema",
    "generate_create_sequence",
    "generate_create_table",
    "generate_create_type",
    "generate_create_view",
    "generate_drop",
    "generate_drop_column",
    "generate_drop_entity",
    "generate_for_node",
    "generate_refresh_materialized_view",
    "generate_reindex",
    "generate_rename_column",
    "generate_rename_table",
    "generate_set_not_null",
    "generate_truncate",
    "qualified_name",
    "quote_ident",
    "quote_literal",
]
