"""Route explorer tree actions to the DDL renderers."""

from __future__ import annotations

import logging
from typing import Any, Callable

from schemascope.domains.explorer.domain.entities import EntityKind
from schemascope.domains.explorer.domain.tree_nodes import TreeNode
from schemascope.errors import UnsupportedOperationError

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
    generate_drop_entity,
    generate_refresh_materialized_view,
    generate_reindex,
    generate_truncate,
)
from .tables import generate_create_index, generate_create_table

logger = logging.getLogger(__name__)

Renderer = Callable[..., Any]

# (entity kind, operation) -> renderer
OPERATIONS: dict[tuple[EntityKind, str], Renderer] = {
    (EntityKind.SCHEMA, "create"): generate_create_schema,
    (EntityKind.SCHEMA, "reindex"): generate_reindex,
    (EntityKind.TABLE, "create"): generate_create_table,
    (EntityKind.TABLE, "truncate"): generate_truncate,
    (EntityKind.TABLE, "reindex"): generate_reindex,
    (EntityKind.VIEW, "create"): generate_create_view,
    (EntityKind.MATERIALIZED_VIEW, "create"): generate_create_materialized_view,
    (EntityKind.MATERIALIZED_VIEW, "refresh"): generate_refresh_materialized_view,
    (EntityKind.MATERIALIZED_VIEW, "reindex"): generate_reindex,
    (EntityKind.INDEX, "create"): generate_create_index,
    (EntityKind.INDEX, "reindex"): generate_reindex,
    (EntityKind.FUNCTION, "create"): generate_create_function,
    (EntityKind.SEQUENCE, "create"): generate_create_sequence,
    (EntityKind.TYPE, "create"): generate_create_type,
}

_DROPPABLE = frozenset(
    {
        EntityKind.SCHEMA,
        EntityKind.TABLE,
        EntityKind.VIEW,
        EntityKind.MATERIALIZED_VIEW,
        EntityKind.INDEX,
        EntityKind.FOREIGN_KEY,
        EntityKind.FUNCTION,
        EntityKind.SEQUENCE,
        EntityKind.TYPE,
        EntityKind.TRIGGER,
        EntityKind.POLICY,
    }
)
_COMMENTABLE = frozenset(
    {
        EntityKind.SCHEMA,
        EntityKind.TABLE,
        EntityKind.VIEW,
        EntityKind.MATERIALIZED_VIEW,
        EntityKind.FUNCTION,
        EntityKind.SEQUENCE,
        EntityKind.TYPE,
    }
)


def _renderer_for(kind: EntityKind, operation: str) -> Renderer | None:
    if operation == "drop" and kind in _DROPPABLE:
        return generate_drop_entity
    if operation == "comment" and kind in _COMMENTABLE:
        return generate_comment
    return OPERATIONS.get((kind, operation))


def generate_for_node(node: TreeNode, operation: str, **flags: Any) -> list[str]:
    """Render the SQL for an action on a tree node.

    Args:
        node: Tree node whose payload is the target entity.
        operation: One of create, drop, truncate, reindex, refresh, comment.
        **flags: Passed to the renderer (``cascade``, ``concurrently``, ...).

    Returns:
        Statements in execution order.

    Raises:
        UnsupportedOperationError: If the node has no entity or the
            operation has no SQL form for its kind.
    """
    entity = node.payload
    kind = getattr(entity, "kind", None)
    if not isinstance(kind, EntityKind):
        raise UnsupportedOperationError(operation, node.kind.value)

    renderer = _renderer_for(kind, operation.lower())
    if renderer is None:
        raise UnsupportedOperationError(operation, kind.value)

    result = renderer(entity, **flags)
    logger.debug("Rendered %s for %s %s", operation, kind.value, node.id)
    return result if isinstance(result, list) else [result]
