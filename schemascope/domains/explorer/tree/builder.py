"""Tree construction for the schema explorer.

``build_tree`` turns a schema snapshot into an immutable forest of
``TreeNode`` values. Building never fails: absent optional attributes render
as empty strings and empty collections simply drop their folder.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Sequence

from schemascope.domains.explorer.domain.entities import (
    Column,
    DbType,
    ForeignKey,
    Function,
    Index,
    MaterializedView,
    Policy,
    Schema,
    Table,
    Trigger,
    View,
)
from schemascope.domains.explorer.domain.entities import Sequence as SequenceEntity
from schemascope.domains.explorer.domain.tree_nodes import FOLDER_LABELS, NodeKind, TreeNode

from . import tooltips
from .node_ids import folder_id, object_id

logger = logging.getLogger(__name__)


def sort_by_name(items: Iterable[Any]) -> list[Any]:
    """Lexicographic display order, case-insensitive first."""
    return sorted(items, key=lambda item: (item.name.lower(), item.name))


def sort_columns(columns: Iterable[Column]) -> list[Column]:
    """Columns keep their ordinal position; unpositioned ones follow by name."""
    return sorted(
        columns,
        key=lambda c: (
            c.ordinal_position is None,
            c.ordinal_position or 0,
            c.name.lower(),
            c.name,
        ),
    )


def folder_node(
    parent_id: str,
    kind: NodeKind,
    children: Sequence[TreeNode],
    *,
    owning_schema: str | None = None,
) -> TreeNode:
    return TreeNode(
        id=folder_id(parent_id, kind.value),
        name=FOLDER_LABELS[kind],
        kind=kind,
        owning_schema=owning_schema,
        badge=str(len(children)),
        children=tuple(children),
    )


def make_folder(
    parent_id: str,
    kind: NodeKind,
    children: Sequence[TreeNode],
    *,
    owning_schema: str | None = None,
) -> TreeNode | None:
    """Wrap children in a folder row, or return None for an empty folder."""
    if not children:
        return None
    return folder_node(parent_id, kind, children, owning_schema=owning_schema)


def _folders(*candidates: TreeNode | None) -> tuple[TreeNode, ...]:
    return tuple(node for node in candidates if node is not None)


def _leaf_folder(
    parent_id: str,
    kind: NodeKind,
    items: Iterable[Any],
    build: Callable[[str, Any], TreeNode],
    schema: str | None,
) -> TreeNode | None:
    owner_id = folder_id(parent_id, kind.value)
    children = [build(owner_id, item) for item in items]
    return make_folder(parent_id, kind, children, owning_schema=schema)


def build_column_node(parent_id: str, column: Column, schema: str | None) -> TreeNode:
    return TreeNode(
        id=object_id(parent_id, NodeKind.COLUMN.value, column.name),
        name=column.name,
        kind=NodeKind.COLUMN,
        display_label=tooltips.column_label(column),
        owning_schema=schema,
        tooltip=tooltips.column_tooltip(column),
        secondary_text=column.data_type or None,
        payload=column,
    )


def build_index_node(parent_id: str, index: Index) -> TreeNode:
    return TreeNode(
        id=object_id(parent_id, NodeKind.INDEX.value, index.name),
        name=index.name,
        kind=NodeKind.INDEX,
        owning_schema=index.schema,
        badge="unique" if index.unique else None,
        tooltip=tooltips.index_tooltip(index),
        secondary_text=index.method.lower() or None,
        payload=index,
    )


def build_foreign_key_node(parent_id: str, fk: ForeignKey) -> TreeNode:
    return TreeNode(
        id=object_id(parent_id, NodeKind.FOREIGN_KEY.value, fk.name),
        name=fk.name,
        kind=NodeKind.FOREIGN_KEY,
        owning_schema=fk.schema,
        tooltip=tooltips.foreign_key_tooltip(fk),
        secondary_text=fk.ref_table,
        payload=fk,
    )


def build_trigger_node(parent_id: str, trigger: Trigger) -> TreeNode:
    events = " OR ".join(trigger.events)
    return TreeNode(
        id=object_id(parent_id, NodeKind.TRIGGER.value, trigger.name),
        name=trigger.name,
        kind=NodeKind.TRIGGER,
        owning_schema=trigger.schema,
        badge=None if trigger.enabled else "disabled",
        tooltip=f"{trigger.timing} {events}".strip(),
        secondary_text=trigger.function_name or None,
        payload=trigger,
    )


def build_policy_node(parent_id: str, policy: Policy) -> TreeNode:
    mode = "PERMISSIVE" if policy.permissive else "RESTRICTIVE"
    return TreeNode(
        id=object_id(parent_id, NodeKind.POLICY.value, policy.name),
        name=policy.name,
        kind=NodeKind.POLICY,
        owning_schema=policy.schema,
        tooltip=f"{mode} FOR {policy.command}",
        secondary_text=policy.command,
        payload=policy,
    )


def build_table_node(parent_id: str, table: Table) -> TreeNode:
    node_id = object_id(parent_id, NodeKind.TABLE.value, table.name)
    size_text = tooltips.table_size_text(table)

    if table.columns is None:
        # Details not introspected yet; the loader fills them in on expand.
        children: tuple[TreeNode, ...] = ()
        lazy = True
    else:
        schema = table.schema
        children = _folders(
            _leaf_folder(
                node_id,
                NodeKind.COLUMNS_FOLDER,
                sort_columns(table.columns),
                lambda pid, column: build_column_node(pid, column, schema),
                schema,
            ),
            _leaf_folder(node_id, NodeKind.INDEXES_FOLDER, sort_by_name(table.indexes), build_index_node, schema),
            _leaf_folder(
                node_id,
                NodeKind.FOREIGN_KEYS_FOLDER,
                sort_by_name(table.foreign_keys),
                build_foreign_key_node,
                schema,
            ),
            _leaf_folder(node_id, NodeKind.TRIGGERS_FOLDER, sort_by_name(table.triggers), build_trigger_node, schema),
            _leaf_folder(node_id, NodeKind.POLICIES_FOLDER, sort_by_name(table.policies), build_policy_node, schema),
        )
        lazy = False

    return TreeNode(
        id=node_id,
        name=table.name,
        kind=NodeKind.TABLE,
        owning_schema=table.schema,
        tooltip=tooltips.table_tooltip(table),
        secondary_text=size_text or None,
        children=children,
        has_lazy_children=lazy,
        payload=table,
    )


def build_view_node(parent_id: str, view: View | MaterializedView) -> TreeNode:
    materialized = isinstance(view, MaterializedView)
    kind = NodeKind.MATERIALIZED_VIEW if materialized else NodeKind.VIEW
    node_id = object_id(parent_id, kind.value, view.name)
    children: tuple[TreeNode, ...] = ()
    if view.columns:
        children = _folders(
            _leaf_folder(
                node_id,
                NodeKind.COLUMNS_FOLDER,
                sort_columns(view.columns),
                lambda pid, column: build_column_node(pid, column, view.schema),
                view.schema,
            ),
            _leaf_folder(
                node_id,
                NodeKind.INDEXES_FOLDER,
                sort_by_name(view.indexes) if materialized else [],
                build_index_node,
                view.schema,
            ),
        )
    return TreeNode(
        id=node_id,
        name=view.name,
        kind=kind,
        display_label=f"{view.name} (materialized)" if materialized else None,
        owning_schema=view.schema,
        tooltip=view.comment or None,
        children=children,
        payload=view,
    )


def build_function_node(parent_id: str, function: Function) -> TreeNode:
    return TreeNode(
        id=object_id(parent_id, NodeKind.FUNCTION.value, function.signature),
        name=function.name,
        kind=NodeKind.FUNCTION,
        display_label=function.signature,
        owning_schema=function.schema,
        tooltip=f"{function.language} {function.volatility}".strip(),
        secondary_text=function.return_type or None,
        payload=function,
    )


def build_sequence_node(parent_id: str, sequence: SequenceEntity) -> TreeNode:
    return TreeNode(
        id=object_id(parent_id, NodeKind.SEQUENCE.value, sequence.name),
        name=sequence.name,
        kind=NodeKind.SEQUENCE,
        owning_schema=sequence.schema,
        tooltip=f"OWNED BY {sequence.owned_by}" if sequence.owned_by else None,
        secondary_text=sequence.data_type or None,
        payload=sequence,
    )


def build_type_node(parent_id: str, db_type: DbType) -> TreeNode:
    tooltip = None
    if db_type.enum_values:
        tooltip = ", ".join(db_type.enum_values)
    elif db_type.base_type:
        tooltip = db_type.base_type
    return TreeNode(
        id=object_id(parent_id, NodeKind.TYPE.value, db_type.name),
        name=db_type.name,
        kind=NodeKind.TYPE,
        owning_schema=db_type.schema,
        tooltip=tooltip,
        secondary_text=db_type.type_kind or None,
        payload=db_type,
    )


def build_schema_node(parent_id: str, schema: Schema) -> TreeNode:
    node_id = object_id(parent_id, NodeKind.SCHEMA.value, schema.name)
    name = schema.name
    views: list[View | MaterializedView] = sort_by_name([*schema.views, *schema.materialized_views])
    children = _folders(
        _leaf_folder(node_id, NodeKind.TABLES_FOLDER, sort_by_name(schema.tables), build_table_node, name),
        _leaf_folder(node_id, NodeKind.VIEWS_FOLDER, views, build_view_node, name),
        _leaf_folder(
            node_id,
            NodeKind.FUNCTIONS_FOLDER,
            sorted(schema.functions, key=lambda f: (f.name.lower(), f.name, f.identity_arguments)),
            build_function_node,
            name,
        ),
        _leaf_folder(node_id, NodeKind.SEQUENCES_FOLDER, sort_by_name(schema.sequences), build_sequence_node, name),
        _leaf_folder(node_id, NodeKind.TYPES_FOLDER, sort_by_name(schema.types), build_type_node, name),
    )
    return TreeNode(
        id=node_id,
        name=name,
        kind=NodeKind.SCHEMA,
        owning_schema=name,
        tooltip=f"Owner: {schema.owner}" if schema.owner else None,
        children=children,
        payload=schema,
    )


def build_tree(root_id: str, schemas: Sequence[Schema], *, label: str | None = None) -> TreeNode:
    """Build the explorer tree for one connection.

    Args:
        root_id: Id of the connection root; every descendant id starts with it.
        schemas: Snapshot schemas, in the order they should be displayed.
        label: Optional display label for the connection row.

    Returns:
        The connection node. Its only child is the Schemas folder, which is
        present even when there are no schemas.
    """
    schemas_folder_id = folder_id(root_id, NodeKind.SCHEMAS_FOLDER.value)
    schema_nodes = [build_schema_node(schemas_folder_id, schema) for schema in schemas]
    schemas_folder = folder_node(root_id, NodeKind.SCHEMAS_FOLDER, schema_nodes)

    logger.debug("Built explorer tree %s with %d schemas", root_id, len(schema_nodes))
    return TreeNode(
        id=root_id,
        name=root_id,
        kind=NodeKind.CONNECTION,
        display_label=label,
        children=(schemas_folder,),
    )
