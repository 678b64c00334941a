"""Explorer tree construction and navigation."""

from .builder import build_tree
from .expansion_state import (
    VisibleRow,
    expandable_ids,
    find_node,
    get_node_path,
    iter_nodes,
    prune_expanded,
    visible_rows,
)
from .markup import render_row_label
from .node_ids import escape_segment, folder_id, object_id, split_id

__all__ = [
    "VisibleRow",
    "build_tree",
    "escape_segment",
    "expandable_ids",
    "find_node",
    "folder_id",
    "get_node_path",
    "iter_nodes",
    "object_id",
    "prune_expanded",
    "render_row_label",
    "split_id",
    "visible_rows",
]
