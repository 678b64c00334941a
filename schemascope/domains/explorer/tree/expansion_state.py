"""Expansion state helpers for the explorer tree.

The expanded/selected state itself belongs to the host UI; these functions
answer questions about a tree given that state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterator

from schemascope.domains.explorer.domain.tree_nodes import TreeNode


@dataclass(frozen=True)
class VisibleRow:
    node: TreeNode
    depth: int


def iter_nodes(root: TreeNode) -> Iterator[TreeNode]:
    """Walk the tree depth-first, parents before children."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_node(root: TreeNode, node_id: str) -> TreeNode | None:
    for node in iter_nodes(root):
        if node.id == node_id:
            return node
    return None


def get_node_path(root: TreeNode, node_id: str) -> list[TreeNode]:
    """Return the chain of nodes from root to ``node_id`` (empty if absent)."""

    def walk(node: TreeNode, trail: list[TreeNode]) -> list[TreeNode] | None:
        trail = [*trail, node]
        if node.id == node_id:
            return trail
        for child in node.children:
            found = walk(child, trail)
            if found is not None:
                return found
        return None

    return walk(root, []) or []


def expandable_ids(root: TreeNode) -> set[str]:
    """Ids of every node that can be expanded ("expand all")."""
    return {node.id for node in iter_nodes(root) if node.is_expandable}


def prune_expanded(root: TreeNode, expanded: AbstractSet[str]) -> set[str]:
    """Keep only the expanded ids that still exist in a rebuilt tree."""
    present = {node.id for node in iter_nodes(root)}
    return {node_id for node_id in expanded if node_id in present}


def visible_rows(
    root: TreeNode,
    expanded: AbstractSet[str],
    filter_text: str = "",
    *,
    include_root: bool = False,
) -> list[VisibleRow]:
    """Flatten the tree into the rows a UI should show.

    Without a filter, children are shown only below expanded nodes. With a
    filter, a node is shown when its label contains the filter text
    (case-insensitive) or any descendant's does; nodes with matching
    descendants are expanded automatically.
    """
    rows: list[VisibleRow] = []
    needle = filter_text.lower()

    def has_matching_descendant(node: TreeNode) -> bool:
        for child in node.children:
            if needle in child.label.lower() or has_matching_descendant(child):
                return True
        return False

    def flatten(nodes: tuple[TreeNode, ...], depth: int) -> None:
        for node in nodes:
            if not needle:
                rows.append(VisibleRow(node, depth))
                if node.id in expanded:
                    flatten(node.children, depth + 1)
                continue

            descendant_matches = has_matching_descendant(node)
            if needle in node.label.lower() or descendant_matches:
                rows.append(VisibleRow(node, depth))
                if descendant_matches or node.id in expanded:
                    flatten(node.children, depth + 1)

    if include_root:
        flatten((root,), 0)
    else:
        flatten(root.children, 0)
    return rows
