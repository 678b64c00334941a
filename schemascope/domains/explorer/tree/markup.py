"""Rich markup for explorer rows."""

from __future__ import annotations

from rich.markup import escape as escape_markup

from schemascope.domains.explorer.domain.tree_nodes import NodeKind, TreeNode
from schemascope.shared.core.utils import highlight_matches, match_positions

_DIM_KINDS = {NodeKind.COLUMN, NodeKind.INDEX, NodeKind.FOREIGN_KEY, NodeKind.TRIGGER, NodeKind.POLICY}


def render_row_label(node: TreeNode, *, highlight: str | None = None) -> str:
    """Render a node as a single line of Rich markup.

    Args:
        node: The row to render.
        highlight: Optional fuzzy pattern whose matched characters are emphasised.

    Returns:
        Markup such as ``orders [italic dim]8.0 KB[/]`` or ``Tables [dim](3)[/]``.
    """
    label = node.label
    if highlight:
        matched, indices = match_positions(highlight, label)
        text = highlight_matches(label, indices) if matched else escape_markup(label)
    else:
        text = escape_markup(label)

    if node.kind in _DIM_KINDS and not highlight:
        text = f"[dim]{text}[/]"

    if node.kind.is_folder:
        return f"{text} [dim]({escape_markup(node.badge or '0')})[/]"

    parts = [text]
    if node.secondary_text:
        parts.append(f"[italic dim]{escape_markup(node.secondary_text)}[/]")
    if node.badge:
        parts.append(f"[dim]\\[{escape_markup(node.badge)}][/]")
    return " ".join(parts)
