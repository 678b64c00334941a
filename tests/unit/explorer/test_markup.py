"""Tests for row markup and node id helpers."""

from schemascope.domains.explorer.domain import NodeKind, TreeNode
from schemascope.domains.explorer.tree import escape_segment, folder_id, object_id, render_row_label, split_id


class TestRenderRowLabel:
    """Tests for Rich markup of explorer rows."""

    def test_folder_shows_count(self):
        node = TreeNode(id="c:tables", name="Tables", kind=NodeKind.TABLES_FOLDER, badge="3")
        assert render_row_label(node) == "Tables [dim](3)[/]"

    def test_secondary_text_and_badge(self):
        node = TreeNode(
            id="c:index:i",
            name="users_email_key",
            kind=NodeKind.TABLE,
            secondary_text="8.0 KB",
            badge="unique",
        )
        assert render_row_label(node) == "users_email_key [italic dim]8.0 KB[/] [dim]\\[unique][/]"

    def test_detail_rows_are_dimmed(self):
        node = TreeNode(id="c:column:id", name="id", kind=NodeKind.COLUMN)
        assert render_row_label(node) == "[dim]id[/]"

    def test_label_is_escaped(self):
        node = TreeNode(id="c:table:x", name="[bold]x", kind=NodeKind.TABLE)
        assert render_row_label(node) == "\\[bold]x"

    def test_highlight_marks_matched_characters(self):
        node = TreeNode(id="c:table:orders", name="orders", kind=NodeKind.TABLE)
        rendered = render_row_label(node, highlight="ods")
        assert "[bold yellow]o[/bold yellow]" in rendered
        assert "[bold yellow]d[/bold yellow]" in rendered
        assert "[bold yellow]s[/bold yellow]" in rendered

    def test_highlight_without_match_renders_plain(self):
        node = TreeNode(id="c:table:orders", name="orders", kind=NodeKind.TABLE)
        assert render_row_label(node, highlight="xyz") == "orders"


class TestNodeIdHelpers:
    def test_object_and_folder_ids(self):
        assert folder_id("conn", "schemas") == "conn:schemas"
        assert object_id("conn:schemas", "schema", "public") == "conn:schemas:schema:public"

    def test_escape_segment(self):
        assert escape_segment("a:b\\c") == "a\\:b\\\\c"

    def test_split_id_unescapes(self):
        node_id = object_id("conn:schemas", "schema", "we:ird")
        assert split_id(node_id) == ["conn", "schemas", "schema", "we:ird"]
